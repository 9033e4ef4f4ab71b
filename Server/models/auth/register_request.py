"""
GreenPlan Server - Register Request Model

Pydantic model for registration endpoint request.
Every field is optional here so that missing fields are reported by the
registration rules ("All fields are required") instead of schema errors.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    """Request model for registration endpoint"""
    model_config = ConfigDict(populate_by_name=True)

    username: Optional[str] = None
    password: Optional[str] = None
    confirm_password: Optional[str] = Field(default=None, alias="confirmPassword")
    role: Optional[str] = None
