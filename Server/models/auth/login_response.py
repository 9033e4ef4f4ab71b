"""
GreenPlan Server - Login Response Model

Pydantic model for login endpoint response.
"""

from pydantic import BaseModel


class LoginResponse(BaseModel):
    """Response model for login endpoint"""
    token: str
    role: str
    username: str
    expires_in: int  # Seconds until token expiration
