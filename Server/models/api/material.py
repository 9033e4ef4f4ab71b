"""
GreenPlan Server - Material API Models

Pydantic models for recyclable material endpoints.
"""

from typing import Optional
from pydantic import BaseModel, Field


class MaterialRequest(BaseModel):
    """Request model for creating or updating a material type"""
    material_name: str = Field(min_length=1)
    icon_url: Optional[str] = None


class MaterialResponse(BaseModel):
    """Response model for a material type"""
    id: int
    material_name: str
    icon_url: Optional[str] = None
