"""
GreenPlan Server - Drop-off Point API Models

Pydantic models for drop-off point endpoints.
"""

from typing import List, Optional
from pydantic import BaseModel, Field

from models.api.row_id import RowId


class PointRequest(BaseModel):
    """
    Request model for creating or updating a drop-off point

    materials replaces the full set of accepted material ids when supplied.
    Leaving it out keeps the current set; an empty list clears it.
    """
    name: str = Field(min_length=1)
    address: str
    postal_code: str
    latitude: float = Field(ge=-90, le=90, allow_inf_nan=False)
    longitude: float = Field(ge=-180, le=180, allow_inf_nan=False)
    status: Optional[str] = None
    materials: Optional[List[RowId]] = None


class PointResponse(BaseModel):
    """Response model for a drop-off point with its accepted materials"""
    id: int
    name: str
    address: str
    postal_code: str
    latitude: float
    longitude: float
    status: str
    accepted_materials: Optional[str] = None  # Comma-joined material names
    material_ids: List[int] = []
