"""
GreenPlan Server - Recycling Log API Models

Pydantic models for recycling log endpoints.
"""

from datetime import datetime
from pydantic import BaseModel, Field

from models.api.row_id import RowId


class LogRequest(BaseModel):
    """
    Request model for creating or updating a recycling log

    There is no user_id field: the owner always comes from the token,
    and unknown body fields are ignored.
    """
    point_id: RowId
    material_id: RowId
    weight_kg: float = Field(gt=0, allow_inf_nan=False)


class LogResponse(BaseModel):
    """Response model for a recycling log joined with its names"""
    id: int
    weight_kg: float
    logged_at: datetime
    material_id: int
    point_id: int
    user_id: int
    material_name: str
    point_name: str
    username: str
