"""
GreenPlan Server - Message API Models

Generic acknowledgement bodies returned by mutating endpoints.
"""

from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Response model carrying a human-readable message"""
    message: str


class CreatedResponse(BaseModel):
    """Response model for endpoints that create a row"""
    message: str
    id: int
