"""
GreenPlan Server - Drop-off Point Endpoints

Any authenticated user can list points; only admins can change them.
"""

from typing import Annotated, List
from fastapi import APIRouter, Depends, Path, status

from auth import AuthenticateRequest
from database import GetPointManager
from managers import PointManager
from models.api import ROW_ID_MAX, CreatedResponse, MessageResponse, PointRequest, PointResponse
from models.auth import Identity


# Create router instance
router = APIRouter()


@router.get("/points", response_model=List[PointResponse], tags=["Points"])
def list_points(
    identity: Identity = Depends(AuthenticateRequest),
    points: PointManager = Depends(GetPointManager)
):
    """
    List all drop-off points with their accepted materials
    """
    return points.ListPoints()


@router.post("/points", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED, tags=["Points"])
def create_point(
    point_request: PointRequest,
    identity: Identity = Depends(AuthenticateRequest),
    points: PointManager = Depends(GetPointManager)
):
    """
    Add a drop-off point (admin only)

    Args:
        point_request: Point fields and optional accepted material ids

    Returns:
        CreatedResponse: Message and new point id
    """
    point_id = points.CreatePoint(point_request, identity)
    return CreatedResponse(message=f"Point {point_request.name} added successfully", id=point_id)


@router.put("/points/{point_id}", response_model=MessageResponse, tags=["Points"])
def update_point(
    point_id: Annotated[int, Path(ge=1, le=ROW_ID_MAX)],
    point_request: PointRequest,
    identity: Identity = Depends(AuthenticateRequest),
    points: PointManager = Depends(GetPointManager)
):
    """
    Update a drop-off point (admin only)

    Supplying materials replaces the full set of accepted materials.
    """
    points.UpdatePoint(point_id, point_request, identity)
    return MessageResponse(message=f"Point {point_request.name} updated successfully")


@router.delete("/points/{point_id}", response_model=MessageResponse, tags=["Points"])
def delete_point(
    point_id: Annotated[int, Path(ge=1, le=ROW_ID_MAX)],
    identity: Identity = Depends(AuthenticateRequest),
    points: PointManager = Depends(GetPointManager)
):
    """
    Delete a drop-off point (admin only)
    """
    points.DeletePoint(point_id, identity)
    return MessageResponse(message="Point deleted successfully")
