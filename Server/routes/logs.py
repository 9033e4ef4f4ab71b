"""
GreenPlan Server - Recycling Log Endpoints

Every authenticated user can read the community feed and add logs.
Updating or deleting a log is limited to its owner and to admins.
"""

from typing import Annotated, List
from fastapi import APIRouter, Depends, Path, status

from auth import AuthenticateRequest
from database import GetLogManager
from managers import LogManager
from models.api import ROW_ID_MAX, CreatedResponse, LogRequest, LogResponse, MessageResponse
from models.auth import Identity


# Create router instance
router = APIRouter()


@router.get("/logs", response_model=List[LogResponse], tags=["Logs"])
def list_logs(
    identity: Identity = Depends(AuthenticateRequest),
    logs: LogManager = Depends(GetLogManager)
):
    """
    Get the 50 most recent logs from all users, newest first
    """
    return logs.ListRecentLogs()


@router.get("/logs/{log_id}", response_model=LogResponse, tags=["Logs"])
def get_log(
    log_id: Annotated[int, Path(ge=1, le=ROW_ID_MAX)],
    identity: Identity = Depends(AuthenticateRequest),
    logs: LogManager = Depends(GetLogManager)
):
    """
    Get a single log
    """
    return logs.GetLog(log_id)


@router.post("/logs", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED, tags=["Logs"])
def create_log(
    log_request: LogRequest,
    identity: Identity = Depends(AuthenticateRequest),
    logs: LogManager = Depends(GetLogManager)
):
    """
    Submit a recycling log

    The owner is always the authenticated caller.

    Args:
        log_request: point_id, material_id and weight_kg

    Returns:
        CreatedResponse: Message and new log id
    """
    log_id = logs.CreateLog(log_request, identity)
    return CreatedResponse(message="Recycling log added successfully", id=log_id)


@router.put("/logs/{log_id}", response_model=MessageResponse, tags=["Logs"])
def update_log(
    log_id: Annotated[int, Path(ge=1, le=ROW_ID_MAX)],
    log_request: LogRequest,
    identity: Identity = Depends(AuthenticateRequest),
    logs: LogManager = Depends(GetLogManager)
):
    """
    Update a recycling log (owner or admin)
    """
    logs.UpdateLog(log_id, log_request, identity)
    return MessageResponse(message="Log updated successfully")


@router.delete("/logs/{log_id}", response_model=MessageResponse, tags=["Logs"])
def delete_log(
    log_id: Annotated[int, Path(ge=1, le=ROW_ID_MAX)],
    identity: Identity = Depends(AuthenticateRequest),
    logs: LogManager = Depends(GetLogManager)
):
    """
    Delete a recycling log (owner or admin)
    """
    logs.DeleteLog(log_id, identity)
    return MessageResponse(message="Log deleted successfully")
