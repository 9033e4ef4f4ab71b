"""
GreenPlan Server - API Models Package

This package contains Pydantic models for all API endpoints.
"""

from models.api.row_id import ROW_ID_MAX, RowId
from models.api.point import PointRequest, PointResponse
from models.api.material import MaterialRequest, MaterialResponse
from models.api.recycling_log import LogRequest, LogResponse
from models.api.message import MessageResponse, CreatedResponse

__all__ = [
    'ROW_ID_MAX',
    'RowId',
    'PointRequest',
    'PointResponse',
    'MaterialRequest',
    'MaterialResponse',
    'LogRequest',
    'LogResponse',
    'MessageResponse',
    'CreatedResponse',
]
