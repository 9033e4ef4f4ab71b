"""
GreenPlan Server - Database Models Package

This package contains all SQLAlchemy database model definitions.
All models share a common declarative base for proper table relationships.
"""

# Import Base first
from models.database.base import Base

# Import all models
from models.database.user import User
from models.database.drop_off_point import DropOffPoint, DEFAULT_POINT_STATUS
from models.database.material_type import MaterialType
from models.database.point_material import PointMaterial
from models.database.recycling_log import RecyclingLog

# Export all models and Base
__all__ = [
    'Base',
    'User',
    'DropOffPoint',
    'DEFAULT_POINT_STATUS',
    'MaterialType',
    'PointMaterial',
    'RecyclingLog',
]
