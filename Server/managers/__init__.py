"""
GreenPlan Server - Managers Package

This package contains manager classes for database and resource operations.
"""

from managers.database_manager import DatabaseManager
from managers.user_manager import UserManager
from managers.point_manager import PointManager
from managers.material_manager import MaterialManager
from managers.log_manager import LogManager

__all__ = ['DatabaseManager', 'UserManager', 'PointManager', 'MaterialManager', 'LogManager']
