"""
GreenPlan Server - Database Module

FastAPI dependencies that hand the shared DatabaseManager and the
resource managers to route handlers. The DatabaseManager instance is
created by the application factory and stored on app.state.
"""

from fastapi import Depends, Request

from managers import DatabaseManager, UserManager, PointManager, MaterialManager, LogManager


def GetDatabaseManager(request: Request) -> DatabaseManager:
    """Get the database manager created at startup"""
    return request.app.state.db_manager


def GetUserManager(db_manager: DatabaseManager = Depends(GetDatabaseManager)) -> UserManager:
    return UserManager(db_manager)


def GetPointManager(db_manager: DatabaseManager = Depends(GetDatabaseManager)) -> PointManager:
    return PointManager(db_manager)


def GetMaterialManager(db_manager: DatabaseManager = Depends(GetDatabaseManager)) -> MaterialManager:
    return MaterialManager(db_manager)


def GetLogManager(db_manager: DatabaseManager = Depends(GetDatabaseManager)) -> LogManager:
    return LogManager(db_manager)
