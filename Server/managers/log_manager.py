"""
GreenPlan Server - Log Manager

CRUD lifecycle for recycling logs, including the ownership rule:
a log may only be changed by the user who created it or by an admin.
"""

import logging
from typing import List

from sqlalchemy.orm import Query, Session

from authorization import AUTHENTICATED, Authorize
from exceptions import InvalidInputError, NotFoundError
from managers.database_manager import DatabaseManager
from models.api import LogRequest
from models.auth import Identity
from models.database import DropOffPoint, MaterialType, RecyclingLog, User

logger = logging.getLogger(__name__)

# Size of the community feed returned by ListRecentLogs
RECENT_LOGS_LIMIT = 50


class LogManager:
    """
    Manages recycling logs
    """

    def __init__(self, db_manager: DatabaseManager):
        self.db_manager = db_manager

    # ==================== Queries ====================

    @staticmethod
    def _JoinedLogQuery(session: Session) -> Query:
        """Build the log query joined with material, point and user names"""
        return session.query(
            RecyclingLog.id,
            RecyclingLog.weight_kg,
            RecyclingLog.logged_at,
            RecyclingLog.material_id,
            RecyclingLog.point_id,
            RecyclingLog.user_id,
            MaterialType.material_name,
            DropOffPoint.name.label("point_name"),
            User.username
        ).join(
            MaterialType, RecyclingLog.material_id == MaterialType.id
        ).join(
            DropOffPoint, RecyclingLog.point_id == DropOffPoint.id
        ).join(
            User, RecyclingLog.user_id == User.id
        )

    def ListRecentLogs(self, limit: int = RECENT_LOGS_LIMIT) -> List[dict]:
        """
        Get the most recent logs from all users (community feed)

        Args:
            limit: Maximum number of logs

        Returns:
            list: Log dictionaries, newest first
        """
        with self.db_manager.SessionScope("Server error fetching logs") as session:
            rows = self._JoinedLogQuery(session).order_by(
                RecyclingLog.logged_at.desc(),
                RecyclingLog.id.desc()
            ).limit(limit).all()
            return [dict(row._mapping) for row in rows]

    def GetLog(self, log_id: int) -> dict:
        """
        Get a single log

        Args:
            log_id: Log ID

        Returns:
            dict: Log joined with material, point and user names

        Raises:
            NotFoundError: If the log does not exist
        """
        with self.db_manager.SessionScope("Server error fetching log") as session:
            row = self._JoinedLogQuery(session).filter(RecyclingLog.id == log_id).first()
            if row is None:
                raise NotFoundError("Log not found")
            return dict(row._mapping)

    # ==================== Mutations ====================

    def CreateLog(self, data: LogRequest, identity: Identity) -> int:
        """
        Record a recycling drop-off for the caller

        Args:
            data: Point, material and weight
            identity: Caller identity, the owner of the new log

        Returns:
            int: ID of the new log

        Raises:
            InvalidInputError: If the point or material does not exist
        """
        Authorize(identity, AUTHENTICATED)

        with self.db_manager.SessionScope("Server error - could not add log") as session:
            self._ValidateReferences(session, data.point_id, data.material_id)

            log = RecyclingLog(
                point_id=data.point_id,
                material_id=data.material_id,
                weight_kg=data.weight_kg,
                user_id=identity.id
            )
            session.add(log)
            session.flush()
            log_id = log.id

        logger.info(f"User '{identity.username}' added log {log_id} ({data.weight_kg} kg of material {data.material_id} at point {data.point_id})")
        return log_id

    def UpdateLog(self, log_id: int, data: LogRequest, identity: Identity) -> None:
        """
        Update a log (owner or admin)

        Args:
            log_id: Log ID to update
            data: New point, material and weight
            identity: Caller identity

        Raises:
            NotFoundError: If the log does not exist
            ForbiddenError: If the caller is neither the owner nor an admin
            InvalidInputError: If the point or material does not exist
        """
        with self.db_manager.SessionScope("Server error - could not update log") as session:
            owner_id = self._LockOwner(session, log_id)
            Authorize(identity, AUTHENTICATED, owner_id=owner_id)

            self._ValidateReferences(session, data.point_id, data.material_id)

            updated = session.query(RecyclingLog).filter(RecyclingLog.id == log_id).update(
                {
                    "point_id": data.point_id,
                    "material_id": data.material_id,
                    "weight_kg": data.weight_kg
                },
                synchronize_session=False
            )
            if updated == 0:
                raise NotFoundError("Log not found")

        logger.info(f"User '{identity.username}' updated log {log_id}")

    def DeleteLog(self, log_id: int, identity: Identity) -> None:
        """
        Delete a log (owner or admin)

        Args:
            log_id: Log ID to delete
            identity: Caller identity

        Raises:
            NotFoundError: If the log does not exist
            ForbiddenError: If the caller is neither the owner nor an admin
        """
        with self.db_manager.SessionScope("Server error - could not delete log") as session:
            owner_id = self._LockOwner(session, log_id)
            Authorize(identity, AUTHENTICATED, owner_id=owner_id)

            deleted = session.query(RecyclingLog).filter(RecyclingLog.id == log_id).delete(synchronize_session=False)
            if deleted == 0:
                raise NotFoundError("Log not found")

        logger.info(f"User '{identity.username}' deleted log {log_id}")

    # ==================== Checks ====================

    @staticmethod
    def _LockOwner(session: Session, log_id: int) -> int:
        """
        Load only the owner of a log and lock the row for this transaction

        Args:
            session: SQLAlchemy session
            log_id: Log ID

        Returns:
            int: user_id of the owner

        Raises:
            NotFoundError: If the log does not exist
        """
        row = session.query(RecyclingLog.user_id).filter(
            RecyclingLog.id == log_id
        ).with_for_update().first()
        if row is None:
            raise NotFoundError("Log not found")
        return row.user_id

    @staticmethod
    def _ValidateReferences(session: Session, point_id: int, material_id: int) -> None:
        """
        Check that the referenced point and material exist

        Raises:
            InvalidInputError: If either reference does not exist
        """
        if not session.query(DropOffPoint.id).filter(DropOffPoint.id == point_id).first():
            raise InvalidInputError("Invalid point_id")

        if not session.query(MaterialType.id).filter(MaterialType.id == material_id).first():
            raise InvalidInputError("Invalid material_id")
