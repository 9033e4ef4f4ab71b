"""
GreenPlan Server - Point Manager

CRUD lifecycle for drop-off points and their accepted-material
associations. Associations are never patched: whenever a materials list is
supplied, the point's whole set is deleted and re-inserted in the same
transaction as the point write.
"""

import logging
from typing import Iterable, List

from sqlalchemy.orm import Session, selectinload

from authorization import ADMIN_ONLY, Authorize
from exceptions import ConflictError, InvalidInputError, NotFoundError
from managers.database_manager import DatabaseManager
from models.api import PointRequest
from models.auth import Identity
from models.database import DropOffPoint, MaterialType, PointMaterial, RecyclingLog, DEFAULT_POINT_STATUS

logger = logging.getLogger(__name__)


class PointManager:
    """
    Manages drop-off points
    """

    def __init__(self, db_manager: DatabaseManager):
        self.db_manager = db_manager

    # ==================== Queries ====================

    def ListPoints(self) -> List[dict]:
        """
        Get all drop-off points with their accepted materials

        Returns:
            list: Point dictionaries ordered by id. accepted_materials holds the
                  material names joined with ', ' (None when there are none)
        """
        with self.db_manager.SessionScope("Server error fetching points") as session:
            points = session.query(DropOffPoint).options(
                selectinload(DropOffPoint.materials)
            ).order_by(DropOffPoint.id).all()

            points_data = []
            for point in points:
                names = [material.material_name for material in point.materials]
                points_data.append({
                    "id": point.id,
                    "name": point.name,
                    "address": point.address,
                    "postal_code": point.postal_code,
                    "latitude": point.latitude,
                    "longitude": point.longitude,
                    "status": point.status,
                    "accepted_materials": ", ".join(names) if names else None,
                    "material_ids": [material.id for material in point.materials]
                })

            return points_data

    # ==================== Mutations ====================

    def CreatePoint(self, data: PointRequest, identity: Identity) -> int:
        """
        Add a drop-off point (admin only)

        Args:
            data: Point fields and optional accepted material ids
            identity: Caller identity

        Returns:
            int: ID of the new point

        Raises:
            ForbiddenError: If the caller is not an admin
            InvalidInputError: If a material id does not exist
        """
        Authorize(identity, ADMIN_ONLY)

        with self.db_manager.SessionScope("Server error - could not add point") as session:
            material_ids = self._ValidateMaterials(session, data.materials or [])

            point = DropOffPoint(
                name=data.name,
                address=data.address,
                postal_code=data.postal_code,
                latitude=data.latitude,
                longitude=data.longitude,
                status=data.status or DEFAULT_POINT_STATUS
            )
            session.add(point)
            session.flush()  # Flush to get the point id

            self._ReplaceMaterials(session, point.id, material_ids)
            point_id = point.id

        logger.info(f"Admin '{identity.username}' added point '{data.name}' (ID: {point_id})")
        return point_id

    def UpdatePoint(self, point_id: int, data: PointRequest, identity: Identity) -> None:
        """
        Update a drop-off point (admin only)

        Args:
            point_id: Point ID to update
            data: New point fields. When materials is given, it replaces the
                  full association set; when omitted, associations are kept.
                  An omitted status keeps the stored status.
            identity: Caller identity

        Raises:
            NotFoundError: If the point does not exist
            ForbiddenError: If the caller is not an admin
            InvalidInputError: If a material id does not exist
        """
        with self.db_manager.SessionScope("Server error - could not update point") as session:
            point = session.query(DropOffPoint.id).filter(DropOffPoint.id == point_id).with_for_update().first()
            if not point:
                raise NotFoundError("Point not found")

            Authorize(identity, ADMIN_ONLY)

            material_ids = None
            if data.materials is not None:
                material_ids = self._ValidateMaterials(session, data.materials)

            values = {
                "name": data.name,
                "address": data.address,
                "postal_code": data.postal_code,
                "latitude": data.latitude,
                "longitude": data.longitude
            }
            if data.status is not None:
                values["status"] = data.status

            updated = session.query(DropOffPoint).filter(DropOffPoint.id == point_id).update(
                values, synchronize_session=False
            )
            if updated == 0:
                raise NotFoundError("Point not found")

            if material_ids is not None:
                self._ReplaceMaterials(session, point_id, material_ids)

        logger.info(f"Admin '{identity.username}' updated point '{data.name}' (ID: {point_id})")

    def DeletePoint(self, point_id: int, identity: Identity) -> None:
        """
        Delete a drop-off point (admin only, only if no logs reference it)

        Args:
            point_id: Point ID to delete
            identity: Caller identity

        Raises:
            NotFoundError: If the point does not exist
            ForbiddenError: If the caller is not an admin
            ConflictError: If recycling logs still reference the point
        """
        has_logs = ConflictError("Cannot delete point that has recycling logs")

        with self.db_manager.SessionScope("Server error - could not delete point", integrity_error=has_logs) as session:
            point = session.query(DropOffPoint.id).filter(DropOffPoint.id == point_id).with_for_update().first()
            if not point:
                raise NotFoundError("Point not found")

            Authorize(identity, ADMIN_ONLY)

            if session.query(RecyclingLog.id).filter(RecyclingLog.point_id == point_id).first():
                raise has_logs

            # Delete associations first (due to foreign key constraints)
            session.query(PointMaterial).filter(PointMaterial.point_id == point_id).delete(synchronize_session=False)

            deleted = session.query(DropOffPoint).filter(DropOffPoint.id == point_id).delete(synchronize_session=False)
            if deleted == 0:
                raise NotFoundError("Point not found")

        logger.info(f"Admin '{identity.username}' deleted point {point_id}")

    # ==================== Associations ====================

    @staticmethod
    def _ValidateMaterials(session: Session, material_ids: Iterable[int]) -> List[int]:
        """
        Check that every material id exists

        Args:
            session: SQLAlchemy session
            material_ids: Requested material ids (may contain duplicates)

        Returns:
            list: Distinct material ids in request order

        Raises:
            InvalidInputError: If any id does not exist
        """
        distinct_ids = list(dict.fromkeys(material_ids))
        if not distinct_ids:
            return []

        found = {
            row.id for row in session.query(MaterialType.id).filter(MaterialType.id.in_(distinct_ids)).all()
        }
        missing = [material_id for material_id in distinct_ids if material_id not in found]
        if missing:
            raise InvalidInputError(f"Invalid material_id: {missing[0]}")

        return distinct_ids

    @staticmethod
    def _ReplaceMaterials(session: Session, point_id: int, material_ids: List[int]) -> None:
        """
        Replace all material associations of a point

        Args:
            session: SQLAlchemy session
            point_id: Point whose associations are replaced
            material_ids: New (validated, distinct) material ids
        """
        # Remove all existing associations for this point
        session.query(PointMaterial).filter(PointMaterial.point_id == point_id).delete(synchronize_session=False)

        # Add new associations
        for material_id in material_ids:
            session.add(PointMaterial(point_id=point_id, material_id=material_id))
