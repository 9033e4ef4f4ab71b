"""
GreenPlan Server - Material Manager

CRUD lifecycle for the recyclable material catalog.
"""

import logging
from typing import List

from authorization import ADMIN_ONLY, Authorize
from exceptions import ConflictError, InvalidInputError, NotFoundError
from managers.database_manager import DatabaseManager
from models.api import MaterialRequest
from models.auth import Identity
from models.database import MaterialType, PointMaterial, RecyclingLog

logger = logging.getLogger(__name__)


class MaterialManager:
    """
    Manages recyclable material types
    """

    def __init__(self, db_manager: DatabaseManager):
        self.db_manager = db_manager

    def ListMaterials(self) -> List[dict]:
        """
        Get all material types

        Returns:
            list: Material dictionaries ordered by id
        """
        with self.db_manager.SessionScope("Server error fetching materials") as session:
            materials = session.query(MaterialType).order_by(MaterialType.id).all()
            return [
                {
                    "id": material.id,
                    "material_name": material.material_name,
                    "icon_url": material.icon_url
                }
                for material in materials
            ]

    def CreateMaterial(self, data: MaterialRequest, identity: Identity) -> int:
        """
        Add a material type (admin only)

        Args:
            data: Material name and icon
            identity: Caller identity

        Returns:
            int: ID of the new material

        Raises:
            ForbiddenError: If the caller is not an admin
            InvalidInputError: If the name already exists
        """
        Authorize(identity, ADMIN_ONLY)

        with self.db_manager.SessionScope(
            "Server error adding material",
            integrity_error=InvalidInputError("Material already exists")
        ) as session:
            existing = session.query(MaterialType.id).filter(MaterialType.material_name == data.material_name).first()
            if existing:
                raise InvalidInputError("Material already exists")

            material = MaterialType(material_name=data.material_name, icon_url=data.icon_url)
            session.add(material)
            session.flush()
            material_id = material.id

        logger.info(f"Admin '{identity.username}' added material '{data.material_name}' (ID: {material_id})")
        return material_id

    def UpdateMaterial(self, material_id: int, data: MaterialRequest, identity: Identity) -> None:
        """
        Update a material type (admin only)

        Args:
            material_id: Material ID to update
            data: New name and icon
            identity: Caller identity

        Raises:
            NotFoundError: If the material does not exist
            ForbiddenError: If the caller is not an admin
            InvalidInputError: If another material already has the name
        """
        with self.db_manager.SessionScope(
            "Server error updating material",
            integrity_error=InvalidInputError("Material already exists")
        ) as session:
            material = session.query(MaterialType.id).filter(MaterialType.id == material_id).with_for_update().first()
            if not material:
                raise NotFoundError("Material not found")

            Authorize(identity, ADMIN_ONLY)

            duplicate = session.query(MaterialType.id).filter(
                MaterialType.material_name == data.material_name,
                MaterialType.id != material_id
            ).first()
            if duplicate:
                raise InvalidInputError("Material already exists")

            updated = session.query(MaterialType).filter(MaterialType.id == material_id).update(
                {"material_name": data.material_name, "icon_url": data.icon_url},
                synchronize_session=False
            )
            if updated == 0:
                raise NotFoundError("Material not found")

        logger.info(f"Admin '{identity.username}' updated material {material_id}")

    def DeleteMaterial(self, material_id: int, identity: Identity) -> None:
        """
        Delete a material type (admin only, only if nothing references it)

        Args:
            material_id: Material ID to delete
            identity: Caller identity

        Raises:
            NotFoundError: If the material does not exist
            ForbiddenError: If the caller is not an admin
            ConflictError: If logs or drop-off points still reference the material
        """
        in_use = ConflictError("Cannot delete material that is in use")

        with self.db_manager.SessionScope("Server error deleting material", integrity_error=in_use) as session:
            material = session.query(MaterialType.id).filter(MaterialType.id == material_id).with_for_update().first()
            if not material:
                raise NotFoundError("Material not found")

            Authorize(identity, ADMIN_ONLY)

            # Check references from logs and point associations
            referenced_by_log = session.query(RecyclingLog.id).filter(RecyclingLog.material_id == material_id).first()
            referenced_by_point = session.query(PointMaterial.point_id).filter(PointMaterial.material_id == material_id).first()
            if referenced_by_log or referenced_by_point:
                raise in_use

            deleted = session.query(MaterialType).filter(MaterialType.id == material_id).delete(synchronize_session=False)
            if deleted == 0:
                raise NotFoundError("Material not found")

        logger.info(f"Admin '{identity.username}' deleted material {material_id}")
