"""
GreenPlan Server - DropOffPoint Database Model

Drop-off locations managed by administrators. The set of accepted
materials is stored in the point_materials junction table.
"""

from sqlalchemy import Column, Integer, String, Float
from sqlalchemy.orm import relationship

from models.database.base import Base


DEFAULT_POINT_STATUS = "Active"


class DropOffPoint(Base):
    """
    Drop_off_points table - recycling drop-off locations
    """
    __tablename__ = "drop_off_points"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    address = Column(String(255), nullable=False)
    postal_code = Column(String(20), nullable=False)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    status = Column(String(50), nullable=False, default=DEFAULT_POINT_STATUS)  # Free-form, not validated

    # Accepted materials through junction table (read side only, writes go through PointMaterial)
    materials = relationship(
        "MaterialType",
        secondary="point_materials",
        order_by="MaterialType.id",
        viewonly=True
    )
    logs = relationship("RecyclingLog", back_populates="point")
