"""
GreenPlan Server - PointMaterial Database Model

Junction table for many-to-many relationship between drop-off points and
the materials they accept.
"""

from sqlalchemy import Column, Integer, ForeignKey

from models.database.base import Base


class PointMaterial(Base):
    """
    Point_materials junction table - maps points to accepted materials
    """
    __tablename__ = "point_materials"

    point_id = Column(Integer, ForeignKey("drop_off_points.id", ondelete="CASCADE"), primary_key=True)
    material_id = Column(Integer, ForeignKey("recyclable_types.id"), primary_key=True)
