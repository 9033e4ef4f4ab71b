"""
GreenPlan Server - RecyclingLog Database Model

A single recycling drop-off recorded by a user. The user_id column is the
owner of the row and governs who may modify it.
"""

from sqlalchemy import Column, Integer, Float, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship

from models.database.base import Base, UtcTimestamp


class RecyclingLog(Base):
    """
    Recycling_logs table - drop-offs recorded by users
    """
    __tablename__ = "recycling_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    point_id = Column(Integer, ForeignKey("drop_off_points.id"), nullable=False)
    material_id = Column(Integer, ForeignKey("recyclable_types.id"), nullable=False)
    weight_kg = Column(Float, nullable=False)
    logged_at = Column(DateTime, nullable=False, default=UtcTimestamp)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)  # Owner, set from token only

    # Relationships
    user = relationship("User", back_populates="logs")
    point = relationship("DropOffPoint", back_populates="logs")
    material = relationship("MaterialType", back_populates="logs")

    __table_args__ = (
        # Index for the recent logs feed
        Index('idx_logs_logged_at', 'logged_at'),
        # Indexes for reference checks before deleting points and materials
        Index('idx_logs_point', 'point_id'),
        Index('idx_logs_material', 'material_id'),
    )
