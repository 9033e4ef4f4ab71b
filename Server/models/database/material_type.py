"""
GreenPlan Server - MaterialType Database Model

Recyclable material catalog (plastic, paper, glass, ...).
"""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from models.database.base import Base


class MaterialType(Base):
    """
    Recyclable_types table - catalog of recyclable materials
    """
    __tablename__ = "recyclable_types"

    id = Column(Integer, primary_key=True, autoincrement=True)
    material_name = Column(String(100), unique=True, nullable=False)
    icon_url = Column(String(500), nullable=True)

    logs = relationship("RecyclingLog", back_populates="material")
