"""
GreenPlan Server - User Database Model

User model for authentication and authorization.
Stores user credentials and the role fixed at registration.
"""

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship

from models.database.base import Base, UtcTimestamp


class User(Base):
    """
    Users table - stores user credentials and role
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False)  # 'user' or 'admin'
    created_at = Column(DateTime, nullable=False, default=UtcTimestamp)

    # Relationship to the logs this user owns
    logs = relationship("RecyclingLog", back_populates="user")
