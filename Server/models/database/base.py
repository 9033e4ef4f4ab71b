"""
GreenPlan Server - Database Base

Shared declarative base for all SQLAlchemy models, plus the column
default used for creation timestamps.
"""

from datetime import datetime, timezone

from sqlalchemy.orm import declarative_base

Base = declarative_base()


def UtcTimestamp() -> datetime:
    """Naive UTC timestamp, as stored in DATETIME columns"""
    return datetime.now(timezone.utc).replace(tzinfo=None)
