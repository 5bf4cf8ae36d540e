"""
SQLAlchemy ORM models for the SmartFlora local store.
"""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String, Text

from smartflora.database import Base


class KeyValueEntry(Base):
    """
    One JSON document in the local key-value namespace.

    The store holds three documents: the current session, the list of all
    sessions, and the pot registry.
    """

    __tablename__ = "kv_entries"

    key = Column(String(100), primary_key=True)
    value = Column(Text, nullable=False)

    # Timestamps
    created_at = Column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
