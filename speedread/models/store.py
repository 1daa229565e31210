"""Key-value record model backing the persistent store."""

from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, String, Text

from speedread.database import Base


class StoreEntry(Base):
    """SQLAlchemy model for one key-value record."""

    __tablename__ = "store_entries"

    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False)

    updated_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )
