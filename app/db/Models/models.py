from sqlalchemy import Column, String, Integer, DateTime, Text
from sqlalchemy.orm import declarative_base
from datetime import datetime, timezone

Base = declarative_base()


def utcnow() -> datetime:
    # Stored naive, always UTC
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Link(Base):
    __tablename__ = "links"

    id = Column(Integer, primary_key=True, autoincrement=True)

    # Short Code: unique, max 10 chars. The constraint is what detects collisions.
    code = Column(String(10), unique=True, nullable=False)

    original_url = Column(Text, nullable=False)

    # Metadata
    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
    access_count = Column(Integer, default=0, nullable=False)


def iso_timestamp(value: datetime) -> str:
    """Render a stored (naive UTC) timestamp as ``2024-05-01T12:00:00.000Z``."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.isoformat(timespec="milliseconds") + "Z"
