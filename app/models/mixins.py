from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime


class TimestampMixin:
    """created_at / updated_at maintained by SQLAlchemy."""

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
