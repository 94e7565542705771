"""Mixins for SQLAlchemy models."""

from datetime import UTC, datetime

from sqlalchemy import Boolean, Column, DateTime, func, true


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


class TimestampMixin:
    """Mixin to add created_at and updated_at timestamp columns."""

    created_at = Column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )
    updated_at = Column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
        nullable=False,
    )


class ActiveFlagMixin:
    """Mixin for records hidden by deactivation instead of deletion."""

    active = Column(Boolean, default=True, server_default=true(), nullable=False, index=True)

    def deactivate(self) -> None:
        """Hide the record without deleting it."""
        self.active = False
