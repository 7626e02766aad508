"""SQLAlchemy declarative base with common mixins."""
from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

from sqlalchemy import DateTime, Dialect, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator


def utcnow() -> datetime:
    """Current time in UTC."""
    return datetime.now(UTC)


def generate_uuid() -> str:
    """String UUID used as primary key for wishlist rows."""
    return str(uuid4())


class UTCDateTime(TypeDecorator):
    """
    Timezone-aware DateTime that always comes back as UTC.

    SQLite stores datetimes without an offset; values are written in UTC and
    re-tagged as UTC on load so comparisons with aware datetimes work everywhere.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: Any, dialect: Dialect) -> Any:
        if isinstance(value, datetime) and value.tzinfo is not None:
            return value.astimezone(UTC)
        return value

    def process_result_value(self, value: Any, dialect: Dialect) -> Any:
        if isinstance(value, datetime) and value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class TimestampMixin:
    """
    Mixin that adds created_at and updated_at columns.

    Timestamps are set application-side in UTC so the same models work on SQLite
    (which has no clock_timestamp()) and PostgreSQL. updated_at is not bumped
    automatically; services set it explicitly on every write.
    """

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        default=utcnow,
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        default=utcnow,
        nullable=False,
        index=True,  # Index for "sort by recently updated" queries
    )


class UUIDPrimaryKeyMixin:
    """Mixin for tables keyed by a string UUID generated at insert time."""

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
