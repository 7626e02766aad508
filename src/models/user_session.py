"""Session model: server-side proof of authentication."""
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base, UTCDateTime, utcnow

if TYPE_CHECKING:
    from models.user import User


class UserSession(Base):
    """
    Login session keyed by the opaque token stored in the session cookie.

    A session is only valid while now < expires_at. Expired rows may linger until
    the cleanup task runs, so lookups must always filter on expiry.
    """

    __tablename__ = "sessions"

    id: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
        comment="URL-safe random token (256 bits)",
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
    )
    expires_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        default=utcnow,
        nullable=False,
    )

    user: Mapped["User"] = relationship(back_populates="sessions")
