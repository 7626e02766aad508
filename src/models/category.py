"""Wishlist category model."""
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from models.item import WishlistItem
    from models.user import User


class WishlistCategory(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """A named, optionally colored grouping of items owned by one user."""

    __tablename__ = "wishlist_categories"

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    color: Mapped[str | None] = mapped_column(String(32), nullable=True)

    user: Mapped["User"] = relationship(back_populates="categories")
    items: Mapped[list["WishlistItem"]] = relationship(
        back_populates="category",
        passive_deletes=True,
    )
