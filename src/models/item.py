"""Wishlist item model."""
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from models.category import WishlistCategory
    from models.item_link import WishlistItemLink
    from models.user import User


class WishlistItem(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """A wishlist entry owned by one user, optionally grouped under a category."""

    __tablename__ = "wishlist_items"

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
    )
    # SET NULL is only a backstop: category deletion reassigns items first
    category_id: Mapped[str | None] = mapped_column(
        ForeignKey("wishlist_categories.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    favicon: Mapped[str | None] = mapped_column(Text, nullable=True)

    user: Mapped["User"] = relationship(back_populates="items")
    category: Mapped["WishlistCategory"] = relationship(back_populates="items")
    links: Mapped[list["WishlistItemLink"]] = relationship(
        back_populates="item",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
