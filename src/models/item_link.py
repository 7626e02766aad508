"""Wishlist item link model."""
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, ForeignKey, Text, false
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from models.item import WishlistItem


class WishlistItemLink(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """
    One URL attached to an item.

    At most one link per item has is_primary set. Ownership is transitive through
    the parent item's user_id; there is no user_id column here.
    """

    __tablename__ = "wishlist_item_links"

    item_id: Mapped[str] = mapped_column(
        ForeignKey("wishlist_items.id", ondelete="CASCADE"),
        index=True,
    )
    url: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_primary: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        server_default=false(),
        nullable=False,
    )

    item: Mapped["WishlistItem"] = relationship(back_populates="links")
