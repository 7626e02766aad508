"""Pydantic schemas for wishlist item endpoints."""
from collections.abc import Sequence
from datetime import datetime

from models.item import WishlistItem
from models.item_link import WishlistItemLink
from schemas.base import CamelModel
from schemas.link import LinkResponse


class ItemCreate(CamelModel):
    """
    Payload for creating an item.

    `url` and `link_description` are optional; when `url` is present a primary
    link is created together with the item.
    """

    title: str | None = None
    category_id: str | None = None
    description: str | None = None
    favicon: str | None = None
    url: str | None = None
    link_description: str | None = None


class ItemUpdate(CamelModel):
    """Partial item update; only fields present in the payload are applied."""

    title: str | None = None
    category_id: str | None = None
    description: str | None = None
    favicon: str | None = None


class ItemResponse(CamelModel):
    """Item with its links, primary first."""

    id: str
    user_id: int
    category_id: str | None
    title: str
    description: str | None
    favicon: str | None
    created_at: datetime
    updated_at: datetime
    links: list[LinkResponse] = []

    @classmethod
    def from_item(
        cls,
        item: WishlistItem,
        links: Sequence[WishlistItemLink] = (),
    ) -> "ItemResponse":
        """
        Build a response from an item row and its already-loaded links.

        The relationship attribute is never touched, so no lazy load is issued
        from async code.
        """
        return cls(
            id=item.id,
            user_id=item.user_id,
            category_id=item.category_id,
            title=item.title,
            description=item.description,
            favicon=item.favicon,
            created_at=item.created_at,
            updated_at=item.updated_at,
            links=[LinkResponse.model_validate(link) for link in links],
        )
