"""Map ORM rows and service results to GraphQL types."""
from collections.abc import Sequence
from datetime import datetime

import strawberry

from api.gql import types
from models.category import WishlistCategory
from models.item import WishlistItem
from models.item_link import WishlistItemLink
from models.user import User
from schemas.wishlist import BatchOperationResult, PaginationInfo
from services.wishlist_service import WishlistPage


def _timestamp(value: datetime) -> str:
    return value.isoformat()


def map_user(user: User) -> types.User:
    return types.User(
        id=strawberry.ID(str(user.id)),
        email=user.email,
        name=user.name,
        created_at=_timestamp(user.created_at),
        updated_at=_timestamp(user.updated_at),
    )


def map_category(category: WishlistCategory) -> types.WishlistCategory:
    return types.WishlistCategory(
        id=strawberry.ID(category.id),
        name=category.name,
        color=category.color,
        created_at=_timestamp(category.created_at),
        updated_at=_timestamp(category.updated_at),
        user_id=category.user_id,
    )


def map_link(link: WishlistItemLink) -> types.WishlistItemLink:
    return types.WishlistItemLink(
        id=strawberry.ID(link.id),
        url=link.url,
        description=link.description,
        item_id=link.item_id,
        is_primary=link.is_primary,
        created_at=_timestamp(link.created_at),
        updated_at=_timestamp(link.updated_at),
    )


def map_item(item: WishlistItem, links: Sequence[WishlistItemLink] = ()) -> types.WishlistItem:
    """Links must already be loaded; the ORM relationship is never touched."""
    return types.WishlistItem(
        id=strawberry.ID(item.id),
        title=item.title,
        description=item.description,
        category_id=item.category_id,
        favicon=item.favicon,
        created_at=_timestamp(item.created_at),
        updated_at=_timestamp(item.updated_at),
        user_id=item.user_id,
        links=[map_link(link) for link in links],
    )


def map_pagination(pagination: PaginationInfo) -> types.PaginationInfo:
    return types.PaginationInfo(**pagination.model_dump())


def map_wishlist(page: WishlistPage) -> types.WishlistPayload:
    return types.WishlistPayload(
        categories=[map_category(c) for c in page.categories],
        items=[map_item(item, page.links_for(item)) for item in page.items],
        pagination=map_pagination(page.pagination),
    )


def map_batch_result(result: BatchOperationResult) -> types.BatchOperationResult:
    return types.BatchOperationResult(**result.model_dump())
