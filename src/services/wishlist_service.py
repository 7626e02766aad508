"""Composed wishlist reads and batch item operations."""
import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass, field

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from models.base import utcnow
from models.category import WishlistCategory
from models.item import WishlistItem
from models.item_link import WishlistItemLink
from schemas.wishlist import BatchOperationResult, ItemFilters, PaginationInfo
from services.category_service import get_user_categories
from services.item_service import get_user_items, get_user_items_count
from services.link_service import get_links_for_items

logger = logging.getLogger(__name__)


@dataclass
class WishlistPage:
    """One page of a user's wishlist with everything needed to render it."""

    categories: list[WishlistCategory]
    items: list[WishlistItem]
    pagination: PaginationInfo
    links_by_item: dict[str, list[WishlistItemLink]] = field(default_factory=dict)

    def links_for(self, item: WishlistItem) -> list[WishlistItemLink]:
        """Links of one item on this page, primary first."""
        return self.links_by_item.get(item.id, [])


def build_pagination(total_items: int, limit: int, offset: int) -> PaginationInfo:
    """
    Derive pagination metadata from a total count and the requested window.

    total_pages is 0 when limit is 0. has_next compares the end of the current
    page with the total, so it is False on the last (possibly partial) page.
    """
    page = offset // limit + 1 if limit > 0 else 1
    total_pages = math.ceil(total_items / limit) if limit > 0 else 0
    return PaginationInfo(
        total_items=total_items,
        page=page,
        page_size=limit,
        total_pages=total_pages,
        has_next=limit > 0 and page * limit < total_items,
        has_previous=page > 1,
    )


async def get_items_page(
    db: AsyncSession,
    user_id: int,
    filters: ItemFilters | None,
    limit: int,
    offset: int,
) -> WishlistPage:
    """
    Load one page of items with their links and pagination, without categories.

    Links are fetched in a single query for the whole page. When the page is
    empty no links query is issued.
    """
    filters = filters or ItemFilters()
    total_items = await get_user_items_count(db, user_id, filters)
    pagination = build_pagination(total_items, limit, offset)

    items = await get_user_items(db, user_id, filters, limit=limit, offset=offset)
    if not items:
        return WishlistPage(categories=[], items=[], pagination=pagination)

    links_by_item = await get_links_for_items(db, [item.id for item in items])
    return WishlistPage(
        categories=[],
        items=items,
        pagination=pagination,
        links_by_item=dict(links_by_item),
    )


async def get_user_wishlist_data(
    db: AsyncSession,
    user_id: int,
    filters: ItemFilters | None,
    limit: int,
    offset: int,
) -> WishlistPage:
    """Load the user's categories plus one page of items (see get_items_page)."""
    categories = await get_user_categories(db, user_id)
    page = await get_items_page(db, user_id, filters, limit, offset)
    page.categories = categories
    return page


async def _owned_item_ids(
    db: AsyncSession,
    user_id: int,
    item_ids: Sequence[str],
) -> list[str]:
    result = await db.execute(
        select(WishlistItem.id).where(
            WishlistItem.id.in_(item_ids),
            WishlistItem.user_id == user_id,
        ),
    )
    return list(result.scalars().all())


def _batch_result(requested: int, processed: int) -> BatchOperationResult:
    failed = requested - processed
    errors = [f"{failed} items not found or unauthorized"] if failed > 0 else []
    return BatchOperationResult(
        success=processed > 0,
        processed_count=processed,
        failed_count=failed,
        errors=errors,
    )


async def batch_delete_items(
    db: AsyncSession,
    user_id: int,
    item_ids: Sequence[str],
) -> BatchOperationResult:
    """
    Delete the subset of item_ids owned by the user in one statement.

    IDs that are missing or belong to someone else are counted as failures
    rather than raising. failed_count is len(item_ids) minus the owned count, so a
    repeated id is processed once and its repeats count as failures. Empty input
    returns immediately without touching the database.
    """
    if not item_ids:
        return BatchOperationResult(success=False, processed_count=0, failed_count=0)

    # Query each id once; counts below are against the request as sent
    unique_ids = list(dict.fromkeys(item_ids))
    owned = await _owned_item_ids(db, user_id, unique_ids)
    if not owned:
        return BatchOperationResult(
            success=False,
            processed_count=0,
            failed_count=len(item_ids),
            errors=["No valid items to delete"],
        )

    await db.execute(
        delete(WishlistItem).where(
            WishlistItem.id.in_(owned),
            WishlistItem.user_id == user_id,
        ),
    )
    logger.info("Batch deleted %d items for user %s", len(owned), user_id)
    return _batch_result(len(item_ids), len(owned))


async def batch_move_items(
    db: AsyncSession,
    user_id: int,
    item_ids: Sequence[str],
    category_id: str | None,
) -> BatchOperationResult:
    """
    Move the owned subset of item_ids to category_id.

    A None category moves items to "uncategorized". The target category is
    validated before any item lookup; an unowned category fails the whole batch.
    """
    if not item_ids:
        return BatchOperationResult(success=False, processed_count=0, failed_count=0)

    unique_ids = list(dict.fromkeys(item_ids))

    if category_id is not None:
        result = await db.execute(
            select(WishlistCategory.id).where(
                WishlistCategory.id == category_id,
                WishlistCategory.user_id == user_id,
            ),
        )
        if result.scalar_one_or_none() is None:
            return BatchOperationResult(
                success=False,
                processed_count=0,
                failed_count=len(item_ids),
                errors=["Category not found or unauthorized"],
            )

    owned = await _owned_item_ids(db, user_id, unique_ids)
    if not owned:
        return BatchOperationResult(
            success=False,
            processed_count=0,
            failed_count=len(item_ids),
            errors=["No valid items to move"],
        )

    await db.execute(
        update(WishlistItem)
        .where(
            WishlistItem.id.in_(owned),
            WishlistItem.user_id == user_id,
        )
        .values(category_id=category_id, updated_at=utcnow()),
    )
    logger.info("Batch moved %d items for user %s to %s", len(owned), user_id, category_id)
    return _batch_result(len(item_ids), len(owned))
