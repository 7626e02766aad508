"""Service layer for wishlist item operations."""
import logging

from sqlalchemy import Select, delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from models.base import utcnow
from models.category import WishlistCategory
from models.item import WishlistItem
from models.item_link import WishlistItemLink
from schemas.item import ItemCreate, ItemUpdate
from schemas.wishlist import ItemFilters, SortDirection, SortKey
from services.exceptions import CategoryNotFoundError
from services.utils import escape_like, normalize_search

logger = logging.getLogger(__name__)

SORT_COLUMNS = {
    SortKey.CREATED_AT: WishlistItem.created_at,
    SortKey.UPDATED_AT: WishlistItem.updated_at,
    SortKey.TITLE: WishlistItem.title,
    SortKey.NAME: WishlistItem.created_at,
}


def _apply_filters(stmt: Select, user_id: int, filters: ItemFilters) -> Select:
    """Add ownership, category and search predicates shared by listing and count."""
    stmt = stmt.where(WishlistItem.user_id == user_id)

    if filters.category_id is not None:
        stmt = stmt.where(WishlistItem.category_id == filters.category_id)

    search = normalize_search(filters.search)
    if search:
        pattern = f"%{escape_like(search)}%"
        stmt = stmt.where(
            or_(
                WishlistItem.title.ilike(pattern, escape="\\"),
                WishlistItem.description.ilike(pattern, escape="\\"),
            ),
        )
    return stmt


async def get_user_items(
    db: AsyncSession,
    user_id: int,
    filters: ItemFilters | None = None,
    limit: int | None = None,
    offset: int = 0,
) -> list[WishlistItem]:
    """
    List a user's items with filtering, sorting and pagination.

    Args:
        db: Database session.
        user_id: Owner of the items.
        filters: Category, search and sort options. Defaults to newest first.
        limit: Page size. None returns every matching item.
        offset: Number of matching items to skip.
    """
    filters = filters or ItemFilters()
    sort_column = SORT_COLUMNS[filters.sort_by]
    order = sort_column.asc() if filters.sort_dir == SortDirection.ASC else sort_column.desc()

    stmt = _apply_filters(select(WishlistItem), user_id, filters)
    # id as tie-breaker keeps pages stable when timestamps collide
    stmt = stmt.order_by(order, WishlistItem.id.asc()).offset(offset)
    if limit is not None:
        stmt = stmt.limit(limit)

    result = await db.execute(stmt)
    return list(result.scalars().all())


async def get_user_items_count(
    db: AsyncSession,
    user_id: int,
    filters: ItemFilters | None = None,
) -> int:
    """Count the items matching the same filters as get_user_items."""
    stmt = _apply_filters(
        select(func.count()).select_from(WishlistItem),
        user_id,
        filters or ItemFilters(),
    )
    result = await db.execute(stmt)
    return result.scalar() or 0


async def get_item(db: AsyncSession, user_id: int, item_id: str) -> WishlistItem | None:
    """Get a single item by ID, scoped to user."""
    result = await db.execute(
        select(WishlistItem).where(
            WishlistItem.id == item_id,
            WishlistItem.user_id == user_id,
        ),
    )
    return result.scalar_one_or_none()


async def _ensure_category_owned(
    db: AsyncSession,
    user_id: int,
    category_id: str | None,
) -> None:
    """Raise CategoryNotFoundError unless category_id is None or owned by the user."""
    if category_id is None:
        return
    result = await db.execute(
        select(WishlistCategory.id).where(
            WishlistCategory.id == category_id,
            WishlistCategory.user_id == user_id,
        ),
    )
    if result.scalar_one_or_none() is None:
        raise CategoryNotFoundError(category_id)


async def create_item(
    db: AsyncSession,
    user_id: int,
    data: ItemCreate,
) -> WishlistItem:
    """
    Create an item without links.

    Link fields on `data` are ignored; see create_item_with_primary_link.

    Raises:
        CategoryNotFoundError: If category_id is set but not owned by the user.
    """
    await _ensure_category_owned(db, user_id, data.category_id)

    item = WishlistItem(
        user_id=user_id,
        category_id=data.category_id,
        title=data.title,
        description=data.description,
        favicon=data.favicon,
    )
    db.add(item)
    await db.flush()
    await db.refresh(item)
    return item


async def create_item_with_primary_link(
    db: AsyncSession,
    user_id: int,
    data: ItemCreate,
) -> tuple[WishlistItem, WishlistItemLink]:
    """
    Create an item together with its primary link from data.url.

    Both rows are flushed in the caller's transaction, so either both are
    committed or neither is.
    """
    if not data.url:
        raise ValueError("url is required to create a primary link")

    item = await create_item(db, user_id, data)
    link = WishlistItemLink(
        item_id=item.id,
        url=data.url,
        description=data.link_description,
        is_primary=True,
    )
    db.add(link)
    await db.flush()
    await db.refresh(link)
    return item, link


async def update_item(
    db: AsyncSession,
    user_id: int,
    item_id: str,
    data: ItemUpdate,
) -> WishlistItem | None:
    """
    Partially update an item. Returns None if not found or not owned.

    Raises:
        CategoryNotFoundError: If the payload moves the item to a category the
            user does not own.
    """
    item = await get_item(db, user_id, item_id)
    if item is None:
        return None

    update_data = data.model_dump(exclude_unset=True)
    if "category_id" in update_data:
        await _ensure_category_owned(db, user_id, update_data["category_id"])
    if "title" in update_data and not update_data["title"]:
        # title is NOT NULL; ignore attempts to blank it
        del update_data["title"]

    for field, value in update_data.items():
        setattr(item, field, value)

    item.updated_at = utcnow()
    await db.flush()
    await db.refresh(item)
    return item


async def delete_item(db: AsyncSession, user_id: int, item_id: str) -> bool:
    """
    Delete an item and, by cascade, its links.

    Idempotent: deleting a missing or foreign item is not an error.

    Returns:
        True if a row was removed.
    """
    result = await db.execute(
        delete(WishlistItem).where(
            WishlistItem.id == item_id,
            WishlistItem.user_id == user_id,
        ),
    )
    deleted = (result.rowcount or 0) > 0
    if deleted:
        logger.info("Deleted item %s for user %s", item_id, user_id)
    return deleted
