"""Service layer for wishlist category operations."""
import logging

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from models.base import utcnow
from models.category import WishlistCategory
from models.item import WishlistItem
from schemas.category import CategoryCreate, CategoryUpdate
from services.exceptions import LastCategoryError

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES: list[dict[str, str]] = [
    {"name": "General", "color": "#6366f1"},
    {"name": "Work", "color": "#059669"},
    {"name": "Personal", "color": "#dc2626"},
]


async def create_default_categories(db: AsyncSession, user_id: int) -> list[WishlistCategory]:
    """Create the starter categories every new user gets."""
    categories = [
        WishlistCategory(user_id=user_id, name=definition["name"], color=definition["color"])
        for definition in DEFAULT_CATEGORIES
    ]
    # Insert one at a time so created_at follows definition order
    for category in categories:
        db.add(category)
        await db.flush()
    return categories


async def get_user_categories(db: AsyncSession, user_id: int) -> list[WishlistCategory]:
    """Get all categories for a user, oldest first."""
    result = await db.execute(
        select(WishlistCategory)
        .where(WishlistCategory.user_id == user_id)
        .order_by(WishlistCategory.created_at.asc()),
    )
    return list(result.scalars().all())


async def get_category(
    db: AsyncSession,
    user_id: int,
    category_id: str,
) -> WishlistCategory | None:
    """Get a single category by ID, scoped to user."""
    result = await db.execute(
        select(WishlistCategory).where(
            WishlistCategory.id == category_id,
            WishlistCategory.user_id == user_id,
        ),
    )
    return result.scalar_one_or_none()


async def create_category(
    db: AsyncSession,
    user_id: int,
    data: CategoryCreate,
) -> WishlistCategory:
    """Create a category for the user and return the full record."""
    category = WishlistCategory(user_id=user_id, name=data.name, color=data.color)
    db.add(category)
    await db.flush()
    await db.refresh(category)
    return category


async def update_category(
    db: AsyncSession,
    user_id: int,
    category_id: str,
    data: CategoryUpdate,
) -> WishlistCategory | None:
    """Partially update a category. Returns None if not found."""
    category = await get_category(db, user_id, category_id)
    if category is None:
        return None

    update_data = data.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(category, field, value)

    # Explicitly update timestamp since TimestampMixin doesn't auto-update
    category.updated_at = utcnow()

    await db.flush()
    await db.refresh(category)
    return category


async def delete_category(
    db: AsyncSession,
    user_id: int,
    category_id: str,
) -> bool:
    """
    Delete a category, moving its items to another of the user's categories.

    The fallback is the user's oldest remaining category. Both the reassignment
    and the delete are scoped by user_id.

    Returns:
        True if deleted, False if the category does not exist for this user.

    Raises:
        LastCategoryError: If the user has one category or fewer.
    """
    count_result = await db.execute(
        select(func.count()).select_from(WishlistCategory).where(
            WishlistCategory.user_id == user_id,
        ),
    )
    if (count_result.scalar() or 0) <= 1:
        raise LastCategoryError()

    fallback_result = await db.execute(
        select(WishlistCategory.id)
        .where(
            WishlistCategory.user_id == user_id,
            WishlistCategory.id != category_id,
        )
        .order_by(WishlistCategory.created_at.asc())
        .limit(1),
    )
    fallback_id = fallback_result.scalar_one()

    await db.execute(
        update(WishlistItem)
        .where(
            WishlistItem.category_id == category_id,
            WishlistItem.user_id == user_id,
        )
        .values(category_id=fallback_id, updated_at=utcnow()),
    )

    result = await db.execute(
        delete(WishlistCategory).where(
            WishlistCategory.id == category_id,
            WishlistCategory.user_id == user_id,
        ),
    )
    deleted = (result.rowcount or 0) > 0
    if deleted:
        logger.info("Deleted category %s, items moved to %s", category_id, fallback_id)
    return deleted
