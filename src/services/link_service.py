"""
Service layer for item links.

Links have no user_id column. Every operation establishes ownership through the
parent item before reading or writing, and at most one link per item carries
is_primary.
"""
import logging
from collections import defaultdict
from collections.abc import Sequence

from sqlalchemy import Select, delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from models.base import utcnow
from models.item import WishlistItem
from models.item_link import WishlistItemLink
from schemas.link import LinkCreate, LinkUpdate
from services.exceptions import WishlistAuthorizationError

logger = logging.getLogger(__name__)

LINK_ORDER = (WishlistItemLink.is_primary.desc(), WishlistItemLink.created_at.asc())


async def _ensure_item_owned(db: AsyncSession, user_id: int, item_id: str) -> None:
    result = await db.execute(
        select(WishlistItem.id).where(
            WishlistItem.id == item_id,
            WishlistItem.user_id == user_id,
        ),
    )
    if result.scalar_one_or_none() is None:
        raise WishlistAuthorizationError()


def _owned_link_stmt(user_id: int, link_id: str) -> Select[tuple[WishlistItemLink]]:
    """Select a link only if its parent item belongs to the user."""
    return select(WishlistItemLink).where(
        WishlistItemLink.id == link_id,
        select(WishlistItem.id)
        .where(
            WishlistItem.id == WishlistItemLink.item_id,
            WishlistItem.user_id == user_id,
        )
        .exists(),
    )


async def _demote_links(
    db: AsyncSession,
    item_id: str,
    exclude_link_id: str | None = None,
) -> None:
    """Clear is_primary on the item's links, optionally sparing one."""
    stmt = (
        update(WishlistItemLink)
        .where(
            WishlistItemLink.item_id == item_id,
            WishlistItemLink.is_primary.is_(True),
        )
        .values(is_primary=False, updated_at=utcnow())
    )
    if exclude_link_id is not None:
        stmt = stmt.where(WishlistItemLink.id != exclude_link_id)
    await db.execute(stmt)


async def get_links_for_items(
    db: AsyncSession,
    item_ids: Sequence[str],
) -> dict[str, list[WishlistItemLink]]:
    """
    Load links for already-authorized items in one query, grouped by item.

    Callers must only pass IDs obtained from a user-scoped item query.
    """
    grouped: dict[str, list[WishlistItemLink]] = defaultdict(list)
    if not item_ids:
        return grouped

    result = await db.execute(
        select(WishlistItemLink)
        .where(WishlistItemLink.item_id.in_(item_ids))
        .order_by(WishlistItemLink.item_id, *LINK_ORDER),
    )
    for link in result.scalars().all():
        grouped[link.item_id].append(link)
    return grouped


async def get_item_links(
    db: AsyncSession,
    user_id: int,
    item_id: str,
) -> list[WishlistItemLink]:
    """
    Get an item's links, primary first then oldest first.

    Raises:
        WishlistAuthorizationError: If the item is missing or owned by someone else.
    """
    await _ensure_item_owned(db, user_id, item_id)
    result = await db.execute(
        select(WishlistItemLink)
        .where(WishlistItemLink.item_id == item_id)
        .order_by(*LINK_ORDER),
    )
    return list(result.scalars().all())


async def create_item_link(
    db: AsyncSession,
    user_id: int,
    item_id: str,
    data: LinkCreate,
) -> WishlistItemLink:
    """
    Attach a link to an owned item.

    A primary link demotes the item's existing primary first.

    Raises:
        WishlistAuthorizationError: If the item is missing or owned by someone else.
    """
    await _ensure_item_owned(db, user_id, item_id)

    if data.is_primary:
        await _demote_links(db, item_id)

    link = WishlistItemLink(
        item_id=item_id,
        url=data.url,
        description=data.description,
        is_primary=data.is_primary,
    )
    db.add(link)
    await db.flush()
    await db.refresh(link)
    return link


async def update_item_link(
    db: AsyncSession,
    user_id: int,
    link_id: str,
    data: LinkUpdate,
) -> WishlistItemLink | None:
    """Partially update a link. Returns None if absent or not owned."""
    result = await db.execute(_owned_link_stmt(user_id, link_id))
    link = result.scalar_one_or_none()
    if link is None:
        return None

    update_data = data.model_dump(exclude_unset=True)
    if update_data.get("url") is None:
        update_data.pop("url", None)
    if update_data.get("is_primary") is None:
        update_data.pop("is_primary", None)

    if update_data.get("is_primary"):
        await _demote_links(db, link.item_id, exclude_link_id=link.id)

    for field, value in update_data.items():
        setattr(link, field, value)

    link.updated_at = utcnow()
    await db.flush()
    await db.refresh(link)
    return link


async def delete_item_link(db: AsyncSession, user_id: int, link_id: str) -> None:
    """
    Delete a link.

    Unlike item deletion this is not idempotent: a missing link is reported.

    Raises:
        WishlistAuthorizationError: If the link is missing or its item is not owned.
    """
    result = await db.execute(_owned_link_stmt(user_id, link_id))
    link = result.scalar_one_or_none()
    if link is None:
        raise WishlistAuthorizationError()

    await db.execute(delete(WishlistItemLink).where(WishlistItemLink.id == link.id))
    logger.info("Deleted link %s from item %s", link.id, link.item_id)


async def set_primary_link(
    db: AsyncSession,
    user_id: int,
    item_id: str,
    link_id: str,
) -> WishlistItemLink:
    """
    Make one link the item's primary link.

    Demotes every link of the item, then promotes the target. Both statements run
    in the request transaction, so no other request observes the item with zero
    primaries in between.

    Raises:
        WishlistAuthorizationError: If the item is not owned or the link does not
            belong to the item.
    """
    await _ensure_item_owned(db, user_id, item_id)

    result = await db.execute(
        select(WishlistItemLink).where(
            WishlistItemLink.id == link_id,
            WishlistItemLink.item_id == item_id,
        ),
    )
    link = result.scalar_one_or_none()
    if link is None:
        raise WishlistAuthorizationError()

    now = utcnow()
    await _demote_links(db, item_id)
    await db.execute(
        update(WishlistItemLink)
        .where(WishlistItemLink.id == link_id)
        .values(is_primary=True, updated_at=now),
    )
    await db.refresh(link)
    return link
