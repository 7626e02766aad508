"""Wishlist overview endpoint."""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_current_user, get_settings
from api.helpers import resolve_pagination
from core.config import Settings
from models.user import User
from schemas.category import CategoryResponse
from schemas.item import ItemResponse
from schemas.wishlist import ItemFilters, SortDirection, SortKey, WishlistResponse
from services import wishlist_service

router = APIRouter(prefix="/api/wishlist", tags=["wishlist"])


@router.get("", response_model=WishlistResponse)
async def get_wishlist(
    page: str | None = None,
    page_size: str | None = Query(default=None, alias="pageSize"),
    category_id: str | None = Query(default=None, alias="categoryId"),
    search: str | None = None,
    sort_by: SortKey = Query(default=SortKey.CREATED_AT, alias="sortBy"),
    sort_dir: SortDirection = Query(default=SortDirection.DESC, alias="sortDir"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
) -> WishlistResponse:
    """
    Categories, one page of items with links, and pagination metadata.

    `page` and `pageSize` are lenient: invalid values fall back to defaults and
    pageSize is capped at the configured maximum.
    """
    window = resolve_pagination(page, page_size, settings)
    filters = ItemFilters(
        category_id=category_id or None,
        search=search,
        sort_by=sort_by,
        sort_dir=sort_dir,
    )
    data = await wishlist_service.get_user_wishlist_data(
        db, current_user.id, filters, limit=window.limit, offset=window.offset,
    )
    return WishlistResponse(
        categories=[CategoryResponse.model_validate(c) for c in data.categories],
        items=[ItemResponse.from_item(item, data.links_for(item)) for item in data.items],
        pagination=data.pagination,
    )
