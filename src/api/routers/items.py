"""Wishlist item, link and batch endpoints."""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_current_user, get_settings
from api.helpers import resolve_pagination
from core.config import Settings
from models.user import User
from schemas.base import SuccessResponse
from schemas.item import ItemCreate, ItemResponse, ItemUpdate
from schemas.link import LinkCreate, LinkResponse, LinkUpdate
from schemas.validators import validate_title_length
from schemas.wishlist import (
    BatchDeleteRequest,
    BatchMoveRequest,
    BatchOperationResult,
    ItemFilters,
    ItemListResponse,
    SortDirection,
    SortKey,
)
from services import item_service, link_service, wishlist_service
from services.exceptions import CategoryNotFoundError, WishlistAuthorizationError

router = APIRouter(prefix="/api/wishlist/items", tags=["items"])


def _category_not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")


def _check_title_length(title: str) -> None:
    try:
        validate_title_length(title)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e


def _require_item_ids(item_ids: list[str]) -> None:
    if not item_ids:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="At least one item ID required",
        )


@router.get("", response_model=ItemListResponse)
async def list_items(
    page: str | None = None,
    page_size: str | None = Query(default=None, alias="pageSize"),
    category_id: str | None = Query(default=None, alias="categoryId"),
    search: str | None = None,
    sort_by: SortKey = Query(default=SortKey.CREATED_AT, alias="sortBy"),
    sort_dir: SortDirection = Query(default=SortDirection.DESC, alias="sortDir"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
) -> ItemListResponse:
    """One page of items with their links."""
    window = resolve_pagination(page, page_size, settings)
    filters = ItemFilters(
        category_id=category_id or None,
        search=search,
        sort_by=sort_by,
        sort_dir=sort_dir,
    )
    data = await wishlist_service.get_items_page(
        db, current_user.id, filters, limit=window.limit, offset=window.offset,
    )
    return ItemListResponse(
        items=[ItemResponse.from_item(item, data.links_for(item)) for item in data.items],
        pagination=data.pagination,
    )


@router.post("", response_model=ItemResponse, status_code=status.HTTP_201_CREATED)
async def create_item(
    data: ItemCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> ItemResponse:
    """
    Create an item.

    When `url` is given the item is created with that URL as its primary link
    (`link_description` becomes the link description).
    """
    title = (data.title or "").strip()
    if not title or not data.category_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Title and category are required",
        )
    _check_title_length(title)
    data = data.model_copy(update={"title": title})

    try:
        if data.url:
            item, link = await item_service.create_item_with_primary_link(
                db, current_user.id, data,
            )
            return ItemResponse.from_item(item, [link])
        item = await item_service.create_item(db, current_user.id, data)
    except CategoryNotFoundError as e:
        raise _category_not_found() from e
    return ItemResponse.from_item(item)


@router.post("/batch-delete", response_model=BatchOperationResult)
async def batch_delete_items(
    data: BatchDeleteRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> BatchOperationResult:
    """Delete several items; unknown or foreign IDs are reported, not fatal."""
    _require_item_ids(data.item_ids)
    return await wishlist_service.batch_delete_items(db, current_user.id, data.item_ids)


@router.post("/batch-move", response_model=BatchOperationResult)
async def batch_move_items(
    data: BatchMoveRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> BatchOperationResult:
    """Move several items to a category, or to none with a null categoryId."""
    _require_item_ids(data.item_ids)
    return await wishlist_service.batch_move_items(
        db, current_user.id, data.item_ids, data.category_id,
    )


@router.get("/{item_id}", response_model=ItemResponse)
async def get_item(
    item_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> ItemResponse:
    """Get a single item with its links."""
    item = await item_service.get_item(db, current_user.id, item_id)
    if item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item not found")
    links = await link_service.get_item_links(db, current_user.id, item_id)
    return ItemResponse.from_item(item, links)


@router.put("/{item_id}", response_model=ItemResponse)
async def update_item(
    item_id: str,
    data: ItemUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> ItemResponse:
    """Update the fields present in the payload. Returns 404 if not found."""
    if "title" in data.model_fields_set:
        title = (data.title or "").strip()
        if not title:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Title cannot be empty",
            )
        _check_title_length(title)
        data.title = title

    try:
        item = await item_service.update_item(db, current_user.id, item_id, data)
    except CategoryNotFoundError as e:
        raise _category_not_found() from e

    if item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item not found")
    links = await link_service.get_item_links(db, current_user.id, item_id)
    return ItemResponse.from_item(item, links)


@router.delete("/{item_id}", response_model=SuccessResponse)
async def delete_item(
    item_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> SuccessResponse:
    """Delete an item and its links. Succeeds even if the item does not exist."""
    await item_service.delete_item(db, current_user.id, item_id)
    return SuccessResponse()


@router.get("/{item_id}/links", response_model=list[LinkResponse])
async def list_links(
    item_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> list[LinkResponse]:
    """List an item's links, primary first."""
    try:
        links = await link_service.get_item_links(db, current_user.id, item_id)
    except WishlistAuthorizationError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item not found") from e
    return [LinkResponse.model_validate(link) for link in links]


@router.post(
    "/{item_id}/links",
    response_model=LinkResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_link(
    item_id: str,
    data: LinkCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> LinkResponse:
    """Attach a link to an item."""
    if not data.url:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="URL is required",
        )
    try:
        link = await link_service.create_item_link(db, current_user.id, item_id, data)
    except WishlistAuthorizationError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item not found") from e
    return LinkResponse.model_validate(link)


@router.patch("/{item_id}/links/{link_id}", response_model=LinkResponse)
async def update_link(
    item_id: str,
    link_id: str,
    data: LinkUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> LinkResponse:
    """Update a link. Returns 404 if the link does not exist for this user."""
    link = await link_service.update_item_link(db, current_user.id, link_id, data)
    if link is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Link not found")
    return LinkResponse.model_validate(link)


@router.delete("/{item_id}/links/{link_id}", response_model=SuccessResponse)
async def delete_link(
    item_id: str,
    link_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> SuccessResponse:
    """Delete a link. Unlike item deletion, a missing link is a 404."""
    try:
        await link_service.delete_item_link(db, current_user.id, link_id)
    except WishlistAuthorizationError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Link not found") from e
    return SuccessResponse()


@router.post("/{item_id}/links/{link_id}/primary", response_model=SuccessResponse)
async def set_primary_link(
    item_id: str,
    link_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> SuccessResponse:
    """Make a link the item's only primary link."""
    try:
        await link_service.set_primary_link(db, current_user.id, item_id, link_id)
    except WishlistAuthorizationError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Link not found") from e
    return SuccessResponse()
