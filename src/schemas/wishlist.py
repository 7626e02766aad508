"""Pydantic schemas for wishlist listing, pagination and batch operations."""
from enum import StrEnum

from pydantic import Field

from schemas.base import CamelModel
from schemas.category import CategoryResponse
from schemas.item import ItemResponse


class SortKey(StrEnum):
    """Columns an item listing can be ordered by."""

    CREATED_AT = "CREATED_AT"
    UPDATED_AT = "UPDATED_AT"
    TITLE = "TITLE"
    # Items have no name column; NAME sorts like CREATED_AT
    NAME = "NAME"


class SortDirection(StrEnum):
    """Ordering direction."""

    ASC = "ASC"
    DESC = "DESC"


class ItemFilters(CamelModel):
    """Filters shared by the item listing and its count."""

    category_id: str | None = None
    search: str | None = None
    sort_by: SortKey = SortKey.CREATED_AT
    sort_dir: SortDirection = SortDirection.DESC


class PaginationInfo(CamelModel):
    """Pagination metadata computed from the total count, not the page fetched."""

    total_items: int
    page: int
    page_size: int
    total_pages: int
    has_next: bool
    has_previous: bool


class WishlistResponse(CamelModel):
    """Everything the wishlist screen needs in one payload."""

    categories: list[CategoryResponse]
    items: list[ItemResponse]
    pagination: PaginationInfo


class ItemListResponse(CamelModel):
    """One page of items."""

    items: list[ItemResponse]
    pagination: PaginationInfo


class BatchDeleteRequest(CamelModel):
    """Items to delete."""

    item_ids: list[str] = Field(default_factory=list)


class BatchMoveRequest(CamelModel):
    """Items to move. A null category moves them to "uncategorized"."""

    item_ids: list[str] = Field(default_factory=list)
    category_id: str | None = None


class BatchOperationResult(CamelModel):
    """Outcome of a batch delete or move."""

    success: bool
    processed_count: int
    failed_count: int
    errors: list[str] = Field(default_factory=list)
