"""Strawberry types for the GraphQL API. Field names are exposed in camelCase."""
import strawberry

from schemas.wishlist import SortDirection as SortDirectionValue
from schemas.wishlist import SortKey

WishlistSortKey = strawberry.enum(
    SortKey, name="WishlistSortKey", description="Sort keys for wishlist items",
)
SortDirection = strawberry.enum(
    SortDirectionValue, name="SortDirection", description="Sort direction",
)


@strawberry.type(description="A user in the system")
class User:
    id: strawberry.ID
    email: str
    name: str
    created_at: str
    updated_at: str


@strawberry.type(description="Authentication response payload")
class AuthPayload:
    success: bool
    error: str | None = None
    user: User | None = None


@strawberry.type(description="A wishlist category")
class WishlistCategory:
    id: strawberry.ID
    name: str
    color: str | None
    created_at: str
    updated_at: str
    user_id: int


@strawberry.type(description="A link associated with a wishlist item")
class WishlistItemLink:
    id: strawberry.ID
    url: str
    description: str | None
    item_id: str
    is_primary: bool
    created_at: str
    updated_at: str


@strawberry.type(description="A wishlist item")
class WishlistItem:
    id: strawberry.ID
    title: str
    description: str | None
    category_id: str | None
    favicon: str | None
    created_at: str
    updated_at: str
    user_id: int
    links: list[WishlistItemLink]


@strawberry.type(description="Pagination information")
class PaginationInfo:
    total_items: int
    page: int
    page_size: int
    total_pages: int
    has_next: bool
    has_previous: bool


@strawberry.type(description="Wishlist data payload with categories, items, and pagination")
class WishlistPayload:
    categories: list[WishlistCategory]
    items: list[WishlistItem]
    pagination: PaginationInfo


@strawberry.type(description="Outcome of a batch delete or move")
class BatchOperationResult:
    success: bool
    processed_count: int
    failed_count: int
    errors: list[str]


@strawberry.input(description="Input for user registration")
class RegisterInput:
    email: str
    password: str
    name: str


@strawberry.input(description="Input for user login")
class LoginInput:
    email: str
    password: str


@strawberry.input(description="Input for creating a category")
class CategoryInput:
    name: str
    color: str | None = None


@strawberry.input(description="Input for updating a category")
class CategoryUpdateInput:
    name: str | None = strawberry.UNSET
    color: str | None = strawberry.UNSET


@strawberry.input(description="Input for creating a wishlist item")
class ItemInput:
    title: str
    category_id: str | None = None
    description: str | None = None
    favicon: str | None = None
    url: str | None = None
    link_description: str | None = None


@strawberry.input(description="Input for updating a wishlist item")
class ItemUpdateInput:
    title: str | None = strawberry.UNSET
    category_id: str | None = strawberry.UNSET
    description: str | None = strawberry.UNSET
    favicon: str | None = strawberry.UNSET


@strawberry.input(description="Input for creating an item link")
class ItemLinkInput:
    url: str
    description: str | None = None
    is_primary: bool | None = None


@strawberry.input(description="Input for updating an item link")
class ItemLinkUpdateInput:
    url: str | None = strawberry.UNSET
    description: str | None = strawberry.UNSET
    is_primary: bool | None = strawberry.UNSET


@strawberry.input(description="Input for filtering wishlist data")
class WishlistFilterInput:
    category_id: str | None = None
    search: str | None = None
    sort_by: WishlistSortKey | None = strawberry.field(
        default=None, description="Field to sort by. Defaults to CREATED_AT if not specified.",
    )
    sort_dir: SortDirection | None = strawberry.field(
        default=None, description="Sort direction. Defaults to DESC if not specified.",
    )


@strawberry.input(description="Input for pagination")
class PaginationInput:
    page: int | None = None
    page_size: int | None = None


@strawberry.input(description="Items to delete")
class BatchDeleteInput:
    item_ids: list[strawberry.ID]


@strawberry.input(description="Items to move; a null categoryId moves them to uncategorized")
class BatchMoveInput:
    item_ids: list[strawberry.ID]
    category_id: strawberry.ID | None = None
