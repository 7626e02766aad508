"""GraphQL schema, resolvers and router."""
import logging
from collections.abc import AsyncIterator, Callable

import strawberry
from graphql import GraphQLError
from strawberry.extensions import SchemaExtension
from strawberry.fastapi import GraphQLRouter
from strawberry.types import Info

from api.gql import types
from api.gql.context import GraphQLContext, get_context
from api.gql.mappers import (
    map_batch_result,
    map_category,
    map_item,
    map_link,
    map_user,
    map_wishlist,
)
from api.helpers import resolve_pagination
from core.auth import clear_session_cookie, set_session_cookie
from schemas.category import CategoryCreate, CategoryUpdate
from schemas.item import ItemCreate, ItemUpdate
from schemas.link import LinkCreate, LinkUpdate
from schemas.validators import (
    validate_category_fields,
    validate_registration_fields,
    validate_title_length,
)
from schemas.wishlist import ItemFilters, SortDirection, SortKey
from services import (
    auth_service,
    category_service,
    item_service,
    link_service,
    wishlist_service,
)
from services.exceptions import (
    CategoryNotFoundError,
    LastCategoryError,
    UserAlreadyExistsError,
    WishlistAuthorizationError,
)

logger = logging.getLogger(__name__)

ContextInfo = Info[GraphQLContext, None]


def _error(message: str, code: str) -> GraphQLError:
    return GraphQLError(message, extensions={"code": code})


def _bad_input(message: str) -> GraphQLError:
    return _error(message, "BAD_USER_INPUT")


def _check_length(validator: Callable[..., object], *values: str | None) -> None:
    try:
        validator(*values)
    except ValueError as e:
        raise _bad_input(str(e)) from e


def _set_fields(value: object) -> dict:
    """Fields of a strawberry input that the client actually sent."""
    return {
        name: field_value
        for name, field_value in vars(value).items()
        if field_value is not strawberry.UNSET
    }


def _is_internal(error: GraphQLError) -> bool:
    original = error.original_error
    return original is not None and not isinstance(original, GraphQLError)


class MaskInternalErrors(SchemaExtension):
    """
    Replace unexpected resolver exceptions with a generic INTERNAL_SERVER_ERROR.

    The real exception is logged and the request transaction rolled back, so a
    mutation that failed halfway leaves nothing behind. Errors raised as
    GraphQLError (validation, auth, domain rules) pass through untouched.
    """

    async def on_operation(self) -> AsyncIterator[None]:
        yield
        result = self.execution_context.result
        errors = getattr(result, "errors", None)
        if not errors or not any(_is_internal(e) for e in errors):
            return

        context = self.execution_context.context
        if isinstance(context, GraphQLContext):
            await context.db.rollback()

        masked = []
        for error in errors:
            if _is_internal(error):
                logger.error(
                    "GraphQL resolver failed at %s",
                    error.path,
                    exc_info=error.original_error,
                )
                masked.append(
                    GraphQLError(
                        "Internal server error",
                        nodes=error.nodes,
                        source=error.source,
                        positions=error.positions,
                        path=error.path,
                        extensions={"code": "INTERNAL_SERVER_ERROR"},
                    ),
                )
            else:
                masked.append(error)
        result.errors = masked


@strawberry.type
class Query:
    @strawberry.field(description="Get the current authenticated user")
    def me(self, info: ContextInfo) -> types.User | None:
        user = info.context.user
        return map_user(user) if user is not None else None

    @strawberry.field(description="Get wishlist data with optional filters and pagination")
    async def wishlist(
        self,
        info: ContextInfo,
        filter: types.WishlistFilterInput | None = None,  # noqa: A002
        pagination: types.PaginationInput | None = None,
    ) -> types.WishlistPayload:
        ctx = info.context
        user = ctx.require_user()

        window = resolve_pagination(
            pagination.page if pagination else None,
            pagination.page_size if pagination else None,
            ctx.settings,
        )
        filters = ItemFilters()
        if filter is not None:
            filters = ItemFilters(
                category_id=filter.category_id or None,
                search=filter.search,
                sort_by=filter.sort_by or SortKey.CREATED_AT,
                sort_dir=filter.sort_dir or SortDirection.DESC,
            )

        page = await wishlist_service.get_user_wishlist_data(
            ctx.db, user.id, filters, limit=window.limit, offset=window.offset,
        )
        return map_wishlist(page)

    @strawberry.field(description="Get all categories for the current user")
    async def categories(self, info: ContextInfo) -> list[types.WishlistCategory]:
        ctx = info.context
        user = ctx.require_user()
        categories = await category_service.get_user_categories(ctx.db, user.id)
        return [map_category(c) for c in categories]

    @strawberry.field(description="Get a specific wishlist item by ID")
    async def item(self, info: ContextInfo, id: strawberry.ID) -> types.WishlistItem | None:  # noqa: A002
        ctx = info.context
        user = ctx.require_user()
        item = await item_service.get_item(ctx.db, user.id, id)
        if item is None:
            return None
        links = await link_service.get_item_links(ctx.db, user.id, item.id)
        return map_item(item, links)


@strawberry.type
class Mutation:
    @strawberry.mutation(description="Register a new user")
    async def register(self, info: ContextInfo, input: types.RegisterInput) -> types.AuthPayload:  # noqa: A002
        ctx = info.context
        if not input.email or not input.password or not input.name:
            return types.AuthPayload(
                success=False, error="Email, password, and name are required",
            )
        try:
            validate_registration_fields(input.email, input.name)
        except ValueError as e:
            return types.AuthPayload(success=False, error=str(e))

        try:
            user = await auth_service.register(ctx.db, input.email, input.password, input.name)
        except UserAlreadyExistsError as e:
            return types.AuthPayload(success=False, error=str(e))

        session_id = await auth_service.create_session(
            ctx.db, user.id, ctx.settings.session_ttl_days,
        )
        set_session_cookie(ctx.response, session_id, ctx.settings)
        return types.AuthPayload(success=True, user=map_user(user))

    @strawberry.mutation(description="Login with email and password")
    async def login(self, info: ContextInfo, input: types.LoginInput) -> types.AuthPayload:  # noqa: A002
        ctx = info.context
        if not input.email or not input.password:
            return types.AuthPayload(success=False, error="Email and password are required")

        user = await auth_service.login(ctx.db, input.email, input.password)
        if user is None:
            return types.AuthPayload(success=False, error="Invalid email or password")

        session_id = await auth_service.create_session(
            ctx.db, user.id, ctx.settings.session_ttl_days,
        )
        set_session_cookie(ctx.response, session_id, ctx.settings)
        return types.AuthPayload(success=True, user=map_user(user))

    @strawberry.mutation(description="Logout the current user")
    async def logout(self, info: ContextInfo) -> bool:
        ctx = info.context
        if ctx.session_id:
            try:
                await auth_service.delete_session(ctx.db, ctx.session_id)
            except Exception:
                logger.exception("Failed to delete session during logout")
                await ctx.db.rollback()
        clear_session_cookie(ctx.response, ctx.settings)
        return True

    @strawberry.mutation(description="Create a new category")
    async def create_category(
        self,
        info: ContextInfo,
        input: types.CategoryInput,  # noqa: A002
    ) -> types.WishlistCategory:
        ctx = info.context
        user = ctx.require_user()
        name = input.name.strip()
        if not name:
            raise _bad_input("Name is required")
        _check_length(validate_category_fields, name, input.color)
        category = await category_service.create_category(
            ctx.db, user.id, CategoryCreate(name=name, color=input.color),
        )
        return map_category(category)

    @strawberry.mutation(description="Update a category")
    async def update_category(
        self,
        info: ContextInfo,
        id: strawberry.ID,  # noqa: A002
        input: types.CategoryUpdateInput,  # noqa: A002
    ) -> types.WishlistCategory | None:
        ctx = info.context
        user = ctx.require_user()

        updates = {k: v for k, v in _set_fields(input).items() if v is not None}
        if "name" in updates:
            updates["name"] = updates["name"].strip()
            if not updates["name"]:
                raise _bad_input("Name cannot be empty")
        _check_length(validate_category_fields, updates.get("name"), updates.get("color"))
        if not updates:
            raise _bad_input("No valid fields to update")

        category = await category_service.update_category(
            ctx.db, user.id, id, CategoryUpdate(**updates),
        )
        return map_category(category) if category is not None else None

    @strawberry.mutation(description="Delete a category")
    async def delete_category(self, info: ContextInfo, id: strawberry.ID) -> bool:  # noqa: A002
        ctx = info.context
        user = ctx.require_user()
        try:
            return await category_service.delete_category(ctx.db, user.id, id)
        except LastCategoryError as e:
            raise _bad_input(str(e)) from e

    @strawberry.mutation(description="Create a new wishlist item")
    async def create_item(
        self,
        info: ContextInfo,
        input: types.ItemInput,  # noqa: A002
    ) -> types.WishlistItem:
        ctx = info.context
        user = ctx.require_user()
        title = input.title.strip()
        if not title:
            raise _bad_input("Title is required")
        _check_length(validate_title_length, title)

        data = ItemCreate(
            title=title,
            category_id=input.category_id,
            description=input.description,
            favicon=input.favicon,
            url=input.url,
            link_description=input.link_description,
        )
        try:
            if data.url:
                item, link = await item_service.create_item_with_primary_link(
                    ctx.db, user.id, data,
                )
                return map_item(item, [link])
            item = await item_service.create_item(ctx.db, user.id, data)
        except CategoryNotFoundError as e:
            raise _error("Category not found", "NOT_FOUND") from e
        return map_item(item)

    @strawberry.mutation(description="Update a wishlist item")
    async def update_item(
        self,
        info: ContextInfo,
        id: strawberry.ID,  # noqa: A002
        input: types.ItemUpdateInput,  # noqa: A002
    ) -> types.WishlistItem | None:
        ctx = info.context
        user = ctx.require_user()

        fields = _set_fields(input)
        if "title" in fields:
            title = (fields["title"] or "").strip()
            if not title:
                raise _bad_input("Title cannot be empty")
            _check_length(validate_title_length, title)
            fields["title"] = title

        try:
            item = await item_service.update_item(ctx.db, user.id, id, ItemUpdate(**fields))
        except CategoryNotFoundError as e:
            raise _error("Category not found", "NOT_FOUND") from e
        if item is None:
            return None
        links = await link_service.get_item_links(ctx.db, user.id, item.id)
        return map_item(item, links)

    @strawberry.mutation(description="Delete a wishlist item")
    async def delete_item(self, info: ContextInfo, id: strawberry.ID) -> bool:  # noqa: A002
        ctx = info.context
        user = ctx.require_user()
        await item_service.delete_item(ctx.db, user.id, id)
        return True

    @strawberry.mutation(description="Add a link to a wishlist item")
    async def add_item_link(
        self,
        info: ContextInfo,
        item_id: strawberry.ID,
        input: types.ItemLinkInput,  # noqa: A002
    ) -> types.WishlistItemLink:
        ctx = info.context
        user = ctx.require_user()
        url = input.url.strip()
        if not url:
            raise _bad_input("URL is required")

        data = LinkCreate(
            url=url,
            description=input.description,
            is_primary=bool(input.is_primary),
        )
        try:
            link = await link_service.create_item_link(ctx.db, user.id, item_id, data)
        except WishlistAuthorizationError as e:
            raise _error(str(e), "FORBIDDEN") from e
        return map_link(link)

    @strawberry.mutation(description="Update an item link")
    async def update_item_link(
        self,
        info: ContextInfo,
        id: strawberry.ID,  # noqa: A002
        input: types.ItemLinkUpdateInput,  # noqa: A002
    ) -> types.WishlistItemLink | None:
        ctx = info.context
        user = ctx.require_user()
        link = await link_service.update_item_link(
            ctx.db, user.id, id, LinkUpdate(**_set_fields(input)),
        )
        return map_link(link) if link is not None else None

    @strawberry.mutation(description="Delete an item link")
    async def delete_item_link(self, info: ContextInfo, id: strawberry.ID) -> bool:  # noqa: A002
        ctx = info.context
        user = ctx.require_user()
        try:
            await link_service.delete_item_link(ctx.db, user.id, id)
        except WishlistAuthorizationError as e:
            raise _error(str(e), "FORBIDDEN") from e
        return True

    @strawberry.mutation(description="Set a link as the primary link for an item")
    async def set_primary_link(
        self,
        info: ContextInfo,
        item_id: strawberry.ID,
        link_id: strawberry.ID,
    ) -> bool:
        ctx = info.context
        user = ctx.require_user()
        try:
            await link_service.set_primary_link(ctx.db, user.id, item_id, link_id)
        except WishlistAuthorizationError as e:
            raise _error(str(e), "FORBIDDEN") from e
        return True

    @strawberry.mutation(description="Delete several items at once")
    async def batch_delete_items(
        self,
        info: ContextInfo,
        input: types.BatchDeleteInput,  # noqa: A002
    ) -> types.BatchOperationResult:
        ctx = info.context
        user = ctx.require_user()
        if not input.item_ids:
            raise _bad_input("At least one item ID required")
        result = await wishlist_service.batch_delete_items(ctx.db, user.id, input.item_ids)
        return map_batch_result(result)

    @strawberry.mutation(description="Move several items to a category")
    async def batch_move_items(
        self,
        info: ContextInfo,
        input: types.BatchMoveInput,  # noqa: A002
    ) -> types.BatchOperationResult:
        ctx = info.context
        user = ctx.require_user()
        if not input.item_ids:
            raise _bad_input("At least one item ID required")
        result = await wishlist_service.batch_move_items(
            ctx.db, user.id, input.item_ids, input.category_id,
        )
        return map_batch_result(result)


schema = strawberry.Schema(
    query=Query,
    mutation=Mutation,
    extensions=[MaskInternalErrors],
)


def create_graphql_router(graphql_ide: str | None = None) -> GraphQLRouter:
    """Build the FastAPI router serving the schema."""
    return GraphQLRouter(
        schema,
        context_getter=get_context,
        graphql_ide=graphql_ide,
    )
