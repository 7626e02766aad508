"""Tests for the GraphQL endpoint."""
from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from typing import Any

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from core.auth import SESSION_COOKIE_NAME
from models.item import WishlistItem
from models.user import User
from services import auth_service, category_service
from wishlist_client import operations

ClientFactory = Callable[..., AbstractAsyncContextManager[AsyncClient]]


async def _execute(
    client: AsyncClient,
    query: str,
    variables: dict[str, Any] | None = None,
) -> dict[str, Any]:
    response = await client.post("/graphql", json={"query": query, "variables": variables or {}})
    assert response.status_code == 200, response.text
    return response.json()


async def _data(
    client: AsyncClient,
    query: str,
    variables: dict[str, Any] | None = None,
) -> dict[str, Any]:
    body = await _execute(client, query, variables)
    assert body.get("errors") is None, body["errors"]
    return body["data"]


def _error_code(body: dict[str, Any]) -> str:
    return body["errors"][0]["extensions"]["code"]


async def _create_item(client: AsyncClient, **fields: Any) -> dict[str, Any]:
    data = await _data(
        client,
        operations.CREATE_ITEM_MUTATION,
        {"input": {"title": "Telescope", **fields}},
    )
    return data["createItem"]


# =============================================================================
# auth
# =============================================================================


async def test__me__anonymous_returns_null(client: AsyncClient) -> None:
    data = await _data(client, operations.ME_QUERY)

    assert data["me"] is None


async def test__me__authenticated(auth_client: AsyncClient, test_user: User) -> None:
    data = await _data(auth_client, operations.ME_QUERY)

    assert data["me"]["id"] == str(test_user.id)
    assert data["me"]["email"] == "user@example.com"


async def test__register__sets_cookie_and_returns_user(client: AsyncClient) -> None:
    response = await client.post(
        "/graphql",
        json={
            "query": operations.REGISTER_MUTATION,
            "variables": {
                "input": {"email": "gql@example.com", "password": "pw-123456", "name": "Gql"},
            },
        },
    )

    payload = response.json()["data"]["register"]
    assert payload["success"] is True
    assert payload["error"] is None
    assert payload["user"]["email"] == "gql@example.com"
    assert response.cookies.get(SESSION_COOKIE_NAME)

    me = await _data(client, operations.ME_QUERY)
    assert me["me"]["email"] == "gql@example.com"


async def test__register__duplicate_reports_error_in_payload(
    client: AsyncClient,
    test_user: User,
) -> None:
    data = await _data(
        client,
        operations.REGISTER_MUTATION,
        {"input": {"email": "user@example.com", "password": "x", "name": "Dup"}},
    )

    assert data["register"] == {"success": False, "error": "User already exists", "user": None}


async def test__login__invalid_credentials(client: AsyncClient, test_user: User) -> None:
    data = await _data(
        client,
        operations.LOGIN_MUTATION,
        {"input": {"email": "user@example.com", "password": "wrong"}},
    )

    assert data["login"]["success"] is False
    assert data["login"]["error"] == "Invalid email or password"


async def test__login__then_logout(client: AsyncClient, test_user: User) -> None:
    login = await _data(
        client,
        operations.LOGIN_MUTATION,
        {"input": {"email": "user@example.com", "password": "correct horse battery staple"}},
    )
    assert login["login"]["success"] is True
    assert (await _data(client, operations.ME_QUERY))["me"] is not None

    logout = await _data(client, operations.LOGOUT_MUTATION)

    assert logout["logout"] is True
    assert (await _data(client, operations.ME_QUERY))["me"] is None


async def test__protected_query__unauthenticated(client: AsyncClient) -> None:
    body = await _execute(client, operations.CATEGORIES_QUERY)

    assert body["data"] is None
    assert body["errors"][0]["message"] == "Not authenticated"
    assert _error_code(body) == "UNAUTHENTICATED"


# =============================================================================
# wishlist / categories
# =============================================================================


async def test__wishlist__defaults(
    auth_client: AsyncClient,
    db_session: AsyncSession,
    test_user: User,
) -> None:
    db_session.add_all(WishlistItem(user_id=test_user.id, title=f"t{i}") for i in range(12))
    await db_session.flush()

    data = await _data(auth_client, operations.WISHLIST_QUERY)

    wishlist = data["wishlist"]
    assert [c["name"] for c in wishlist["categories"]] == ["General", "Work", "Personal"]
    assert len(wishlist["items"]) == 10
    assert wishlist["pagination"] == {
        "totalItems": 12,
        "page": 1,
        "pageSize": 10,
        "totalPages": 2,
        "hasNext": True,
        "hasPrevious": False,
    }


async def test__wishlist__filter_sort_and_page(auth_client: AsyncClient) -> None:
    await _create_item(auth_client, title="b telescope")
    await _create_item(auth_client, title="a telescope")
    await _create_item(auth_client, title="binoculars")

    data = await _data(
        auth_client,
        operations.WISHLIST_QUERY,
        {
            "filter": {"search": "telescope", "sortBy": "TITLE", "sortDir": "ASC"},
            "pagination": {"page": 1, "pageSize": 1},
        },
    )

    wishlist = data["wishlist"]
    assert [i["title"] for i in wishlist["items"]] == ["a telescope"]
    assert wishlist["pagination"]["totalItems"] == 2
    assert wishlist["pagination"]["hasNext"] is True


async def test__category_lifecycle(auth_client: AsyncClient) -> None:
    created = (
        await _data(
            auth_client,
            operations.CREATE_CATEGORY_MUTATION,
            {"input": {"name": " Astronomy ", "color": "#000"}},
        )
    )["createCategory"]
    assert created["name"] == "Astronomy"

    updated = (
        await _data(
            auth_client,
            operations.UPDATE_CATEGORY_MUTATION,
            {"id": created["id"], "input": {"name": "Space"}},
        )
    )["updateCategory"]
    assert updated["name"] == "Space"
    assert updated["color"] == "#000"

    deleted = await _data(
        auth_client, operations.DELETE_CATEGORY_MUTATION, {"id": created["id"]},
    )
    assert deleted["deleteCategory"] is True


async def test__create_category__blank_name_is_bad_input(auth_client: AsyncClient) -> None:
    body = await _execute(
        auth_client, operations.CREATE_CATEGORY_MUTATION, {"input": {"name": "  "}},
    )

    assert body["errors"][0]["message"] == "Name is required"
    assert _error_code(body) == "BAD_USER_INPUT"


async def test__delete_last_category__bad_input(
    auth_client: AsyncClient,
) -> None:
    categories = (await _data(auth_client, operations.CATEGORIES_QUERY))["categories"]
    for category in categories[1:]:
        await _data(auth_client, operations.DELETE_CATEGORY_MUTATION, {"id": category["id"]})

    body = await _execute(
        auth_client, operations.DELETE_CATEGORY_MUTATION, {"id": categories[0]["id"]},
    )

    assert body["errors"][0]["message"] == "Cannot delete the last category"
    assert _error_code(body) == "BAD_USER_INPUT"


# =============================================================================
# items / links
# =============================================================================


async def test__create_item__with_url(auth_client: AsyncClient) -> None:
    item = await _create_item(auth_client, url="https://stars.example.com")

    assert item["title"] == "Telescope"
    assert item["categoryId"] is None
    assert len(item["links"]) == 1
    assert item["links"][0]["isPrimary"] is True


async def test__create_item__foreign_category_not_found(
    auth_client: AsyncClient,
    other_client: AsyncClient,
) -> None:
    foreign = (await _data(other_client, operations.CATEGORIES_QUERY))["categories"][0]

    body = await _execute(
        auth_client,
        operations.CREATE_ITEM_MUTATION,
        {"input": {"title": "x", "categoryId": foreign["id"]}},
    )

    assert _error_code(body) == "NOT_FOUND"


async def test__update_and_fetch_item(auth_client: AsyncClient) -> None:
    item = await _create_item(auth_client, description="old")

    updated = (
        await _data(
            auth_client,
            operations.UPDATE_ITEM_MUTATION,
            {"id": item["id"], "input": {"description": "new"}},
        )
    )["updateItem"]
    fetched = (await _data(auth_client, operations.ITEM_QUERY, {"id": item["id"]}))["item"]

    assert updated["description"] == "new"
    assert updated["title"] == "Telescope"
    assert fetched["description"] == "new"


async def test__item__other_users_item_is_null(
    auth_client: AsyncClient,
    other_client: AsyncClient,
) -> None:
    item = await _create_item(auth_client)

    data = await _data(other_client, operations.ITEM_QUERY, {"id": item["id"]})

    assert data["item"] is None


async def test__links_lifecycle(auth_client: AsyncClient) -> None:
    item = await _create_item(auth_client, url="https://one.example.com")
    first_link_id = item["links"][0]["id"]

    added = (
        await _data(
            auth_client,
            operations.ADD_ITEM_LINK_MUTATION,
            {"itemId": item["id"], "input": {"url": "https://two.example.com"}},
        )
    )["addItemLink"]
    assert added["isPrimary"] is False

    await _data(
        auth_client,
        operations.SET_PRIMARY_LINK_MUTATION,
        {"itemId": item["id"], "linkId": added["id"]},
    )
    links = (await _data(auth_client, operations.ITEM_QUERY, {"id": item["id"]}))["item"]["links"]
    assert [(link["id"], link["isPrimary"]) for link in links] == [
        (added["id"], True),
        (first_link_id, False),
    ]

    updated = (
        await _data(
            auth_client,
            operations.UPDATE_ITEM_LINK_MUTATION,
            {"id": first_link_id, "input": {"description": "backup"}},
        )
    )["updateItemLink"]
    assert updated["description"] == "backup"

    deleted = await _data(auth_client, operations.DELETE_ITEM_LINK_MUTATION, {"id": first_link_id})
    assert deleted["deleteItemLink"] is True


async def test__add_link__other_users_item_forbidden(
    auth_client: AsyncClient,
    other_client: AsyncClient,
) -> None:
    item = await _create_item(auth_client)

    body = await _execute(
        other_client,
        operations.ADD_ITEM_LINK_MUTATION,
        {"itemId": item["id"], "input": {"url": "https://evil.example.com"}},
    )

    assert _error_code(body) == "FORBIDDEN"


# =============================================================================
# batch
# =============================================================================


async def test__batch_delete__empty_ids_is_bad_input(auth_client: AsyncClient) -> None:
    body = await _execute(
        auth_client, operations.BATCH_DELETE_ITEMS_MUTATION, {"input": {"itemIds": []}},
    )

    assert body["errors"][0]["message"] == "At least one item ID required"
    assert _error_code(body) == "BAD_USER_INPUT"


async def test__batch_move_and_delete(
    auth_client: AsyncClient,
    db_session: AsyncSession,
    test_user: User,
) -> None:
    first = await _create_item(auth_client)
    second = await _create_item(auth_client)
    target = (await _data(auth_client, operations.CATEGORIES_QUERY))["categories"][1]["id"]

    moved = (
        await _data(
            auth_client,
            operations.BATCH_MOVE_ITEMS_MUTATION,
            {"input": {"itemIds": [first["id"], second["id"]], "categoryId": target}},
        )
    )["batchMoveItems"]
    assert moved == {"success": True, "processedCount": 2, "failedCount": 0, "errors": []}

    deleted = (
        await _data(
            auth_client,
            operations.BATCH_DELETE_ITEMS_MUTATION,
            {"input": {"itemIds": [first["id"], "missing"]}},
        )
    )["batchDeleteItems"]
    assert deleted == {
        "success": True,
        "processedCount": 1,
        "failedCount": 1,
        "errors": ["1 items not found or unauthorized"],
    }
    remaining = await db_session.scalar(
        select(func.count()).select_from(WishlistItem).where(
            WishlistItem.user_id == test_user.id,
        ),
    )
    assert remaining == 1


# =============================================================================
# error masking
# =============================================================================


async def test__unexpected_error_is_masked(
    auth_client: AsyncClient,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    async def boom(*args: Any, **kwargs: Any) -> None:
        raise RuntimeError("connection string leaked: postgres://secret")

    monkeypatch.setattr(category_service, "get_user_categories", boom)

    body = await _execute(auth_client, operations.CATEGORIES_QUERY)

    assert body["errors"][0]["message"] == "Internal server error"
    assert _error_code(body) == "INTERNAL_SERVER_ERROR"
    assert "secret" not in str(body)


async def test__logout__clears_cookie_when_session_delete_fails(
    client_factory: ClientFactory,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    async def boom(*args: Any, **kwargs: Any) -> None:
        raise RuntimeError("database unavailable")

    monkeypatch.setattr(auth_service, "delete_session", boom)

    async with client_factory("some-session-id") as c:
        response = await c.post("/graphql", json={"query": operations.LOGOUT_MUTATION})

    assert response.status_code == 200
    body = response.json()
    assert body["data"] == {"logout": True}
    assert body.get("errors") is None
    set_cookie = response.headers["set-cookie"]
    assert set_cookie.startswith(f"{SESSION_COOKIE_NAME}=")
    assert "Max-Age=0" in set_cookie


# =============================================================================
# input length limits
# =============================================================================


async def test__create_category__overlong_fields_are_bad_input(
    auth_client: AsyncClient,
) -> None:
    for field_input, field in (
        ({"name": "x" * 101}, "Name"),
        ({"name": "Books", "color": "#" * 33}, "Color"),
    ):
        body = await _execute(
            auth_client, operations.CREATE_CATEGORY_MUTATION, {"input": field_input},
        )
        assert _error_code(body) == "BAD_USER_INPUT"
        assert body["errors"][0]["message"].startswith(f"{field} exceeds maximum length of")


async def test__create_category__name_at_limit_is_accepted(auth_client: AsyncClient) -> None:
    data = await _data(
        auth_client, operations.CREATE_CATEGORY_MUTATION, {"input": {"name": "x" * 100}},
    )

    assert data["createCategory"]["name"] == "x" * 100


async def test__update_category__overlong_name_is_bad_input(auth_client: AsyncClient) -> None:
    category = (await _data(auth_client, operations.CATEGORIES_QUERY))["categories"][0]

    body = await _execute(
        auth_client,
        operations.UPDATE_CATEGORY_MUTATION,
        {"id": category["id"], "input": {"name": "x" * 101}},
    )

    assert _error_code(body) == "BAD_USER_INPUT"
    assert body["errors"][0]["message"] == (
        "Name exceeds maximum length of 100 characters (got 101 characters)."
    )


async def test__item_title_over_limit_is_bad_input(auth_client: AsyncClient) -> None:
    created = await _execute(
        auth_client, operations.CREATE_ITEM_MUTATION, {"input": {"title": "t" * 501}},
    )
    item = await _create_item(auth_client)
    updated = await _execute(
        auth_client,
        operations.UPDATE_ITEM_MUTATION,
        {"id": item["id"], "input": {"title": "t" * 501}},
    )

    for body in (created, updated):
        assert _error_code(body) == "BAD_USER_INPUT"
        assert body["errors"][0]["message"].startswith("Title exceeds maximum length of 500")


async def test__register__overlong_email_reports_error_in_payload(client: AsyncClient) -> None:
    email = "a" * 250 + "@example.com"

    data = await _data(
        client,
        operations.REGISTER_MUTATION,
        {"input": {"email": email, "password": "pw-123456", "name": "Long"}},
    )

    assert data["register"]["success"] is False
    assert data["register"]["error"].startswith("Email exceeds maximum length of 255")
