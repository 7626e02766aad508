"""Tests for the category endpoints."""
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.category import WishlistCategory
from models.item import WishlistItem
from models.user import User


async def _categories(client: AsyncClient) -> list[dict]:
    response = await client.get("/api/wishlist/categories")
    assert response.status_code == 200
    return response.json()


async def test__list_categories__requires_auth(client: AsyncClient) -> None:
    response = await client.get("/api/wishlist/categories")

    assert response.status_code == 401
    assert response.json() == {"detail": "Not authenticated"}


async def test__list_categories__defaults_oldest_first(
    auth_client: AsyncClient,
    test_user: User,
) -> None:
    categories = await _categories(auth_client)

    assert [c["name"] for c in categories] == ["General", "Work", "Personal"]
    assert all(c["userId"] == test_user.id for c in categories)
    assert set(categories[0]) == {"id", "userId", "name", "color", "createdAt", "updatedAt"}


async def test__create_category__returns_201_with_record(auth_client: AsyncClient) -> None:
    response = await auth_client.post(
        "/api/wishlist/categories", json={"name": "  Books  ", "color": "#abcdef"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["name"] == "Books"
    assert body["color"] == "#abcdef"
    assert [c["name"] for c in await _categories(auth_client)][-1] == "Books"


async def test__create_category__blank_name_returns_400(auth_client: AsyncClient) -> None:
    for payload in ({}, {"name": ""}, {"name": "   "}, {"color": "#fff"}):
        response = await auth_client.post("/api/wishlist/categories", json=payload)
        assert response.status_code == 400
        assert response.json()["detail"] == "Name is required"


async def test__create_category__overlong_fields_return_400(
    auth_client: AsyncClient,
    db_session: AsyncSession,
    test_user: User,
) -> None:
    long_name = await auth_client.post("/api/wishlist/categories", json={"name": "x" * 101})
    long_color = await auth_client.post(
        "/api/wishlist/categories", json={"name": "Books", "color": "#" * 33},
    )

    assert long_name.status_code == 400
    assert long_name.json()["detail"] == (
        "Name exceeds maximum length of 100 characters (got 101 characters)."
    )
    assert long_color.status_code == 400
    assert long_color.json()["detail"].startswith("Color exceeds maximum length of 32")
    names = await db_session.scalars(
        select(WishlistCategory.name).where(WishlistCategory.user_id == test_user.id),
    )
    assert sorted(names) == ["General", "Personal", "Work"]


async def test__create_category__trimmed_name_at_limit_is_accepted(
    auth_client: AsyncClient,
) -> None:
    response = await auth_client.post(
        "/api/wishlist/categories", json={"name": "  " + "x" * 100 + "  "},
    )

    assert response.status_code == 201
    assert response.json()["name"] == "x" * 100


async def test__update_category__rename(auth_client: AsyncClient) -> None:
    category = (await _categories(auth_client))[1]

    response = await auth_client.patch(
        f"/api/wishlist/categories/{category['id']}", json={"name": "Office"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "Office"
    assert body["color"] == category["color"]


async def test__update_category__blank_name_returns_400(auth_client: AsyncClient) -> None:
    category = (await _categories(auth_client))[0]

    response = await auth_client.patch(
        f"/api/wishlist/categories/{category['id']}", json={"name": "  "},
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Name cannot be empty"


async def test__update_category__no_fields_returns_400(auth_client: AsyncClient) -> None:
    category = (await _categories(auth_client))[0]

    response = await auth_client.patch(f"/api/wishlist/categories/{category['id']}", json={})

    assert response.status_code == 400
    assert response.json()["detail"] == "No valid fields to update"


async def test__update_category__missing_returns_404(auth_client: AsyncClient) -> None:
    response = await auth_client.patch(
        "/api/wishlist/categories/does-not-exist", json={"name": "x"},
    )

    assert response.status_code == 404


async def test__delete_category__moves_items_to_oldest_remaining(
    auth_client: AsyncClient,
    db_session: AsyncSession,
    test_user: User,
) -> None:
    general, work, _ = await _categories(auth_client)
    item = WishlistItem(user_id=test_user.id, category_id=work["id"], title="Desk")
    db_session.add(item)
    await db_session.flush()

    response = await auth_client.delete(f"/api/wishlist/categories/{work['id']}")

    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert work["id"] not in [c["id"] for c in await _categories(auth_client)]
    category_id = await db_session.scalar(
        select(WishlistItem.category_id).where(WishlistItem.id == item.id),
    )
    assert category_id == general["id"]


async def test__delete_category__last_one_returns_400(
    auth_client: AsyncClient,
    db_session: AsyncSession,
) -> None:
    general, work, personal = await _categories(auth_client)
    assert (await auth_client.delete(f"/api/wishlist/categories/{work['id']}")).status_code == 200
    assert (
        await auth_client.delete(f"/api/wishlist/categories/{personal['id']}")
    ).status_code == 200

    response = await auth_client.delete(f"/api/wishlist/categories/{general['id']}")

    assert response.status_code == 400
    assert response.json()["detail"] == "Cannot delete the last category"
    remaining = await db_session.scalar(
        select(WishlistCategory.id).where(WishlistCategory.id == general["id"]),
    )
    assert remaining == general["id"]


async def test__delete_category__missing_returns_404(auth_client: AsyncClient) -> None:
    response = await auth_client.delete("/api/wishlist/categories/does-not-exist")

    assert response.status_code == 404
