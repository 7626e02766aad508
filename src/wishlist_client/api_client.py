"""Async GraphQL client for the Corvus API."""
from typing import Any

import httpx

from . import operations as ops

SESSION_COOKIE_NAME = "corvus-session"
DEFAULT_TIMEOUT = 30.0


class WishlistApiError(Exception):
    """Raised for HTTP failures and GraphQL errors returned by the API."""

    def __init__(self, message: str, status: int, body: Any = None) -> None:
        super().__init__(message)
        self.status = status
        self.body = body


class WishlistApiClient:
    """
    Thin client over the /graphql endpoint.

    The session token is captured from the Set-Cookie header on login or
    register and replayed as a Cookie header, so it works with the Secure
    cookie attributes used in production and with plain HTTP in development.
    Results are the plain camelCase dicts returned by the API.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        session_id: str | None = None,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session_id = session_id
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(base_url=self.base_url, timeout=timeout)

    async def __aenter__(self) -> "WishlistApiClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.session_id:
            headers["Cookie"] = f"{SESSION_COOKIE_NAME}={self.session_id}"
        return headers

    async def execute(
        self,
        query: str,
        variables: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        Run a GraphQL document and return its `data`.

        Raises:
            WishlistApiError: On a non-2xx status, on GraphQL errors (the first
                error's message is used) or when the response has no data.
        """
        response = await self._client.post(
            f"{self.base_url}/graphql",
            json={"query": query, "variables": variables or {}},
            headers=self._headers(),
        )

        token = response.cookies.get(SESSION_COOKIE_NAME)
        if token is not None:
            self.session_id = token or None

        if not response.is_success:
            raise WishlistApiError(
                f"HTTP error! status: {response.status_code}",
                status=response.status_code,
                body=response.text,
            )

        payload = response.json()
        errors = payload.get("errors")
        if errors:
            raise WishlistApiError(
                errors[0].get("message", "GraphQL error"),
                status=response.status_code,
                body=payload,
            )

        data = payload.get("data")
        if data is None:
            raise WishlistApiError(
                "No data returned from GraphQL query",
                status=response.status_code,
                body=payload,
            )
        return data

    # Auth

    async def register(self, email: str, password: str, name: str) -> dict[str, Any]:
        data = await self.execute(
            ops.REGISTER_MUTATION,
            {"input": {"email": email, "password": password, "name": name}},
        )
        return data["register"]

    async def login(self, email: str, password: str) -> dict[str, Any]:
        data = await self.execute(
            ops.LOGIN_MUTATION,
            {"input": {"email": email, "password": password}},
        )
        return data["login"]

    async def logout(self) -> bool:
        data = await self.execute(ops.LOGOUT_MUTATION)
        self.session_id = None
        return data["logout"]

    async def me(self) -> dict[str, Any] | None:
        data = await self.execute(ops.ME_QUERY)
        return data["me"]

    # Queries

    async def get_wishlist(
        self,
        page: int | None = None,
        page_size: int | None = None,
        category_id: str | None = None,
        search: str | None = None,
        sort_by: str | None = None,
        sort_dir: str | None = None,
    ) -> dict[str, Any]:
        """Fetch categories, one page of items and pagination metadata."""
        filter_input = {
            key: value
            for key, value in {
                "categoryId": category_id,
                "search": search,
                "sortBy": sort_by,
                "sortDir": sort_dir,
            }.items()
            if value is not None
        }
        pagination = {
            key: value
            for key, value in {"page": page, "pageSize": page_size}.items()
            if value is not None
        }
        data = await self.execute(
            ops.WISHLIST_QUERY,
            {"filter": filter_input or None, "pagination": pagination or None},
        )
        return data["wishlist"]

    async def get_categories(self) -> list[dict[str, Any]]:
        data = await self.execute(ops.CATEGORIES_QUERY)
        return data["categories"]

    async def get_item(self, item_id: str) -> dict[str, Any] | None:
        data = await self.execute(ops.ITEM_QUERY, {"id": item_id})
        return data["item"]

    # Categories

    async def create_category(self, name: str, color: str | None = None) -> dict[str, Any]:
        data = await self.execute(
            ops.CREATE_CATEGORY_MUTATION,
            {"input": {"name": name, "color": color}},
        )
        return data["createCategory"]

    async def update_category(self, category_id: str, **updates: Any) -> dict[str, Any] | None:
        """Update a category; pass name= and/or color=."""
        data = await self.execute(
            ops.UPDATE_CATEGORY_MUTATION,
            {"id": category_id, "input": updates},
        )
        return data["updateCategory"]

    async def delete_category(self, category_id: str) -> bool:
        data = await self.execute(ops.DELETE_CATEGORY_MUTATION, {"id": category_id})
        return data["deleteCategory"]

    # Items

    async def create_item(
        self,
        title: str,
        category_id: str | None = None,
        description: str | None = None,
        favicon: str | None = None,
        url: str | None = None,
        link_description: str | None = None,
    ) -> dict[str, Any]:
        """Create an item; with `url` it gets that URL as its primary link."""
        data = await self.execute(
            ops.CREATE_ITEM_MUTATION,
            {
                "input": {
                    "title": title,
                    "categoryId": category_id,
                    "description": description,
                    "favicon": favicon,
                    "url": url,
                    "linkDescription": link_description,
                },
            },
        )
        return data["createItem"]

    async def update_item(self, item_id: str, **updates: Any) -> dict[str, Any] | None:
        """Update an item; keyword names are the camelCase input fields."""
        data = await self.execute(ops.UPDATE_ITEM_MUTATION, {"id": item_id, "input": updates})
        return data["updateItem"]

    async def delete_item(self, item_id: str) -> bool:
        data = await self.execute(ops.DELETE_ITEM_MUTATION, {"id": item_id})
        return data["deleteItem"]

    # Links

    async def add_item_link(
        self,
        item_id: str,
        url: str,
        description: str | None = None,
        is_primary: bool = False,
    ) -> dict[str, Any]:
        data = await self.execute(
            ops.ADD_ITEM_LINK_MUTATION,
            {
                "itemId": item_id,
                "input": {"url": url, "description": description, "isPrimary": is_primary},
            },
        )
        return data["addItemLink"]

    async def update_item_link(self, link_id: str, **updates: Any) -> dict[str, Any] | None:
        data = await self.execute(
            ops.UPDATE_ITEM_LINK_MUTATION,
            {"id": link_id, "input": updates},
        )
        return data["updateItemLink"]

    async def delete_item_link(self, link_id: str) -> bool:
        data = await self.execute(ops.DELETE_ITEM_LINK_MUTATION, {"id": link_id})
        return data["deleteItemLink"]

    async def set_primary_link(self, item_id: str, link_id: str) -> bool:
        data = await self.execute(
            ops.SET_PRIMARY_LINK_MUTATION,
            {"itemId": item_id, "linkId": link_id},
        )
        return data["setPrimaryLink"]

    # Batch

    async def batch_delete_items(self, item_ids: list[str]) -> dict[str, Any]:
        data = await self.execute(
            ops.BATCH_DELETE_ITEMS_MUTATION,
            {"input": {"itemIds": item_ids}},
        )
        return data["batchDeleteItems"]

    async def batch_move_items(
        self,
        item_ids: list[str],
        category_id: str | None,
    ) -> dict[str, Any]:
        data = await self.execute(
            ops.BATCH_MOVE_ITEMS_MUTATION,
            {"input": {"itemIds": item_ids, "categoryId": category_id}},
        )
        return data["batchMoveItems"]
