"""Client-side data adapters for the Corvus API."""

from .api_client import WishlistApiClient, WishlistApiError
from .storage import WishlistCache

__all__ = ["WishlistApiClient", "WishlistApiError", "WishlistCache"]
