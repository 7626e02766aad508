"""API helper utilities."""
from api.helpers.pagination import ResolvedPagination, resolve_pagination

__all__ = [
    "ResolvedPagination",
    "resolve_pagination",
]
