"""Shared utility functions for service layer."""


def escape_like(value: str) -> str:
    r"""
    Escape special LIKE characters for safe use in LIKE/ILIKE patterns.

    LIKE treats these characters specially:
    - % matches any sequence of characters
    - _ matches any single character
    - \\ is the escape character

    This function escapes them so they match literally. Use with escape="\\".
    """
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def normalize_search(value: str | None) -> str | None:
    """Trim a search string; blank input means no search."""
    if value is None:
        return None
    value = value.strip()
    return value or None
