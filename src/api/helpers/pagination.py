"""Page/pageSize resolution shared by the REST and GraphQL adapters."""
from dataclasses import dataclass

from core.config import Settings

# Largest page a client can address. Keeps offsets within a 64-bit SQL integer and
# the page number within a GraphQL Int.
MAX_PAGE = 2**31 - 1


@dataclass(frozen=True)
class ResolvedPagination:
    """Effective page window after defaults and clamping."""

    page: int
    page_size: int

    @property
    def limit(self) -> int:
        return self.page_size

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


def _to_int(value: int | str | None) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(value.strip())
    except ValueError:
        return None


def resolve_pagination(
    page: int | str | None,
    page_size: int | str | None,
    settings: Settings,
) -> ResolvedPagination:
    """
    Apply pagination defaults and limits.

    Missing, non-numeric and non-positive values fall back to page 1 and the
    default page size. Page size is capped at settings.max_page_size whatever
    the caller asks for, and page at MAX_PAGE, which is past any real result set.
    """
    resolved_page = _to_int(page)
    if resolved_page is None or resolved_page < 1:
        resolved_page = 1
    resolved_page = min(resolved_page, MAX_PAGE)

    resolved_size = _to_int(page_size)
    if resolved_size is None or resolved_size < 1:
        resolved_size = settings.default_page_size
    resolved_size = min(resolved_size, settings.max_page_size)

    return ResolvedPagination(page=resolved_page, page_size=resolved_size)
