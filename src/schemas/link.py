"""Pydantic schemas for item link endpoints."""
from datetime import datetime

from schemas.base import CamelModel


class LinkCreate(CamelModel):
    """Input for attaching a link to an item. URL presence is checked by the caller."""

    url: str | None = None
    description: str | None = None
    is_primary: bool = False


class LinkUpdate(CamelModel):
    """Partial link update; only fields present in the payload are applied."""

    url: str | None = None
    description: str | None = None
    is_primary: bool | None = None


class LinkResponse(CamelModel):
    """Link as exposed to clients."""

    id: str
    item_id: str
    url: str
    description: str | None
    is_primary: bool
    created_at: datetime
    updated_at: datetime
