"""Pydantic schemas for category endpoints."""
from datetime import datetime

from pydantic import Field, field_validator

from schemas.base import CamelModel
from schemas.validators import MAX_CATEGORY_NAME_LENGTH, MAX_COLOR_LENGTH


class CategoryCreate(CamelModel):
    """Validated input for creating a category."""

    name: str = Field(min_length=1, max_length=MAX_CATEGORY_NAME_LENGTH)
    color: str | None = Field(default=None, max_length=MAX_COLOR_LENGTH)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        """Trim whitespace and reject blank names."""
        v = v.strip()
        if not v:
            raise ValueError("Name is required")
        return v


class CategoryUpdate(CamelModel):
    """
    Partial category update.

    Only fields present in the payload are applied (model_dump(exclude_unset=True)),
    so an explicit null color clears it while an omitted color leaves it alone.
    """

    name: str | None = Field(default=None, max_length=MAX_CATEGORY_NAME_LENGTH)
    color: str | None = Field(default=None, max_length=MAX_COLOR_LENGTH)


class CategoryResponse(CamelModel):
    """Category as exposed to clients."""

    id: str
    user_id: int
    name: str
    color: str | None
    created_at: datetime
    updated_at: datetime


class CategoryCreateRequest(CamelModel):
    """Raw create payload; the endpoint reports a missing name as 400."""

    name: str | None = None
    color: str | None = None
