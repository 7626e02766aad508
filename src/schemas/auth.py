"""Pydantic schemas for authentication endpoints."""
from datetime import datetime

from schemas.base import CamelModel


class RegisterRequest(CamelModel):
    """
    Registration payload.

    Fields are optional at the schema level so missing values produce the
    "required" message from the endpoint rather than a 422.
    """

    email: str | None = None
    password: str | None = None
    name: str | None = None


class LoginRequest(CamelModel):
    """Login payload."""

    email: str | None = None
    password: str | None = None


class PublicUser(CamelModel):
    """Minimal user shape returned by register and login."""

    id: int
    name: str
    email: str


class UserResponse(CamelModel):
    """Full user profile. Never includes the password hash."""

    id: int
    email: str
    name: str
    created_at: datetime
    updated_at: datetime


class AuthResponse(CamelModel):
    """Result of a successful register or login."""

    success: bool = True
    user: PublicUser


class MeResponse(CamelModel):
    """Current user, or null when the request carries no valid session."""

    user: UserResponse | None
