"""Session cookie authentication."""
from fastapi import Depends, HTTPException, Response, status
from fastapi.security import APIKeyCookie
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import Settings, get_settings
from db.session import get_async_session
from models.user import User
from services import auth_service

SESSION_COOKIE_NAME = "corvus-session"

# Reads the session cookie; missing cookies are handled below, not by FastAPI
session_cookie = APIKeyCookie(name=SESSION_COOKIE_NAME, auto_error=False)


def set_session_cookie(response: Response, session_id: str, settings: Settings) -> None:
    """
    Attach the session cookie to a response.

    Production cookies are Secure with SameSite=None so the browser extension can
    send them cross-site. Development and insecure deployments fall back to
    SameSite=Lax without Secure, since browsers drop Secure cookies over plain HTTP.
    """
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=session_id,
        max_age=settings.session_ttl_days * 24 * 60 * 60,
        path="/",
        httponly=True,
        secure=settings.secure_cookies,
        samesite="none" if settings.secure_cookies else "lax",
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    """Expire the session cookie (Max-Age=0) with the same attributes it was set with."""
    response.delete_cookie(
        key=SESSION_COOKIE_NAME,
        path="/",
        httponly=True,
        secure=settings.secure_cookies,
        samesite="none" if settings.secure_cookies else "lax",
    )


async def get_optional_user(
    session_id: str | None = Depends(session_cookie),
    db: AsyncSession = Depends(get_async_session),
) -> User | None:
    """Dependency returning the session's user, or None without raising."""
    if not session_id:
        return None
    return await auth_service.validate_session(db, session_id)


async def get_current_user(
    user: User | None = Depends(get_optional_user),
) -> User:
    """
    Dependency that requires a valid session.

    Missing, unknown and expired sessions all produce the same 401 so clients
    cannot tell them apart.
    """
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return user
