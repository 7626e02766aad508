"""Registration, login, logout and current-user endpoints."""
import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_optional_user, get_settings
from core.auth import clear_session_cookie, session_cookie, set_session_cookie
from core.config import Settings
from models.user import User
from schemas.auth import (
    AuthResponse,
    LoginRequest,
    MeResponse,
    PublicUser,
    RegisterRequest,
    UserResponse,
)
from schemas.validators import validate_registration_fields
from services import auth_service
from services.exceptions import UserAlreadyExistsError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse)
async def register(
    data: RegisterRequest,
    response: Response,
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
) -> AuthResponse:
    """
    Create an account, start a session and set the session cookie.

    Returns 400 if any field is missing or too long and 409 if the email is taken.
    """
    if not data.email or not data.password or not data.name:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email, password, and name are required",
        )
    try:
        validate_registration_fields(data.email, data.name)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e

    try:
        user = await auth_service.register(db, data.email, data.password, data.name)
    except UserAlreadyExistsError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e

    session_id = await auth_service.create_session(db, user.id, settings.session_ttl_days)
    set_session_cookie(response, session_id, settings)
    return AuthResponse(user=PublicUser.model_validate(user))


@router.post("/login", response_model=AuthResponse)
async def login(
    data: LoginRequest,
    response: Response,
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
) -> AuthResponse:
    """Verify credentials, start a session and set the session cookie."""
    if not data.email or not data.password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email and password are required",
        )

    user = await auth_service.login(db, data.email, data.password)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    session_id = await auth_service.create_session(db, user.id, settings.session_ttl_days)
    set_session_cookie(response, session_id, settings)
    return AuthResponse(user=PublicUser.model_validate(user))


@router.get("/logout")
async def logout(
    session_id: str | None = Depends(session_cookie),
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
) -> RedirectResponse:
    """
    Delete the session and redirect to "/".

    The cookie is cleared even if the session row cannot be deleted, so the
    browser never keeps a token the server may have lost track of.
    """
    if session_id:
        try:
            await auth_service.delete_session(db, session_id)
        except Exception:
            logger.exception("Failed to delete session during logout")
            await db.rollback()

    response = RedirectResponse(url="/", status_code=status.HTTP_302_FOUND)
    clear_session_cookie(response, settings)
    return response


@router.get("/me", response_model=MeResponse)
async def me(user: User | None = Depends(get_optional_user)) -> MeResponse:
    """Return the current user, or {"user": null} without a valid session."""
    if user is None:
        return MeResponse(user=None)
    return MeResponse(user=UserResponse.model_validate(user))
