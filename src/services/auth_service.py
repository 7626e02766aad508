"""Service layer for registration, login, and session lifecycle."""
import logging
from datetime import UTC, datetime, timedelta

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.crypto import generate_session_id, hash_password, verify_password
from models.user import User
from models.user_session import UserSession
from services.category_service import create_default_categories
from services.exceptions import UserAlreadyExistsError

logger = logging.getLogger(__name__)

SESSION_TTL_DAYS = 7


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    """Look up a user by email address."""
    result = await db.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def get_user_by_id(db: AsyncSession, user_id: int) -> User | None:
    """Look up a user by primary key."""
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def register(
    db: AsyncSession,
    email: str,
    password: str,
    name: str,
) -> User:
    """
    Create a user with a hashed password and the default categories.

    Raises:
        UserAlreadyExistsError: If the email is taken. Neither a user nor any
            categories are created in that case.

    Note:
        Uses flush(), not commit. Session generator handles commit at request end.
    """
    if await get_user_by_email(db, email) is not None:
        raise UserAlreadyExistsError(email)

    user = User(email=email, password_hash=hash_password(password), name=name)
    db.add(user)
    try:
        await db.flush()
    except IntegrityError as e:
        # Race condition: another request registered the same email between
        # our SELECT and INSERT.
        await db.rollback()
        raise UserAlreadyExistsError(email) from e

    await create_default_categories(db, user.id)
    logger.info("Registered user %s", user.id)
    return user


async def login(db: AsyncSession, email: str, password: str) -> User | None:
    """Return the user when the credentials match, None otherwise."""
    user = await get_user_by_email(db, email)
    if user is None:
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


async def create_session(
    db: AsyncSession,
    user_id: int,
    ttl_days: int = SESSION_TTL_DAYS,
) -> str:
    """
    Persist a new session for the user.

    Returns:
        The opaque session token to hand to the client.
    """
    now = datetime.now(UTC)
    session = UserSession(
        id=generate_session_id(),
        user_id=user_id,
        expires_at=now + timedelta(days=ttl_days),
        created_at=now,
    )
    db.add(session)
    await db.flush()
    return session.id


async def validate_session(db: AsyncSession, session_id: str) -> User | None:
    """
    Resolve a session token to its user.

    Expired sessions are filtered in the query itself, so rows the cleanup task
    has not removed yet are still treated as absent. Returns None for unknown or
    expired tokens rather than raising.
    """
    if not session_id:
        return None

    result = await db.execute(
        select(User)
        .join(UserSession, UserSession.user_id == User.id)
        .where(
            UserSession.id == session_id,
            UserSession.expires_at > datetime.now(UTC),
        ),
    )
    return result.scalar_one_or_none()


async def delete_session(db: AsyncSession, session_id: str) -> None:
    """Delete a session. No error if it does not exist."""
    await db.execute(delete(UserSession).where(UserSession.id == session_id))


async def cleanup_expired_sessions(db: AsyncSession, now: datetime | None = None) -> int:
    """
    Delete every session whose expiry has passed.

    Returns:
        Number of sessions removed.
    """
    if now is None:
        now = datetime.now(UTC)
    result = await db.execute(delete(UserSession).where(UserSession.expires_at <= now))
    return result.rowcount or 0
