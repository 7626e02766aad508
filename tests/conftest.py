"""Pytest fixtures for testing."""
import os

# Must be set before any app imports that trigger Settings validation
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("INSECURE_COOKIES", "true")

from collections.abc import AsyncGenerator, Awaitable, Callable, Generator  # noqa: E402
from contextlib import AbstractAsyncContextManager, asynccontextmanager  # noqa: E402
from typing import Any  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import event  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from core.auth import SESSION_COOKIE_NAME  # noqa: E402
from core.crypto import hash_password  # noqa: E402
from db.session import build_engine  # noqa: E402
from models.base import Base  # noqa: E402
from models.user import User  # noqa: E402
from services.auth_service import create_session  # noqa: E402
from services.category_service import create_default_categories  # noqa: E402

TEST_PASSWORD = "correct horse battery staple"


@pytest.fixture
async def async_engine() -> AsyncGenerator[AsyncEngine]:
    """
    Fresh in-memory SQLite database per test.

    StaticPool keeps the single connection alive, otherwise the in-memory
    database would vanish between checkouts.
    """
    engine = build_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def db_session(async_engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Create an async session bound to the test database."""
    session_factory = async_sessionmaker(
        bind=async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with session_factory() as session:
        yield session


@pytest.fixture
def executed_statements(async_engine: AsyncEngine) -> Generator[list[str]]:
    """Record every SQL statement sent to the database while the test runs."""
    statements: list[str] = []

    def _record(
        _conn: Any, _cursor: Any, statement: str, *_args: Any,
    ) -> None:
        statements.append(statement)

    event.listen(async_engine.sync_engine, "before_cursor_execute", _record)
    yield statements
    event.remove(async_engine.sync_engine, "before_cursor_execute", _record)


async def make_user(
    db_session: AsyncSession,
    email: str,
    name: str = "Test User",
    password: str = TEST_PASSWORD,
    with_default_categories: bool = True,
) -> User:
    """Insert a user directly, optionally with the default categories."""
    user = User(email=email, password_hash=hash_password(password), name=name)
    db_session.add(user)
    await db_session.flush()
    await db_session.refresh(user)
    if with_default_categories:
        await create_default_categories(db_session, user.id)
    return user


@pytest.fixture
async def test_user(db_session: AsyncSession) -> User:
    """Create a test user with the default categories."""
    return await make_user(db_session, "user@example.com", name="Test User")


@pytest.fixture
async def other_user(db_session: AsyncSession) -> User:
    """Create another test user for isolation tests."""
    return await make_user(db_session, "other@example.com", name="Other User")


@asynccontextmanager
async def api_client(
    db_session: AsyncSession,
    session_id: str | None = None,
    raise_app_exceptions: bool = True,
) -> AsyncGenerator[AsyncClient]:
    """
    AsyncClient against the app with the test session injected.

    When session_id is given the client sends it as the session cookie.
    """
    from api.main import app
    from db.session import get_async_session

    async def override_get_async_session() -> AsyncGenerator[AsyncSession]:
        yield db_session

    app.dependency_overrides[get_async_session] = override_get_async_session

    cookies = {SESSION_COOKIE_NAME: session_id} if session_id else None
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app, raise_app_exceptions=raise_app_exceptions),
            base_url="http://test",
            cookies=cookies,
        ) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient]:
    """Unauthenticated test client."""
    async with api_client(db_session) as test_client:
        yield test_client


@pytest.fixture
async def auth_client(
    db_session: AsyncSession,
    test_user: User,
) -> AsyncGenerator[AsyncClient]:
    """Test client carrying a valid session cookie for test_user."""
    session_id = await create_session(db_session, test_user.id)
    async with api_client(db_session, session_id) as test_client:
        yield test_client


@pytest.fixture
async def other_client(
    db_session: AsyncSession,
    other_user: User,
) -> AsyncGenerator[AsyncClient]:
    """Test client carrying a valid session cookie for other_user."""
    session_id = await create_session(db_session, other_user.id)
    async with api_client(db_session, session_id) as test_client:
        yield test_client


@pytest.fixture
def user_factory(db_session: AsyncSession) -> Callable[..., Awaitable[User]]:
    """Factory fixture: `await user_factory(email, ...)` creates a user."""

    async def _create(email: str, **kwargs: Any) -> User:
        return await make_user(db_session, email, **kwargs)

    return _create


@pytest.fixture
def client_factory(
    db_session: AsyncSession,
) -> Callable[..., AbstractAsyncContextManager[AsyncClient]]:
    """
    Factory fixture for custom clients.

    Usage: `async with client_factory(session_id, raise_app_exceptions=False) as c:`
    """

    def _create(
        session_id: str | None = None,
        raise_app_exceptions: bool = True,
    ) -> AbstractAsyncContextManager[AsyncClient]:
        return api_client(db_session, session_id, raise_app_exceptions)

    return _create
