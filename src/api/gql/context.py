"""Per-request GraphQL context."""
from fastapi import Depends
from graphql import GraphQLError
from sqlalchemy.ext.asyncio import AsyncSession
from strawberry.fastapi import BaseContext

from api.dependencies import get_async_session, get_optional_user, get_settings
from core.auth import session_cookie
from core.config import Settings
from models.user import User


class GraphQLContext(BaseContext):
    """
    Request-scoped state shared by all resolvers of one operation.

    The caller is resolved from the session cookie once per request; resolvers
    read `user` instead of re-validating. `response` is filled in by strawberry
    and is where auth mutations set or clear the cookie.
    """

    def __init__(
        self,
        db: AsyncSession,
        user: User | None,
        settings: Settings,
        session_id: str | None = None,
    ) -> None:
        super().__init__()
        self.db = db
        self.user = user
        self.settings = settings
        self.session_id = session_id

    def require_user(self) -> User:
        """Return the authenticated user or raise UNAUTHENTICATED."""
        if self.user is None:
            raise GraphQLError("Not authenticated", extensions={"code": "UNAUTHENTICATED"})
        return self.user


async def get_context(
    session_id: str | None = Depends(session_cookie),
    user: User | None = Depends(get_optional_user),
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
) -> GraphQLContext:
    """FastAPI dependency building the GraphQL context."""
    return GraphQLContext(db=db, user=user, settings=settings, session_id=session_id)
