"""
Expired session cleanup task.

Sessions are already ignored once expired (validation filters on expires_at);
this task only reclaims the rows. Designed to run as a cron job.

Usage:
    python -m tasks.cleanup
"""
import asyncio
import logging
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from db.session import async_session_factory
from services.auth_service import cleanup_expired_sessions

logger = logging.getLogger(__name__)


async def run_cleanup(
    db: AsyncSession | None = None,
    now: datetime | None = None,
) -> int:
    """
    Delete expired sessions and commit.

    Args:
        db: Database session. If None, creates one from async_session_factory.
        now: Cutoff time. Defaults to datetime.now(UTC).

    Returns:
        Number of sessions deleted.
    """
    logger.info("Starting session cleanup")

    async def _run(session: AsyncSession) -> int:
        deleted = await cleanup_expired_sessions(session, now=now)
        await session.commit()
        return deleted

    if db is not None:
        deleted = await _run(db)
    else:
        async with async_session_factory() as session:
            deleted = await _run(session)

    logger.info("Cleanup complete: %d expired sessions deleted", deleted)
    return deleted


def main() -> None:
    """Entry point for running cleanup as a script."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    asyncio.run(run_cleanup())


if __name__ == "__main__":
    main()
