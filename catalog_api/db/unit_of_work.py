# catalog_api/db/unit_of_work.py
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.core.logging import get_logger

logger = get_logger(__name__)


class UnitOfWork:
    """
    Commit boundary over a session.

    Repositories only stage changes (add/flush); a service calls
    ``save_changes`` once per logical operation. Used as an async context
    manager, any exception (including task cancellation) rolls back what was
    staged so far.
    """

    def __init__(self, db_session: AsyncSession):
        self.db_session = db_session

    async def save_changes(self) -> None:
        """Commit all pending writes atomically"""
        await self.db_session.commit()

    async def rollback(self) -> None:
        await self.db_session.rollback()

    async def __aenter__(self) -> "UnitOfWork":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        if exc_type is not None:
            logger.warning(f"Rolling back unit of work after {exc_type.__name__}")
            await self.rollback()
        return False
