"""PostgreSQL transaction control."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession

from comments.domain.repository import TransactionManager


class PostgresTransactionManager(TransactionManager):
    """Savepoints on the request's session (SAVEPOINT / ROLLBACK TO)."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize with the request's session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    @asynccontextmanager
    async def savepoint(self) -> AsyncIterator[None]:
        async with self.session.begin_nested():
            yield
