"""In-memory transaction control for testing."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from comments.domain.repository.transaction import TransactionManager


class InMemoryTransactionManager(TransactionManager):
    """Counts savepoints instead of opening them.

    In-memory writes are not undone; rolled_back records how many blocks
    raised so tests can check that a failure stayed contained.
    """

    def __init__(self) -> None:
        self.opened = 0
        self.rolled_back = 0

    @asynccontextmanager
    async def savepoint(self) -> AsyncIterator[None]:
        self.opened += 1
        try:
            yield
        except Exception:
            self.rolled_back += 1
            raise
