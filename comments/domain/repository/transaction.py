"""Transaction control interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager


class TransactionManager(ABC):
    """Scopes writes inside the request's unit of work."""

    @abstractmethod
    def savepoint(self) -> AbstractAsyncContextManager[None]:
        """Open a savepoint around a block of writes.

        If the block raises, only its own writes are rolled back and the
        exception propagates; the enclosing transaction stays usable.
        """
        pass
