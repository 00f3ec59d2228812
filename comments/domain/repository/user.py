"""User directory interface (host identity store)."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from comments.domain.model.user import User
from comments.domain.value import UserId


class UserRepository(ABC):
    """Read access to the host platform's user accounts."""

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Returns:
            The user if found, None if the account does not exist
        """
        pass

    @abstractmethod
    async def find_by_ids(self, user_ids: Sequence[UserId]) -> List[User]:
        """Find several users by ID (batch query)."""
        pass
