"""In-memory user directory for testing."""

from typing import Optional, Sequence

from comments.domain.model.user import User
from comments.domain.repository.user import UserRepository
from comments.domain.value import UserId


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}

    def add(self, user: User) -> User:
        """Register a user (stands in for the host platform)."""
        self._users[user.id] = user
        return user

    def remove(self, user_id: UserId) -> None:
        """Forget a user, as if their account was deleted."""
        self._users.pop(user_id, None)

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._users.get(user_id)

    async def find_by_ids(self, user_ids: Sequence[UserId]) -> list[User]:
        """Find users by IDs."""
        return [self._users[uid] for uid in user_ids if uid in self._users]
