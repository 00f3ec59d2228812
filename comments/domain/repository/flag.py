"""Flag repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from comments.domain.model.flag import Flag
from comments.domain.value import CommentId, FlagId, UserId


class FlagRepository(ABC):
    """Repository for Flag entity."""

    @abstractmethod
    async def find_by_id(self, flag_id: FlagId) -> Optional[Flag]:
        """Find a flag by ID."""
        pass

    @abstractmethod
    async def find_by_identity(
        self,
        comment_id: CommentId,
        user_id: Optional[UserId],
        session_id: Optional[str],
    ) -> Optional[Flag]:
        """Find the flag an identity placed on a comment.

        The identity is user_id when given, otherwise session_id.

        Args:
            comment_id: The flagged comment
            user_id: Registered user ID (None for guests)
            session_id: Guest session token

        Returns:
            The flag if found, None otherwise
        """
        pass

    @abstractmethod
    async def count_by_comment(self, comment_id: CommentId) -> int:
        """Count flags on a comment, read from the store on every call."""
        pass

    @abstractmethod
    async def save(self, flag: Flag) -> Flag:
        """Save a flag (create).

        Raises:
            IntegrityError: If this identity already flagged the comment
        """
        pass

    @abstractmethod
    async def delete(self, flag_id: FlagId) -> bool:
        """Delete a flag.

        Returns:
            True if a flag was deleted, False if none existed
        """
        pass

    @abstractmethod
    async def delete_by_comment(self, comment_id: CommentId) -> int:
        """Delete every flag on a comment.

        Returns:
            Number of flags deleted
        """
        pass
