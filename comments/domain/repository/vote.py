"""Vote repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from comments.domain.model.vote import Vote
from comments.domain.value import CommentId, UserId, VoteType


class VoteRepository(ABC):
    """Repository for Vote entity.

    Defines the contract for vote persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_identity(
        self,
        comment_id: CommentId,
        user_id: Optional[UserId],
        session_id: Optional[str],
    ) -> Optional[Vote]:
        """Find the vote an identity cast on a comment.

        Args:
            comment_id: The voted comment
            user_id: Registered user ID (None for guests)
            session_id: Guest session token

        Returns:
            The vote if found, None otherwise
        """
        pass

    @abstractmethod
    async def count_by_comment(
        self, comment_id: CommentId, vote_type: VoteType
    ) -> int:
        """Count votes of one direction on a comment.

        Args:
            comment_id: The comment
            vote_type: Direction to count

        Returns:
            Number of votes
        """
        pass

    @abstractmethod
    async def save(self, vote: Vote) -> Vote:
        """Save a vote (create or update direction).

        Raises:
            IntegrityError: If a different vote row already exists for
                this identity and comment
        """
        pass

    @abstractmethod
    async def delete_by_comment(self, comment_id: CommentId) -> int:
        """Delete every vote on a comment.

        Returns:
            Number of votes deleted
        """
        pass
