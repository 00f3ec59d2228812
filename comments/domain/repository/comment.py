"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from comments.domain.model.comment import Comment
from comments.domain.value import CommentId, CommentStatus, OwnerId, SiteId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID, regardless of status.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_for_update(self, comment_id: CommentId) -> Optional[Comment]:
        """Read a comment, locking its row until the transaction ends.

        Writes that change one part of a comment (its body, its status)
        start from this read so they keep whatever another request stored
        in the other part.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The stored comment, or None if it does not exist
        """
        pass

    @abstractmethod
    async def find_by_owner(
        self,
        owner_id: OwnerId,
        site_id: SiteId,
        statuses: Optional[Sequence[CommentStatus]] = None,
    ) -> List[Comment]:
        """Find the comments attached to an owner.

        Args:
            owner_id: The owner (content item) ID
            site_id: The owner's site
            statuses: Only return comments in these statuses (None = all)

        Returns:
            List of comments ordered by comment date
        """
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update).

        A comment without an id is inserted and receives one.

        Args:
            comment: The comment to save

        Returns:
            The saved comment, with its id populated
        """
        pass

    @abstractmethod
    async def delete(self, comment_id: CommentId) -> None:
        """Delete a comment (hard delete).

        Args:
            comment_id: The comment ID to delete
        """
        pass
