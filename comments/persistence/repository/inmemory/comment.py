"""In-memory comment repository for testing."""

from typing import Optional, Sequence
from uuid import uuid4

from comments.domain.model.comment import Comment
from comments.domain.repository.comment import CommentRepository
from comments.domain.value import CommentId, CommentStatus, OwnerId, SiteId


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def find_for_update(self, comment_id: CommentId) -> Optional[Comment]:
        """Read a comment (no locking needed in memory)."""
        return self._comments.get(comment_id)

    async def find_by_owner(
        self,
        owner_id: OwnerId,
        site_id: SiteId,
        statuses: Optional[Sequence[CommentStatus]] = None,
    ) -> list[Comment]:
        """Find the comments attached to an owner, oldest first."""
        comments = [
            c
            for c in self._comments.values()
            if c.owner_id == owner_id and c.owner_site_id == site_id
        ]

        # Filter by status
        if statuses is not None:
            comments = [c for c in comments if c.status in statuses]

        comments.sort(key=lambda c: c.comment_date or c.created_at)
        return comments

    async def save(self, comment: Comment) -> Comment:
        """Save a comment, assigning an id on first save."""
        if comment.id is None:
            comment = comment.model_copy(update={"id": CommentId(uuid4())})
        self._comments[comment.id] = comment
        return comment

    async def delete(self, comment_id: CommentId) -> None:
        """Delete a comment (hard delete)."""
        self._comments.pop(comment_id, None)
