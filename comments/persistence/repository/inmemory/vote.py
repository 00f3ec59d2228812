"""In-memory vote repository for testing."""

from typing import Optional

from sqlalchemy.exc import IntegrityError

from comments.domain.model.vote import Vote
from comments.domain.repository.vote import VoteRepository
from comments.domain.value import CommentId, UserId, VoteId, VoteType


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing."""

    def __init__(self) -> None:
        self._votes: dict[VoteId, Vote] = {}

    async def find_by_identity(
        self,
        comment_id: CommentId,
        user_id: Optional[UserId],
        session_id: Optional[str],
    ) -> Optional[Vote]:
        """Find the vote an identity placed on a comment."""
        for vote in self._votes.values():
            if vote.comment_id != comment_id:
                continue
            if user_id is not None and vote.user_id == user_id:
                return vote
            if (
                user_id is None
                and vote.user_id is None
                and session_id
                and vote.session_id == session_id
            ):
                return vote
        return None

    async def count_by_comment(self, comment_id: CommentId, vote_type: VoteType) -> int:
        """Count the votes of one direction on a comment."""
        return sum(
            1
            for v in self._votes.values()
            if v.comment_id == comment_id and v.vote_type == vote_type
        )

    async def save(self, vote: Vote) -> Vote:
        """Save a vote (create, or update by id).

        Raises:
            IntegrityError: If another vote from the same identity exists
        """
        if vote.id not in self._votes:
            if await self.find_by_identity(
                vote.comment_id, vote.user_id, vote.session_id
            ):
                raise IntegrityError("Duplicate vote", None, Exception())
        self._votes[vote.id] = vote
        return vote

    async def delete_by_comment(self, comment_id: CommentId) -> int:
        """Delete every vote on a comment."""
        doomed = [v.id for v in self._votes.values() if v.comment_id == comment_id]
        for vote_id in doomed:
            del self._votes[vote_id]
        return len(doomed)
