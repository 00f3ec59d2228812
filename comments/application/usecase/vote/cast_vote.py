"""Cast vote use case."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict

from comments.domain.error import NotFoundError
from comments.domain.service import CommentService, SessionStore, VoteService
from comments.domain.value import Actor, CommentId, VoteType


class CastVoteRequest(BaseModel):
    """Cast vote request."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    comment_id: str  # UUID string
    direction: VoteType
    actor: Actor
    session: SessionStore


class CastVoteResponse(BaseModel):
    """Cast vote response."""

    comment_id: str
    direction: VoteType
    upvotes: int
    downvotes: int
    net_score: int


class CastVoteUseCase:
    """Use case for voting a comment up or down."""

    def __init__(
        self, comment_service: CommentService, vote_service: VoteService
    ) -> None:
        """Initialize cast vote use case.

        Args:
            comment_service: Comment domain service (lookup)
            vote_service: Vote domain service
        """
        self.comment_service = comment_service
        self.vote_service = vote_service

    async def execute(self, request: CastVoteRequest) -> CastVoteResponse:
        """Execute cast vote flow.

        Repeating a vote in the same direction changes nothing.

        Args:
            request: Cast vote request

        Returns:
            The actor's vote and the comment's updated tallies

        Raises:
            NotFoundError: If the comment does not exist
            NotAuthorizedError: If voting is not permitted for the actor
        """
        comment_id = CommentId(UUID(request.comment_id))
        comment = await self.comment_service.get_comment_by_id(comment_id)
        if comment is None:
            raise NotFoundError("comment", request.comment_id)

        vote = await self.vote_service.cast_vote(
            comment, request.actor, request.direction, request.session
        )
        upvotes = await self.vote_service.get_upvotes(comment)
        downvotes = await self.vote_service.get_downvotes(comment)
        return CastVoteResponse(
            comment_id=request.comment_id,
            direction=vote.vote_type,
            upvotes=upvotes,
            downvotes=downvotes,
            net_score=upvotes - downvotes,
        )
