"""Toggle flag use case."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict

from comments.domain.error import NotFoundError
from comments.domain.service import CommentService, FlagService, SessionStore
from comments.domain.value import Actor, CommentId


class ToggleFlagRequest(BaseModel):
    """Toggle flag request."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    comment_id: str  # UUID string
    actor: Actor
    session: SessionStore


class ToggleFlagResponse(BaseModel):
    """Toggle flag response."""

    comment_id: str
    flagged: bool  # State for this identity after the toggle
    flag_count: int


class ToggleFlagUseCase:
    """Use case for flagging or unflagging a comment."""

    def __init__(
        self, comment_service: CommentService, flag_service: FlagService
    ) -> None:
        """Initialize toggle flag use case.

        Args:
            comment_service: Comment domain service (lookup)
            flag_service: Flag domain service
        """
        self.comment_service = comment_service
        self.flag_service = flag_service

    async def execute(self, request: ToggleFlagRequest) -> ToggleFlagResponse:
        """Execute toggle flag flow.

        Args:
            request: Toggle flag request

        Returns:
            Flag state for the actor and the comment's total flag count

        Raises:
            NotFoundError: If the comment does not exist
            NotAuthorizedError: If flagging is not permitted for the actor
        """
        comment_id = CommentId(UUID(request.comment_id))
        comment = await self.comment_service.get_comment_by_id(comment_id)
        if comment is None:
            raise NotFoundError("comment", request.comment_id)

        flagged = await self.flag_service.toggle_flag(
            comment, request.actor, request.session
        )
        return ToggleFlagResponse(
            comment_id=request.comment_id,
            flagged=flagged,
            flag_count=await self.flag_service.count_flags(comment),
        )
