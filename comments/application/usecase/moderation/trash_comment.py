"""Trash comment use case."""

from uuid import UUID

from pydantic import BaseModel

from comments.domain.service import CommentService
from comments.domain.value import Actor, CommentId, CommentStatus


class TrashCommentRequest(BaseModel):
    """Trash comment request."""

    comment_id: str  # UUID string
    actor: Actor


class TrashCommentResponse(BaseModel):
    """Trash comment response."""

    comment_id: str
    status: CommentStatus


class TrashCommentUseCase:
    """Use case for an author trashing their own comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize trash comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: TrashCommentRequest) -> TrashCommentResponse:
        """Execute trash flow.

        Raises:
            NotFoundError: If the comment does not exist
            NotAuthorizedError: If the actor did not write the comment
        """
        comment = await self.comment_service.trash(
            CommentId(UUID(request.comment_id)), request.actor
        )
        return TrashCommentResponse(comment_id=str(comment.id), status=comment.status)
