"""Delete comment use case."""

from uuid import UUID

from pydantic import BaseModel

from comments.domain.service import CommentService
from comments.domain.value import Actor, CommentId


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    comment_id: str  # UUID string
    actor: Actor


class DeleteCommentResponse(BaseModel):
    """Delete comment response."""

    deleted_ids: list[str]


class DeleteCommentUseCase:
    """Use case for hard deleting a comment and its replies."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize delete comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        """Execute delete flow.

        Args:
            request: Delete comment request

        Returns:
            IDs of every comment removed, deepest first

        Raises:
            NotAuthorizedError: If the actor is not an administrator
            NotFoundError: If the comment does not exist
        """
        deleted = await self.comment_service.delete_comment(
            CommentId(UUID(request.comment_id)), request.actor
        )
        return DeleteCommentResponse(deleted_ids=[str(i) for i in deleted])
