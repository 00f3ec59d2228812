"""Moderation status use cases."""

from uuid import UUID

from pydantic import BaseModel, Field

from comments.application.usecase.base import BaseUseCase
from comments.domain.service import CommentService
from comments.domain.value import Actor, CommentId, CommentStatus


class UpdateCommentStatusRequest(BaseModel):
    """Update comment status request."""

    comment_id: str  # UUID string
    status: CommentStatus
    actor: Actor


class UpdateCommentStatusResponse(BaseModel):
    """Update comment status response."""

    comment_id: str
    status: CommentStatus


class UpdateCommentStatusUseCase(
    BaseUseCase[UpdateCommentStatusRequest, UpdateCommentStatusResponse]
):
    """Use case for an administrator setting a comment's status."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize update comment status use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(
        self, request: UpdateCommentStatusRequest
    ) -> UpdateCommentStatusResponse:
        """Execute update status flow.

        Args:
            request: Update comment status request

        Returns:
            The comment's new status

        Raises:
            NotAuthorizedError: If the actor is not an administrator
            NotFoundError: If the comment does not exist
        """
        comment = await self.comment_service.update_status(
            CommentId(UUID(request.comment_id)), request.status, request.actor
        )
        return UpdateCommentStatusResponse(
            comment_id=str(comment.id), status=comment.status
        )


class BulkSetStatusRequest(BaseModel):
    """Bulk set status request."""

    comment_ids: list[str] = Field(min_length=1)
    status: CommentStatus
    actor: Actor


class BulkStatusOutcome(BaseModel):
    """Result for one comment of a bulk request."""

    comment_id: str
    success: bool
    error: str | None = None


class BulkSetStatusResponse(BaseModel):
    """Bulk set status response."""

    outcomes: list[BulkStatusOutcome]
    updated: int
    failed: int


class BulkSetStatusUseCase(BaseUseCase[BulkSetStatusRequest, BulkSetStatusResponse]):
    """Use case for setting the status of many comments at once."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize bulk set status use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: BulkSetStatusRequest) -> BulkSetStatusResponse:
        """Execute bulk status flow.

        Ids that are not valid UUIDs are reported as failures alongside
        the ones the domain rejects; neither stops the batch.

        Args:
            request: Bulk set status request

        Returns:
            One outcome per requested id, in request order
        """
        outcomes: dict[str, BulkStatusOutcome] = {}
        valid: list[CommentId] = []
        for raw_id in request.comment_ids:
            try:
                valid.append(CommentId(UUID(raw_id)))
            except ValueError:
                outcomes[raw_id] = BulkStatusOutcome(
                    comment_id=raw_id, success=False, error="Invalid comment id"
                )

        results = await self.comment_service.bulk_update_status(
            valid, request.status, request.actor
        )
        by_id = {str(r.comment_id): r for r in results}

        ordered: list[BulkStatusOutcome] = []
        for raw_id in request.comment_ids:
            if raw_id in outcomes:
                ordered.append(outcomes[raw_id])
                continue
            result = by_id[str(UUID(raw_id))]
            ordered.append(
                BulkStatusOutcome(
                    comment_id=raw_id, success=result.success, error=result.error
                )
            )

        updated = sum(1 for o in ordered if o.success)
        return BulkSetStatusResponse(
            outcomes=ordered, updated=updated, failed=len(ordered) - updated
        )
