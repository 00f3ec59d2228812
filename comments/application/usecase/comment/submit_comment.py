"""Submit comment use case (create and edit)."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from comments.application.usecase.base import BaseUseCase
from comments.domain.error import ValidationFailedError
from comments.domain.model import Comment
from comments.domain.service import CommentService
from comments.domain.value import (
    NOT_PROVIDED,
    Actor,
    CommentId,
    CommentStatus,
    CommentSubmission,
    NewParent,
    OwnerId,
    SiteId,
    SpamCheckFields,
)


class SubmitCommentRequest(BaseModel):
    """Submit comment request.

    Leaving new_parent_id out of the request keeps an edited comment where
    it is; sending it as null moves the comment to the thread root.
    """

    owner_id: str  # UUID string
    site_id: int
    comment: str
    actor: Actor
    comment_id: str | None = None  # Set when editing
    new_parent_id: str | None = None
    name: str | None = None  # Guests only
    email: str | None = None  # Guests only
    url: str | None = None  # Guests only
    honeypot: str | None = None
    rendered_at: datetime | None = None


class SubmittedComment(BaseModel):
    """A comment as returned after submission."""

    comment_id: str
    owner_id: str
    site_id: int
    status: CommentStatus
    text: str
    comment_date: datetime | None


class SubmitCommentResponse(BaseModel):
    """Submit comment response."""

    success: bool
    comment: SubmittedComment | None = None
    errors: dict[str, list[str]] = {}


class SubmitCommentUseCase(BaseUseCase[SubmitCommentRequest, SubmitCommentResponse]):
    """Use case for submitting a new comment or an edit."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize submit comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: SubmitCommentRequest) -> SubmitCommentResponse:
        """Execute submit comment flow.

        Validation failures are returned in the response; missing records
        and authorization failures are raised.

        Args:
            request: Submit comment request

        Returns:
            Response with the saved comment, or the field errors

        Raises:
            NotFoundError: If the edited comment or parent does not exist
            ValueError: If an id is not a valid UUID
        """
        submission = CommentSubmission(
            comment_id=CommentId(UUID(request.comment_id))
            if request.comment_id
            else None,
            owner_id=OwnerId(UUID(request.owner_id)),
            owner_site_id=SiteId(request.site_id),
            comment=request.comment,
            name=request.name,
            email=request.email,
            url=request.url,
            new_parent_id=self._new_parent(request),
            spam=SpamCheckFields(
                honeypot=request.honeypot, rendered_at=request.rendered_at
            ),
        )

        try:
            comment = await self.comment_service.save(submission, request.actor)
        except ValidationFailedError as e:
            return SubmitCommentResponse(success=False, errors=e.errors)

        return SubmitCommentResponse(success=True, comment=to_submitted(comment))

    @staticmethod
    def _new_parent(request: SubmitCommentRequest) -> NewParent:
        if "new_parent_id" not in request.model_fields_set:
            return NOT_PROVIDED
        if request.new_parent_id is None:
            return None
        return CommentId(UUID(request.new_parent_id))


def to_submitted(comment: Comment) -> SubmittedComment:
    """Build the response view of a saved comment."""
    return SubmittedComment(
        comment_id=str(comment.id),
        owner_id=str(comment.owner_id),
        site_id=comment.owner_site_id,
        status=comment.status,
        text=comment.text,
        comment_date=comment.comment_date,
    )
