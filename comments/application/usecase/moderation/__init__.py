"""Moderation use cases."""

from .delete_comment import (
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
)
from .trash_comment import (
    TrashCommentRequest,
    TrashCommentResponse,
    TrashCommentUseCase,
)
from .update_status import (
    BulkSetStatusRequest,
    BulkSetStatusResponse,
    BulkSetStatusUseCase,
    BulkStatusOutcome,
    UpdateCommentStatusRequest,
    UpdateCommentStatusResponse,
    UpdateCommentStatusUseCase,
)

__all__ = [
    "BulkSetStatusRequest",
    "BulkSetStatusResponse",
    "BulkSetStatusUseCase",
    "BulkStatusOutcome",
    "DeleteCommentRequest",
    "DeleteCommentResponse",
    "DeleteCommentUseCase",
    "TrashCommentRequest",
    "TrashCommentResponse",
    "TrashCommentUseCase",
    "UpdateCommentStatusRequest",
    "UpdateCommentStatusResponse",
    "UpdateCommentStatusUseCase",
]
