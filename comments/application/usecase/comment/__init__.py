"""Comment use cases."""

from .get_thread import (
    GetThreadRequest,
    GetThreadResponse,
    GetThreadUseCase,
    ThreadComment,
)
from .submit_comment import (
    SubmitCommentRequest,
    SubmitCommentResponse,
    SubmitCommentUseCase,
    SubmittedComment,
)

__all__ = [
    "GetThreadRequest",
    "GetThreadResponse",
    "GetThreadUseCase",
    "SubmitCommentRequest",
    "SubmitCommentResponse",
    "SubmitCommentUseCase",
    "SubmittedComment",
    "ThreadComment",
]
