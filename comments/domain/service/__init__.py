"""Domain services."""

from .base import Service
from .comment_policy import CapabilityContext, CommentPolicy
from .comment_service import CommentService, ValidatedComment, guest_identity
from .flag_service import FlagService
from .jwt_service import JWTService
from .notification_service import NotificationService, NotificationTransport
from .security_service import SecurityService, SpamChecker
from .session import (
    SESSION_TOKEN_KEY,
    SessionStore,
    ensure_session_token,
    peek_session_token,
)
from .subscription_service import SubscriptionService
from .vote_service import VoteService

__all__ = [
    "SESSION_TOKEN_KEY",
    "CapabilityContext",
    "CommentPolicy",
    "CommentService",
    "FlagService",
    "JWTService",
    "NotificationService",
    "NotificationTransport",
    "SecurityService",
    "Service",
    "SessionStore",
    "SpamChecker",
    "SubscriptionService",
    "ValidatedComment",
    "VoteService",
    "ensure_session_token",
    "guest_identity",
    "peek_session_token",
]
