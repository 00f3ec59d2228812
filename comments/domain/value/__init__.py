"""Domain value objects for comments."""

from comments.domain.value.identifiers import (
    CommentId,
    FlagId,
    OwnerId,
    SiteId,
    StructureId,
    SubscriptionId,
    UserId,
    VoteId,
)
from comments.domain.value.types import (
    NOT_PROVIDED,
    Actor,
    AuthorIdentity,
    Capability,
    CommentStatus,
    CommentSubmission,
    NewParent,
    NotificationKind,
    NotificationMessage,
    ParentChoice,
    ParentDecision,
    Recipient,
    SpamCheckFields,
    StatusChangeOutcome,
    Transition,
    VoteType,
)

__all__ = [
    # Identifiers
    "CommentId",
    "FlagId",
    "OwnerId",
    "SiteId",
    "StructureId",
    "SubscriptionId",
    "UserId",
    "VoteId",
    # Types
    "NOT_PROVIDED",
    "Actor",
    "AuthorIdentity",
    "Capability",
    "CommentStatus",
    "CommentSubmission",
    "NewParent",
    "NotificationKind",
    "NotificationMessage",
    "ParentChoice",
    "ParentDecision",
    "Recipient",
    "SpamCheckFields",
    "StatusChangeOutcome",
    "Transition",
    "VoteType",
]
