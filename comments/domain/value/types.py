"""Domain value objects for comments.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

from datetime import datetime
from enum import Enum
from typing import Literal

from pydantic import Field, field_validator

from comments.domain.value.common import ValueObject
from comments.domain.value.identifiers import CommentId, OwnerId, SiteId, UserId


class CommentStatus(str, Enum):
    """Moderation status of a comment."""

    PENDING = "pending"
    APPROVED = "approved"
    SPAM = "spam"
    TRASHED = "trashed"


class VoteType(str, Enum):
    """Direction of a vote."""

    UP = "up"
    DOWN = "down"

    @property
    def opposite(self) -> "VoteType":
        return VoteType.DOWN if self is VoteType.UP else VoteType.UP


class NotificationKind(str, Enum):
    """Notification events emitted on comment transitions."""

    MODERATOR_NEW = "moderator-new"
    MODERATOR_APPROVED = "moderator-approved"
    AUTHOR_NEW = "author-new"
    REPLY_NEW = "reply-new"
    SUBSCRIBER_NEW = "subscriber-new"


class Capability(str, Enum):
    """Questions the UI may ask about a comment or the current settings."""

    FLAG = "flag"
    VOTE = "vote"
    REPLY = "reply"
    EDIT = "edit"
    TRASH = "trash"

    # Backed directly by settings
    GUEST_COMMENTS = "guest_comments"
    VOTING = "voting"
    GUEST_VOTING = "guest_voting"
    FLAGGING = "flagging"
    GUEST_FLAGGING = "guest_flagging"
    MODERATION = "moderation"


class ParentChoice(str, Enum):
    """Marker for a save that did not submit a parent at all."""

    NOT_PROVIDED = "not_provided"


NOT_PROVIDED = ParentChoice.NOT_PROVIDED

# None means "move to the thread root", NOT_PROVIDED means "leave as is"
NewParent = CommentId | None | Literal[ParentChoice.NOT_PROVIDED]


class Actor(ValueObject):
    """The party performing an operation.

    Authenticated users carry a user_id; guests are identified by a
    session token held in the client session.
    """

    user_id: UserId | None = None
    is_admin: bool = False  # Administrative (control panel) context
    is_trusted: bool = False  # Comments skip moderation
    ip_address: str | None = None
    user_agent: str | None = None

    @property
    def is_guest(self) -> bool:
        return self.user_id is None


class ParentDecision(ValueObject):
    """Outcome of checking whether a comment's thread position changes."""

    has_new_parent: bool
    parent_id: CommentId | None = None


class SpamCheckFields(ValueObject):
    """Anti-spam form fields submitted alongside a comment."""

    honeypot: str | None = None
    rendered_at: datetime | None = None


class AuthorIdentity(ValueObject):
    """Display identity of a comment's author."""

    user_id: UserId | None = None
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    is_guest: bool = False
    is_deleted: bool = False

    @property
    def full_name(self) -> str:
        return " ".join(p for p in (self.first_name, self.last_name) if p)


class Recipient(ValueObject):
    """Addressee of a notification."""

    email: str
    name: str | None = None
    user_id: UserId | None = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Require something resembling an address."""
        if "@" not in v:
            raise ValueError("Recipient email must contain '@'")
        return v


class NotificationMessage(ValueObject):
    """A templated message handed to the notification transport."""

    kind: NotificationKind
    recipients: list[Recipient] = Field(min_length=1)
    comment_id: CommentId
    owner_title: str | None = None
    author_name: str
    excerpt: str


class CommentSubmission(ValueObject):
    """A comment as submitted by an actor, before validation.

    comment_id is set when editing an existing comment. new_parent_id
    defaults to NOT_PROVIDED so that "no parent submitted" can be told
    apart from an explicit None (move to the thread root).
    """

    comment_id: CommentId | None = None
    owner_id: OwnerId
    owner_site_id: SiteId
    comment: str
    name: str | None = None
    email: str | None = None
    url: str | None = None
    new_parent_id: NewParent = NOT_PROVIDED
    spam: SpamCheckFields = SpamCheckFields()


class Transition(ValueObject):
    """What a successful save changed, used to pick side effects."""

    is_new: bool
    previous_status: CommentStatus | None = None
    status: CommentStatus
    has_new_parent: bool = False
    parent_id: CommentId | None = None  # Current parent after the save

    @property
    def is_approval(self) -> bool:
        return (
            self.previous_status is CommentStatus.PENDING
            and self.status is CommentStatus.APPROVED
        )


class StatusChangeOutcome(ValueObject):
    """Per-comment result of a bulk status change."""

    comment_id: CommentId
    success: bool
    error: str | None = None
