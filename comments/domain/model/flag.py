"""Flag entity.

A flag marks a comment as inappropriate. Flags toggle: flagging again
with the same identity removes the flag.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from comments.domain.model.common import DomainModel
from comments.domain.value import CommentId, FlagId, UserId


class Flag(DomainModel):
    """Flag entity.

    Business rules:
    - One flag per identity per comment (enforced by unique constraints)
    - Identity is user_id for registered users, session_id for guests
    """

    id: FlagId
    comment_id: CommentId
    user_id: Optional[UserId] = None
    session_id: Optional[str] = None
    last_ip: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.now)

    @model_validator(mode="after")
    def require_identity(self) -> "Flag":
        """Guests must be identified by a session token."""
        if self.user_id is None and not self.session_id:
            raise ValueError("session_id is required when user_id is absent")
        return self
