"""Comment entity.

Comments are attached to an owner (any content item of the host platform)
and threaded through a shared hierarchical structure. The body is stored
with emoji in shortcode form and exposed as Unicode.
"""

import re
from datetime import datetime, timedelta
from typing import Any, Optional

import emoji
from pydantic import Field, PrivateAttr, field_validator, model_validator

from comments.domain.model.common import DomainModel, Lookup
from comments.domain.model.owner import Owner
from comments.domain.model.user import User
from comments.domain.value import (
    AuthorIdentity,
    CommentId,
    CommentStatus,
    OwnerId,
    SiteId,
    UserId,
)
from comments.util.time import human_duration

_LINE_BREAKS = re.compile(r"\r\n|\r|\u2028|\u2029|\x85")


def encode_body(text: str) -> str:
    """Convert Unicode emoji to portable shortcodes for storage."""
    return emoji.demojize(text)


def decode_body(raw: str) -> str:
    """Convert stored shortcodes back to Unicode and normalise line breaks."""
    return _LINE_BREAKS.sub("\n", emoji.emojize(raw)).strip()


class Comment(DomainModel):
    """Comment entity.

    Business rules:
    - The body must not be blank once trimmed (checked at validation time)
    - Guests supply name/email/url; a registered user's url is discarded
    - id is None until the comment is first persisted
    """

    id: Optional[CommentId] = None
    owner_id: OwnerId
    owner_type: str = ""
    owner_site_id: SiteId
    user_id: Optional[UserId] = None
    name: Optional[str] = None
    email: Optional[str] = None
    url: Optional[str] = None
    comment: str = ""  # Shortcode form, see text
    status: CommentStatus = CommentStatus.PENDING
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    comment_date: Optional[datetime] = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    # Request-scoped memoised lookups
    _owner: Lookup[Owner] = PrivateAttr(default_factory=Lookup)
    _user: Lookup[User] = PrivateAttr(default_factory=Lookup)
    _author: Lookup[AuthorIdentity] = PrivateAttr(default_factory=Lookup)

    @field_validator("comment", mode="before")
    @classmethod
    def encode_emoji(cls, v: Any) -> Any:
        """Store emoji as shortcodes."""
        if isinstance(v, str):
            return encode_body(v)
        return v

    @model_validator(mode="before")
    @classmethod
    def drop_guest_url(cls, data: Any) -> Any:
        """Registered users cannot attach a url."""
        if isinstance(data, dict) and data.get("user_id") is not None:
            return {**data, "url": None}
        return data

    @property
    def text(self) -> str:
        """Body with Unicode emoji and normalised line breaks."""
        return decode_body(self.comment)

    @property
    def raw_comment(self) -> str:
        """Body exactly as stored."""
        return self.comment

    @property
    def is_guest(self) -> bool:
        return self.user_id is None

    @property
    def is_new(self) -> bool:
        return self.id is None

    @property
    def owner_lookup(self) -> Lookup[Owner]:
        return self._owner

    @property
    def user_lookup(self) -> Lookup[User]:
        return self._user

    @property
    def author_lookup(self) -> Lookup[AuthorIdentity]:
        return self._author

    def get_excerpt(self, max_length: int = 100) -> str:
        """Shorten the body without splitting a word.

        Bodies that fit are returned unchanged. Longer bodies are cut to
        leave room for the ellipsis and trimmed back to the last
        whitespace; a single over-long word is cut hard. Limits too small
        for the ellipsis get a plain cut.
        """
        text = self.text
        if len(text) <= max_length:
            return text
        if max_length < 3:
            return text[: max(max_length, 0)]

        excerpt = text[: max_length - 3]
        if not text[len(excerpt)].isspace():
            cut = max(excerpt.rfind(" "), excerpt.rfind("\n"))
            if cut > 0:
                excerpt = excerpt[:cut]
        return excerpt.rstrip() + "..."

    def get_time_ago(self, now: Optional[datetime] = None) -> str:
        """How long ago the comment was made, e.g. "3 hours"."""
        if self.comment_date is None:
            return human_duration(timedelta(0))
        now = now or datetime.now(self.comment_date.tzinfo)
        return human_duration(now - self.comment_date)
