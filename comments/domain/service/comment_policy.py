"""Capability policy.

Answers "may this actor do X to this comment" from settings and the
comment's context. Each capability maps to one predicate in a lookup
table, so adding a capability is a single entry.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from comments.config import CommentSettings
from comments.domain.model.owner import Owner
from comments.domain.value import Actor, AuthorIdentity, Capability


@dataclass(frozen=True)
class CapabilityContext:
    """Everything a capability predicate may look at."""

    actor: Actor
    author: Optional[AuthorIdentity] = None
    owner: Optional[Owner] = None
    poorly_rated: bool = False


class CommentPolicy:
    """Capability checks for comments."""

    def __init__(self, settings: CommentSettings) -> None:
        """Initialize policy.

        Args:
            settings: Commenting configuration
        """
        self.settings = settings
        self._rules: dict[Capability, Callable[[CapabilityContext], bool]] = {
            Capability.FLAG: self._can_flag,
            Capability.VOTE: self._can_vote,
            Capability.REPLY: lambda ctx: self.accepts_comments(ctx.owner),
            Capability.EDIT: self._is_own_comment,
            Capability.TRASH: self._is_own_comment,
            Capability.GUEST_COMMENTS: lambda _: settings.allow_guest,
            Capability.VOTING: lambda _: settings.allow_voting,
            Capability.GUEST_VOTING: lambda _: settings.allow_guest_voting,
            Capability.FLAGGING: lambda _: settings.allow_flagging,
            Capability.GUEST_FLAGGING: lambda _: settings.allow_guest_flagging,
            Capability.MODERATION: lambda _: settings.require_moderation,
        }

    def can(self, capability: Capability, context: CapabilityContext) -> bool:
        """Evaluate a capability.

        Args:
            capability: What is being asked
            context: Actor and comment context

        Returns:
            True if allowed
        """
        return self._rules[capability](context)

    def accepts_comments(self, owner: Optional[Owner]) -> bool:
        """Whether an owner can currently receive comments."""
        if owner is None or not owner.is_live or not owner.comments_enabled:
            return False
        allowed = self.settings.allowed_owner_types
        return not allowed or owner.type in allowed

    def initial_status_is_approved(self, actor: Actor) -> bool:
        """Whether a new comment by this actor skips moderation."""
        return (
            not self.settings.require_moderation or actor.is_trusted or actor.is_admin
        )

    def _can_flag(self, ctx: CapabilityContext) -> bool:
        if not self.settings.allow_flagging:
            return False
        return not ctx.actor.is_guest or self.settings.allow_guest_flagging

    def _can_vote(self, ctx: CapabilityContext) -> bool:
        if not self.settings.allow_voting:
            return False
        if ctx.actor.is_guest and not self.settings.allow_guest_voting:
            return False
        # Poorly rated comments can no longer be voted on when hidden
        return not (self.settings.hide_voting_for_threshold and ctx.poorly_rated)

    @staticmethod
    def _is_own_comment(ctx: CapabilityContext) -> bool:
        if ctx.actor.is_guest or ctx.author is None:
            return False
        return ctx.author.user_id == ctx.actor.user_id
