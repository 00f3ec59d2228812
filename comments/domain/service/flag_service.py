"""Flag domain service."""

from datetime import datetime
from typing import Optional
from uuid import uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from comments.config import CommentSettings, PrivacySettings
from comments.domain.error import NotAuthorizedError
from comments.domain.model.comment import Comment
from comments.domain.model.flag import Flag
from comments.domain.repository import FlagRepository
from comments.domain.value import Actor, Capability, CommentId, FlagId

from .base import Service
from .comment_policy import CapabilityContext, CommentPolicy
from .session import SessionStore, ensure_session_token, peek_session_token


class FlagService(Service):
    """Domain service for flag operations.

    Flags toggle: the same identity flagging a comment twice leaves it
    unflagged. Identity is the user for registered actors and a session
    token for guests.
    """

    def __init__(
        self,
        flag_repository: FlagRepository,
        policy: CommentPolicy,
        comment_settings: CommentSettings,
        privacy_settings: PrivacySettings,
    ) -> None:
        """Initialize flag service.

        Args:
            flag_repository: Flag repository
            policy: Capability policy
            comment_settings: Commenting configuration (threshold)
            privacy_settings: Privacy configuration (IP retention)
        """
        self.flag_repository = flag_repository
        self.policy = policy
        self.comment_settings = comment_settings
        self.privacy_settings = privacy_settings

    async def toggle_flag(
        self, comment: Comment, actor: Actor, session: SessionStore
    ) -> bool:
        """Flag a comment, or remove this identity's existing flag.

        Args:
            comment: Comment to flag
            actor: Acting user or guest
            session: Client session holding the guest token

        Returns:
            True if the identity has a flag on the comment after the call

        Raises:
            NotAuthorizedError: If the actor may not flag
        """
        if comment.id is None:
            raise ValueError("Cannot flag an unsaved comment")
        with logfire.span(
            "toggle_flag", comment_id=str(comment.id), user_id=str(actor.user_id)
        ):
            if not self.policy.can(Capability.FLAG, CapabilityContext(actor=actor)):
                logfire.warn("Flag not permitted", comment_id=str(comment.id))
                raise NotAuthorizedError(
                    "comment", str(comment.id), self.actor_ref(actor)
                )

            session_id = ensure_session_token(session) if actor.is_guest else None
            existing = await self.flag_repository.find_by_identity(
                comment.id, actor.user_id, session_id
            )
            if existing:
                await self.flag_repository.delete(existing.id)
                logfire.info("Flag removed", comment_id=str(comment.id))
                return False

            last_ip = actor.ip_address if self.privacy_settings.store_user_ips else None
            flag = Flag(
                id=FlagId(uuid4()),
                comment_id=comment.id,
                user_id=actor.user_id,
                session_id=session_id,
                last_ip=last_ip,
                created_at=datetime.now(),
            )
            try:
                await self.flag_repository.save(flag)
            except IntegrityError:
                # Concurrent double submission already created it
                logfire.warn("Duplicate flag attempt", comment_id=str(comment.id))
                return True

            logfire.info("Comment flagged", comment_id=str(comment.id))
            return True

    async def has_flagged(
        self, comment: Comment, actor: Actor, session: Optional[SessionStore] = None
    ) -> bool:
        """Check whether the actor currently flags a comment.

        A guest without a session token has never flagged anything; no
        token is issued by this check.
        """
        if comment.id is None:
            return False
        session_id = None
        if actor.is_guest:
            session_id = peek_session_token(session)
            if session_id is None:
                return False
        flag = await self.flag_repository.find_by_identity(
            comment.id, actor.user_id, session_id
        )
        return flag is not None

    async def count_flags(self, comment: Comment) -> int:
        """Number of flags on a comment, read from the store."""
        if comment.id is None:
            return 0
        return await self.flag_repository.count_by_comment(comment.id)

    async def is_over_threshold(self, comment: Comment) -> bool:
        """Whether the comment has reached the flag limit."""
        count = await self.count_flags(comment)
        return count >= self.comment_settings.flagged_comment_limit

    async def delete_flags_for_comment(self, comment_id: CommentId) -> int:
        """Delete every flag on a comment.

        Returns:
            Number of flags deleted
        """
        deleted = await self.flag_repository.delete_by_comment(comment_id)
        logfire.info("Flags deleted", comment_id=str(comment_id), count=deleted)
        return deleted
