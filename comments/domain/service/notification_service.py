"""Notification dispatcher.

Decides which notifications a comment transition triggers, resolves the
recipients and hands messages to the transport. Dispatch is best effort:
each effect runs in its own savepoint and a failure is logged, never
raised, so it cannot undo the write that triggered it.
"""

from typing import Awaitable, Callable, Optional

import logfire

from comments.config import NotificationSettings
from comments.domain.model.comment import Comment
from comments.domain.model.owner import Owner
from comments.domain.repository import (
    CommentRepository,
    TransactionManager,
    UserRepository,
)
from comments.domain.value import (
    AuthorIdentity,
    CommentStatus,
    NotificationKind,
    NotificationMessage,
    Recipient,
    Transition,
    UserId,
)

from .base import Service
from .subscription_service import SubscriptionService

Effect = Callable[
    [Comment, Transition, AuthorIdentity, Optional[Owner]],
    Awaitable[Optional[NotificationKind]],
]


class NotificationTransport:
    """Interface for delivering notification messages (email, webhook...)."""

    async def send(self, message: NotificationMessage) -> None:
        """Deliver a message to its recipients.

        Args:
            message: Templated notification
        """
        raise NotImplementedError


class NotificationService(Service):
    """Fans out notifications for comment transitions."""

    def __init__(
        self,
        settings: NotificationSettings,
        transport: NotificationTransport,
        subscription_service: SubscriptionService,
        comment_repository: CommentRepository,
        user_repository: UserRepository,
        transaction_manager: TransactionManager,
    ) -> None:
        """Initialize notification service.

        Args:
            settings: Notification toggles and moderator addresses
            transport: Message delivery backend
            subscription_service: Subscription registry
            comment_repository: Comment repository (parent lookups)
            user_repository: User directory (recipient addresses)
            transaction_manager: Savepoints isolating each effect's writes
        """
        self.settings = settings
        self.transport = transport
        self.subscription_service = subscription_service
        self.comment_repository = comment_repository
        self.user_repository = user_repository
        self.transaction_manager = transaction_manager

    async def dispatch(
        self,
        comment: Comment,
        transition: Transition,
        author: AuthorIdentity,
        owner: Optional[Owner],
    ) -> list[NotificationKind]:
        """Run every side effect the transition calls for.

        Args:
            comment: The saved comment
            transition: What the save changed
            author: Resolved author of the comment
            owner: The comment's owner, if it still exists

        Returns:
            The notification kinds that were delivered
        """
        with logfire.span(
            "dispatch_notifications",
            comment_id=str(comment.id),
            status=transition.status.value,
            is_new=transition.is_new,
        ):
            delivered: list[NotificationKind] = []
            for effect in self.plan(transition):
                try:
                    async with self.transaction_manager.savepoint():
                        kind = await effect(comment, transition, author, owner)
                except Exception as e:
                    logfire.error(
                        "Notification effect failed",
                        effect=effect.__name__,
                        comment_id=str(comment.id),
                        error=str(e),
                    )
                    continue
                if kind is not None:
                    delivered.append(kind)
            return delivered

    def plan(self, transition: Transition) -> list[Effect]:
        """Select the effects triggered by a transition, in firing order."""
        settings = self.settings
        effects: list[Effect] = []

        if transition.is_new:
            pending = transition.status is CommentStatus.PENDING
            if settings.moderator_enabled and pending:
                effects.append(self.notify_moderators_new)
            # Approved on creation means it skipped moderation
            if transition.status is CommentStatus.APPROVED:
                if settings.author_enabled:
                    effects.append(self.notify_owner_author)
                if settings.reply_enabled and transition.has_new_parent:
                    effects.append(self.notify_parent_author)
                if settings.subscribe_auto:
                    effects.append(self.auto_subscribe)

        if transition.is_approval:
            if settings.moderator_approved_enabled:
                effects.append(self.notify_moderators_approved)
            if settings.author_enabled:
                effects.append(self.notify_owner_author)
            if settings.reply_enabled and transition.parent_id is not None:
                effects.append(self.notify_parent_author)
            if settings.subscribe_auto:
                effects.append(self.auto_subscribe)

        if settings.subscribe_enabled or settings.subscribe_auto:
            effects.append(self.notify_subscribers)

        return effects

    async def notify_moderators_new(
        self,
        comment: Comment,
        transition: Transition,
        author: AuthorIdentity,
        owner: Optional[Owner],
    ) -> Optional[NotificationKind]:
        """Tell moderators a comment awaits review."""
        return await self._notify_moderators(
            NotificationKind.MODERATOR_NEW, comment, author, owner
        )

    async def notify_moderators_approved(
        self,
        comment: Comment,
        transition: Transition,
        author: AuthorIdentity,
        owner: Optional[Owner],
    ) -> Optional[NotificationKind]:
        """Tell moderators a pending comment was approved."""
        return await self._notify_moderators(
            NotificationKind.MODERATOR_APPROVED, comment, author, owner
        )

    async def notify_owner_author(
        self,
        comment: Comment,
        transition: Transition,
        author: AuthorIdentity,
        owner: Optional[Owner],
    ) -> Optional[NotificationKind]:
        """Tell the author of the owner content about a new comment."""
        if owner is None or owner.author_id is None:
            return None
        if comment.user_id is not None and comment.user_id == owner.author_id:
            logfire.info(
                "Skipping author notification to self", user_id=str(comment.user_id)
            )
            return None

        owner_author = await self.user_repository.find_by_id(owner.author_id)
        if owner_author is None or not owner_author.email:
            logfire.info("Owner author has no address", owner_id=str(owner.id))
            return None

        recipient = Recipient(
            email=owner_author.email,
            name=owner_author.full_name or None,
            user_id=owner_author.id,
        )
        return await self._send(
            NotificationKind.AUTHOR_NEW, [recipient], comment, author, owner
        )

    async def notify_parent_author(
        self,
        comment: Comment,
        transition: Transition,
        author: AuthorIdentity,
        owner: Optional[Owner],
    ) -> Optional[NotificationKind]:
        """Tell the author of the replied-to comment about the reply."""
        if transition.parent_id is None:
            return None
        parent = await self.comment_repository.find_by_id(transition.parent_id)
        if parent is None:
            logfire.warn("Parent comment vanished", parent_id=str(transition.parent_id))
            return None

        if parent.user_id is not None:
            if parent.user_id == comment.user_id:
                return None
            parent_user = await self.user_repository.find_by_id(parent.user_id)
            email = parent_user.email if parent_user else None
            name = parent_user.full_name if parent_user else None
        else:
            email, name = parent.email, parent.name

        if not email or (comment.email and email.lower() == comment.email.lower()):
            return None

        recipient = Recipient(email=email, name=name or None, user_id=parent.user_id)
        return await self._send(
            NotificationKind.REPLY_NEW, [recipient], comment, author, owner
        )

    async def notify_subscribers(
        self,
        comment: Comment,
        transition: Transition,
        author: AuthorIdentity,
        owner: Optional[Owner],
    ) -> Optional[NotificationKind]:
        """Tell thread and parent-comment subscribers about the comment."""
        user_ids = await self.subscription_service.find_subscribers(
            comment.owner_id, comment.owner_site_id
        )
        if transition.parent_id is not None:
            user_ids += await self.subscription_service.find_subscribers(
                comment.owner_id, comment.owner_site_id, transition.parent_id
            )

        unique_ids: list[UserId] = []
        for user_id in user_ids:
            if user_id != comment.user_id and user_id not in unique_ids:
                unique_ids.append(user_id)
        if not unique_ids:
            return None

        users = await self.user_repository.find_by_ids(unique_ids)
        recipients = [
            Recipient(email=u.email, name=u.full_name or None, user_id=u.id)
            for u in users
            if u.email
        ]
        if not recipients:
            return None
        return await self._send(
            NotificationKind.SUBSCRIBER_NEW, recipients, comment, author, owner
        )

    async def auto_subscribe(
        self,
        comment: Comment,
        transition: Transition,
        author: AuthorIdentity,
        owner: Optional[Owner],
    ) -> Optional[NotificationKind]:
        """Subscribe a registered commenter to the thread they posted in."""
        if comment.user_id is not None:
            await self.subscription_service.subscribe(
                comment.owner_id, comment.owner_site_id, comment.user_id
            )
        return None

    async def _notify_moderators(
        self,
        kind: NotificationKind,
        comment: Comment,
        author: AuthorIdentity,
        owner: Optional[Owner],
    ) -> Optional[NotificationKind]:
        if not self.settings.moderator_emails:
            logfire.info("No moderator addresses configured", kind=kind.value)
            return None
        recipients = [Recipient(email=e) for e in self.settings.moderator_emails]
        return await self._send(kind, recipients, comment, author, owner)

    async def _send(
        self,
        kind: NotificationKind,
        recipients: list[Recipient],
        comment: Comment,
        author: AuthorIdentity,
        owner: Optional[Owner],
    ) -> NotificationKind:
        if comment.id is None:
            raise ValueError("Cannot notify about an unsaved comment")
        message = NotificationMessage(
            kind=kind,
            recipients=recipients,
            comment_id=comment.id,
            owner_title=owner.title if owner else None,
            author_name=author.full_name or "Guest",
            excerpt=comment.get_excerpt(),
        )
        await self.transport.send(message)
        logfire.info(
            "Notification sent",
            kind=kind.value,
            comment_id=str(comment.id),
            recipients=len(recipients),
        )
        return kind
