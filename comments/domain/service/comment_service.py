"""Comment domain service.

Owns the comment lifecycle as an explicit pipeline:

    validate(submission, actor) -> ValidatedComment
    persist(validated)          -> (Comment, Transition)
    dispatch_effects(comment, transition)

save() composes the three. Moderator actions (status changes, deletes)
reuse persist and dispatch_effects so that transitions fire the same way
regardless of how a status changed.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence
from uuid import UUID

import logfire
from nameparser import HumanName

from comments.config import CommentSettings
from comments.domain.error import (
    DomainError,
    NotAuthorizedError,
    NotFoundError,
    ValidationFailedError,
)
from comments.domain.model.comment import Comment, encode_body
from comments.domain.model.owner import Owner
from comments.domain.model.structure import StructureNode
from comments.domain.model.user import User
from comments.domain.repository import (
    CommentRepository,
    OwnerRepository,
    StructureRepository,
    UserRepository,
)
from comments.domain.value import (
    NOT_PROVIDED,
    Actor,
    AuthorIdentity,
    Capability,
    CommentId,
    CommentStatus,
    CommentSubmission,
    NewParent,
    NotificationKind,
    OwnerId,
    ParentDecision,
    SiteId,
    StatusChangeOutcome,
    StructureId,
    Transition,
)

from .base import Service
from .comment_policy import CapabilityContext, CommentPolicy
from .flag_service import FlagService
from .notification_service import NotificationService
from .security_service import SecurityService
from .subscription_service import SubscriptionService
from .vote_service import VoteService

GUEST_NAME = "Guest"
DELETED_USER_NAME = "[Deleted User]"


@dataclass(frozen=True)
class ValidatedComment:
    """A candidate comment that passed validation, ready to persist.

    status is set only for moderation actions. Edits leave the stored
    status alone and moderation leaves the stored body alone.
    """

    comment: Comment
    new_parent_id: NewParent
    actor: Actor
    status: Optional[CommentStatus] = None


class CommentService(Service):
    """Domain service for the comment lifecycle and moderation."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        owner_repository: OwnerRepository,
        user_repository: UserRepository,
        structure_repository: StructureRepository,
        policy: CommentPolicy,
        security_service: SecurityService,
        flag_service: FlagService,
        vote_service: VoteService,
        subscription_service: SubscriptionService,
        notification_service: NotificationService,
        settings: CommentSettings,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            owner_repository: Host content directory
            user_repository: Host user directory
            structure_repository: Hierarchical ordering store
            policy: Capability policy
            security_service: Pre-save spam/security gate
            flag_service: Flag domain service
            vote_service: Vote domain service
            subscription_service: Subscription registry
            notification_service: Notification dispatcher
            settings: Commenting configuration
        """
        self.comment_repository = comment_repository
        self.owner_repository = owner_repository
        self.user_repository = user_repository
        self.structure_repository = structure_repository
        self.policy = policy
        self.security_service = security_service
        self.flag_service = flag_service
        self.vote_service = vote_service
        self.subscription_service = subscription_service
        self.notification_service = notification_service
        self.settings = settings

    @property
    def structure_id(self) -> StructureId:
        return StructureId(self.settings.structure_id)

    # Lookups

    async def get_comment_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Get a comment by ID, regardless of status.

        Args:
            comment_id: Comment ID

        Returns:
            Comment if found, None otherwise
        """
        return await self.comment_repository.find_by_id(comment_id)

    async def get_owner(self, comment: Comment) -> Optional[Owner]:
        """Resolve the content item a comment is attached to (memoised)."""
        lookup = comment.owner_lookup
        if lookup.is_resolved:
            return lookup.value
        owner = await self.owner_repository.find_by_id(
            comment.owner_id, comment.owner_site_id
        )
        return lookup.resolve(owner)

    async def get_user(self, comment: Comment) -> Optional[User]:
        """Resolve the registered user behind a comment (memoised)."""
        lookup = comment.user_lookup
        if lookup.is_resolved:
            return lookup.value
        if comment.user_id is None:
            return lookup.resolve(None)
        return lookup.resolve(await self.user_repository.find_by_id(comment.user_id))

    async def get_author(self, comment: Comment) -> AuthorIdentity:
        """Resolve the display identity of a comment's author (memoised).

        Guests get an identity parsed from the submitted name, falling back
        to "Guest". Registered users whose account has since been removed
        resolve to a "[Deleted User]" placeholder.
        """
        lookup = comment.author_lookup
        if lookup.is_resolved and lookup.value is not None:
            return lookup.value

        if comment.is_guest:
            author = guest_identity(comment.name, comment.email)
        else:
            user = await self.get_user(comment)
            if user is None:
                author = AuthorIdentity(
                    user_id=comment.user_id,
                    first_name=DELETED_USER_NAME,
                    is_deleted=True,
                )
            else:
                author = AuthorIdentity(
                    user_id=user.id,
                    first_name=user.first_name,
                    last_name=user.last_name,
                    email=user.email,
                )
        lookup.resolve(author)
        return author

    # Pipeline

    async def validate(
        self, submission: CommentSubmission, actor: Actor
    ) -> ValidatedComment:
        """Check a submission, collecting every failure.

        Args:
            submission: Submitted comment (new, or an edit when comment_id is set)
            actor: Submitting user or guest

        Returns:
            The candidate comment, ready to persist

        Raises:
            NotFoundError: If the edited comment or the submitted parent
                does not exist
            ValidationFailedError: With all field errors found
        """
        with logfire.span(
            "comment_service.validate",
            comment_id=str(submission.comment_id),
            owner_id=str(submission.owner_id),
            user_id=str(actor.user_id),
        ):
            errors: dict[str, list[str]] = {}

            def fail(field: str, message: str) -> None:
                errors.setdefault(field, []).append(message)

            existing: Optional[Comment] = None
            if submission.comment_id is not None:
                existing = await self.comment_repository.find_by_id(
                    submission.comment_id
                )
                if existing is None:
                    raise NotFoundError("comment", str(submission.comment_id))

            candidate = await self._build_candidate(submission, actor, existing)

            for message in await self.security_service.check(
                candidate, submission.spam
            ):
                fail("comment", message)

            if actor.is_guest:
                if not self.settings.allow_guest:
                    fail("comment", "Must be logged in to comment.")
                if self.settings.guest_require_email_name:
                    if not (submission.name or "").strip():
                        fail("name", "Name is required.")
                    if not (submission.email or "").strip():
                        fail("email", "Email is required.")

            if not self.policy.accepts_comments(await self.get_owner(candidate)):
                fail("comment", "Comments are disabled for this element.")

            if existing is not None and not actor.is_admin:
                author = await self.get_author(existing)
                if actor.is_guest or author.user_id != actor.user_id:
                    fail("comment", "Unable to modify another users comment.")

            if not candidate.text:
                fail("comment", "Comment must not be blank.")

            new_parent_id = submission.new_parent_id
            if new_parent_id is not None and new_parent_id is not NOT_PROVIDED:
                message = await self._check_parent(candidate, new_parent_id)
                if message:
                    fail("new_parent_id", message)

            if errors:
                logfire.warn(
                    "Comment validation failed",
                    owner_id=str(submission.owner_id),
                    fields=sorted(errors),
                )
                raise ValidationFailedError(errors)

            return ValidatedComment(
                comment=candidate, new_parent_id=new_parent_id, actor=actor
            )

    async def persist(self, validated: ValidatedComment) -> tuple[Comment, Transition]:
        """Write a validated comment and place it in the thread.

        Existing comments are re-read with their row locked, and the write
        starts from that read: an edit keeps the stored status, a status
        change keeps the stored body. Placement happens after the write so
        that the comment has an id.

        Args:
            validated: Output of validate()

        Returns:
            The saved comment and the transition it went through

        Raises:
            NotFoundError: If the submitted parent (or an edited comment)
                no longer exists
        """
        comment = validated.comment
        is_new = comment.is_new
        with logfire.span(
            "comment_service.persist", comment_id=str(comment.id), is_new=is_new
        ):
            decision = await self.resolve_parent(comment, validated.new_parent_id)

            previous_status: Optional[CommentStatus] = None
            if not is_new:
                assert comment.id is not None
                current = await self.comment_repository.find_for_update(comment.id)
                if current is None:
                    raise NotFoundError("comment", str(comment.id))
                previous_status = current.status
                if validated.status is None:
                    comment = comment.model_copy(update={"status": current.status})
                else:
                    comment = current.model_copy(update={"status": validated.status})

            now = datetime.now()
            updates: dict = {"updated_at": now}
            if comment.comment_date is None:
                updates["comment_date"] = now
            saved = await self.comment_repository.save(
                comment.model_copy(update=updates)
            )
            assert saved.id is not None

            if decision.has_new_parent:
                if decision.parent_id is None:
                    await self.structure_repository.append_to_root(
                        self.structure_id, saved.id
                    )
                else:
                    await self.structure_repository.append(
                        self.structure_id, saved.id, decision.parent_id
                    )
                parent_id = decision.parent_id
            else:
                ancestor = await self.structure_repository.find_ancestor(
                    self.structure_id, saved.id
                )
                parent_id = CommentId(ancestor) if ancestor else None

            transition = Transition(
                is_new=is_new,
                previous_status=previous_status,
                status=saved.status,
                has_new_parent=decision.has_new_parent,
                parent_id=parent_id,
            )
            logfire.info(
                "Comment saved",
                comment_id=str(saved.id),
                status=saved.status.value,
                previous_status=previous_status.value if previous_status else None,
                has_new_parent=decision.has_new_parent,
            )
            return saved, transition

    async def dispatch_effects(
        self, comment: Comment, transition: Transition
    ) -> list[NotificationKind]:
        """Fire the side effects of a transition. Never raises.

        Returns:
            The notification kinds delivered
        """
        try:
            author = await self.get_author(comment)
            owner = await self.get_owner(comment)
            return await self.notification_service.dispatch(
                comment, transition, author, owner
            )
        except Exception as e:
            logfire.error(
                "Dispatching comment effects failed",
                comment_id=str(comment.id),
                error=str(e),
            )
            return []

    async def save(self, submission: CommentSubmission, actor: Actor) -> Comment:
        """Validate, persist and dispatch a submitted comment.

        Args:
            submission: Submitted comment
            actor: Submitting user or guest

        Returns:
            The saved comment

        Raises:
            ValidationFailedError: If validation fails
            NotFoundError: If the edited comment or its parent is missing
        """
        validated = await self.validate(submission, actor)
        saved, transition = await self.persist(validated)
        await self.dispatch_effects(saved, transition)
        return saved

    async def resolve_parent(
        self, comment: Comment, new_parent_id: NewParent
    ) -> ParentDecision:
        """Decide whether a save changes the comment's thread position.

        New comments always need placement. For existing comments, a
        parent that was not submitted at all changes nothing; None moves
        the comment to the root unless it is already there; an id moves
        it unless that id is already its immediate parent.

        Raises:
            NotFoundError: If the submitted parent does not exist
        """
        if new_parent_id is NOT_PROVIDED:
            if comment.is_new:
                return ParentDecision(has_new_parent=True, parent_id=None)
            return ParentDecision(has_new_parent=False)

        if new_parent_id is not None:
            parent = await self.comment_repository.find_by_id(new_parent_id)
            if parent is None:
                raise NotFoundError("comment", str(new_parent_id))

        if comment.is_new:
            return ParentDecision(has_new_parent=True, parent_id=new_parent_id)

        assert comment.id is not None
        node = await self.structure_repository.find_node(self.structure_id, comment.id)
        at_root = node is not None and node.is_root_level

        if new_parent_id is None:
            return ParentDecision(has_new_parent=not at_root, parent_id=None)

        if node is None or at_root:
            return ParentDecision(has_new_parent=True, parent_id=new_parent_id)

        current_parent = await self._current_parent(comment)
        return ParentDecision(
            has_new_parent=new_parent_id != current_parent, parent_id=new_parent_id
        )

    # Moderation

    async def update_status(
        self, comment_id: CommentId, status: CommentStatus, actor: Actor
    ) -> Comment:
        """Set a comment's moderation status (administrators only).

        Raises:
            NotAuthorizedError: If the actor is not an administrator
            NotFoundError: If the comment does not exist
        """
        with logfire.span(
            "comment_service.update_status",
            comment_id=str(comment_id),
            status=status.value,
        ):
            if not actor.is_admin:
                logfire.warn("Status change by non-admin", comment_id=str(comment_id))
                raise NotAuthorizedError(
                    "comment", str(comment_id), self.actor_ref(actor)
                )
            return await self._change_status(comment_id, status, actor)

    async def bulk_update_status(
        self, comment_ids: Sequence[CommentId], status: CommentStatus, actor: Actor
    ) -> list[StatusChangeOutcome]:
        """Apply update_status to each comment independently.

        A failure on one id is reported in its outcome and does not stop
        the rest of the batch.
        """
        with logfire.span(
            "comment_service.bulk_update_status",
            count=len(comment_ids),
            status=status.value,
        ):
            outcomes: list[StatusChangeOutcome] = []
            for comment_id in comment_ids:
                try:
                    await self.update_status(comment_id, status, actor)
                except DomainError as e:
                    outcomes.append(
                        StatusChangeOutcome(
                            comment_id=comment_id, success=False, error=str(e)
                        )
                    )
                    continue
                outcomes.append(
                    StatusChangeOutcome(comment_id=comment_id, success=True)
                )

            failed = sum(1 for o in outcomes if not o.success)
            if failed:
                logfire.warn("Bulk status change partially failed", failed=failed)
            return outcomes

    async def trash(self, comment_id: CommentId, actor: Actor) -> Comment:
        """Move one's own comment to the trash.

        Raises:
            NotFoundError: If the comment does not exist
            NotAuthorizedError: If the actor is not the comment's author
        """
        with logfire.span("comment_service.trash", comment_id=str(comment_id)):
            comment = await self.comment_repository.find_by_id(comment_id)
            if comment is None:
                raise NotFoundError("comment", str(comment_id))
            if not await self.can(Capability.TRASH, comment, actor):
                logfire.warn("Trash by non-author", comment_id=str(comment_id))
                raise NotAuthorizedError(
                    "comment", str(comment_id), self.actor_ref(actor)
                )
            return await self._change_status(comment_id, CommentStatus.TRASHED, actor)

    async def delete_comment(
        self, comment_id: CommentId, actor: Actor
    ) -> list[CommentId]:
        """Hard delete a comment and its replies (administrators only).

        Flags, votes and thread nodes of every deleted comment go with it.

        Returns:
            IDs of the deleted comments, deepest first

        Raises:
            NotAuthorizedError: If the actor is not an administrator
            NotFoundError: If the comment does not exist
        """
        with logfire.span("comment_service.delete_comment", comment_id=str(comment_id)):
            if not actor.is_admin:
                raise NotAuthorizedError(
                    "comment", str(comment_id), self.actor_ref(actor)
                )
            comment = await self.comment_repository.find_by_id(comment_id)
            if comment is None:
                raise NotFoundError("comment", str(comment_id))

            descendants = await self.structure_repository.find_descendants(
                self.structure_id, comment_id
            )
            # Thread order lists parents first, so reverse it for the deletes
            doomed = [CommentId(n.element_id) for n in reversed(descendants)]
            doomed.append(comment_id)

            for doomed_id in doomed:
                await self.flag_service.delete_flags_for_comment(doomed_id)
                await self.vote_service.delete_votes_for_comment(doomed_id)
                await self.structure_repository.remove(self.structure_id, doomed_id)
                await self.comment_repository.delete(doomed_id)

            logfire.info(
                "Comment deleted", comment_id=str(comment_id), cascade=len(doomed)
            )
            return doomed

    # Read side

    async def get_thread(
        self, owner_id: OwnerId, site_id: SiteId, include_flagged: bool = False
    ) -> list[tuple[Comment, StructureNode]]:
        """Approved comments of an owner, in thread order.

        Args:
            owner_id: Owner ID
            site_id: Owner's site
            include_flagged: Keep comments at or over the flag limit

        Returns:
            (comment, node) pairs in depth-first thread order
        """
        with logfire.span(
            "comment_service.get_thread",
            owner_id=str(owner_id),
            include_flagged=include_flagged,
        ):
            comments = await self.comment_repository.find_by_owner(
                owner_id, site_id, [CommentStatus.APPROVED]
            )
            by_id: dict[UUID, Comment] = {c.id: c for c in comments if c.id}
            nodes = await self.structure_repository.find_nodes(
                self.structure_id, list(by_id)
            )

            thread: list[tuple[Comment, StructureNode]] = []
            for node in nodes:
                comment = by_id[node.element_id]
                if not include_flagged and await self.flag_service.is_over_threshold(
                    comment
                ):
                    continue
                thread.append((comment, node))
            return thread

    async def capability_context(
        self, comment: Comment, actor: Actor
    ) -> CapabilityContext:
        """Gather what the policy needs to judge actions on a comment."""
        return CapabilityContext(
            actor=actor,
            author=await self.get_author(comment),
            owner=await self.get_owner(comment),
            poorly_rated=await self.vote_service.is_poorly_rated(comment),
        )

    async def can(self, capability: Capability, comment: Comment, actor: Actor) -> bool:
        """Ask the policy whether the actor may do something to a comment."""
        context = await self.capability_context(comment, actor)
        return self.policy.can(capability, context)

    async def can_flag(self, comment: Comment, actor: Actor) -> bool:
        return await self.can(Capability.FLAG, comment, actor)

    async def can_vote(self, comment: Comment, actor: Actor) -> bool:
        return await self.can(Capability.VOTE, comment, actor)

    async def can_reply(self, comment: Comment, actor: Actor) -> bool:
        return await self.can(Capability.REPLY, comment, actor)

    async def can_edit(self, comment: Comment, actor: Actor) -> bool:
        return await self.can(Capability.EDIT, comment, actor)

    async def can_trash(self, comment: Comment, actor: Actor) -> bool:
        return await self.can(Capability.TRASH, comment, actor)

    def trash_url(self, comment: Comment) -> Optional[str]:
        """Endpoint that trashes the comment, None until it is saved."""
        if comment.id is None:
            return None
        return f"/comments/{comment.id}/trash"

    async def is_subscribed(self, comment: Comment, actor: Actor) -> bool:
        """Whether the actor follows replies to this comment."""
        return await self.subscription_service.is_subscribed(
            comment.owner_id, comment.owner_site_id, actor, comment.id
        )

    # Internals

    async def _build_candidate(
        self,
        submission: CommentSubmission,
        actor: Actor,
        existing: Optional[Comment],
    ) -> Comment:
        """Apply a submission to a new or existing comment."""
        if existing is not None:
            updates: dict = {"comment": encode_body(submission.comment)}
            if existing.is_guest:
                updates.update(
                    name=submission.name or existing.name,
                    email=submission.email or existing.email,
                    url=submission.url or existing.url,
                )
            return existing.model_copy(update=updates)

        guest = actor.is_guest
        candidate = Comment(
            owner_id=submission.owner_id,
            owner_site_id=submission.owner_site_id,
            user_id=actor.user_id,
            name=submission.name if guest else None,
            email=submission.email if guest else None,
            url=submission.url if guest else None,
            comment=submission.comment,
            status=(
                CommentStatus.APPROVED
                if self.policy.initial_status_is_approved(actor)
                else CommentStatus.PENDING
            ),
            ip_address=actor.ip_address,
            user_agent=actor.user_agent,
        )
        owner = await self.get_owner(candidate)
        if owner is not None:
            candidate = candidate.model_copy(update={"owner_type": owner.type})
        return candidate

    async def _check_parent(
        self, candidate: Comment, parent_id: CommentId
    ) -> Optional[str]:
        """Validate a submitted parent, returning an error message if invalid.

        Raises:
            NotFoundError: If the parent does not exist
        """
        parent = await self.comment_repository.find_by_id(parent_id)
        if parent is None:
            raise NotFoundError("comment", str(parent_id))
        if (
            parent.owner_id != candidate.owner_id
            or parent.owner_site_id != candidate.owner_site_id
        ):
            return "Parent comment belongs to another element."
        if candidate.id is None:
            return None
        if parent_id == candidate.id:
            return "A comment cannot reply to itself."
        descendants = await self.structure_repository.find_descendants(
            self.structure_id, candidate.id
        )
        if any(node.element_id == parent_id for node in descendants):
            return "A comment cannot be moved under one of its replies."
        return None

    async def _current_parent(self, comment: Comment) -> Optional[CommentId]:
        """Immediate ancestor of a placed comment, on the comment's site."""
        assert comment.id is not None
        ancestor_id = await self.structure_repository.find_ancestor(
            self.structure_id, comment.id, distance=1
        )
        if ancestor_id is None:
            return None
        ancestor = await self.comment_repository.find_by_id(CommentId(ancestor_id))
        if ancestor is None or ancestor.owner_site_id != comment.owner_site_id:
            return None
        return ancestor.id

    async def _change_status(
        self, comment_id: CommentId, status: CommentStatus, actor: Actor
    ) -> Comment:
        comment = await self.comment_repository.find_by_id(comment_id)
        if comment is None:
            raise NotFoundError("comment", str(comment_id))
        validated = ValidatedComment(
            comment=comment, new_parent_id=NOT_PROVIDED, actor=actor, status=status
        )
        saved, transition = await self.persist(validated)
        await self.dispatch_effects(saved, transition)
        return saved


def guest_identity(name: Optional[str], email: Optional[str]) -> AuthorIdentity:
    """Build a display identity from a guest's free-form name."""
    parsed = HumanName(name or "")
    first = parsed.first or None
    last = parsed.last or None
    if first is None and last is None:
        first = GUEST_NAME
    return AuthorIdentity(first_name=first, last_name=last, email=email, is_guest=True)
