"""Vote domain service."""

from datetime import datetime
from uuid import uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from comments.config import CommentSettings
from comments.domain.error import NotAuthorizedError
from comments.domain.model.comment import Comment
from comments.domain.model.vote import Vote
from comments.domain.repository import VoteRepository
from comments.domain.value import Actor, Capability, CommentId, VoteId, VoteType

from .base import Service
from .comment_policy import CapabilityContext, CommentPolicy
from .session import SessionStore, ensure_session_token


class VoteService(Service):
    """Domain service for vote operations.

    Each identity holds at most one vote per comment. Voting the same
    way again changes nothing; voting the other way flips the vote.
    """

    def __init__(
        self,
        vote_repository: VoteRepository,
        policy: CommentPolicy,
        comment_settings: CommentSettings,
    ) -> None:
        """Initialize vote service.

        Args:
            vote_repository: Vote repository
            policy: Capability policy
            comment_settings: Commenting configuration
        """
        self.vote_repository = vote_repository
        self.policy = policy
        self.comment_settings = comment_settings

    async def cast_vote(
        self,
        comment: Comment,
        actor: Actor,
        direction: VoteType,
        session: SessionStore,
    ) -> Vote:
        """Vote on a comment.

        Args:
            comment: Comment to vote on
            actor: Acting user or guest
            direction: Up or down
            session: Client session holding the guest token

        Returns:
            The identity's vote after the call

        Raises:
            NotAuthorizedError: If the actor may not vote on this comment
        """
        if comment.id is None:
            raise ValueError("Cannot vote on an unsaved comment")
        with logfire.span(
            "cast_vote",
            comment_id=str(comment.id),
            user_id=str(actor.user_id),
            direction=direction.value,
        ):
            context = CapabilityContext(
                actor=actor, poorly_rated=await self.is_poorly_rated(comment)
            )
            if not self.policy.can(Capability.VOTE, context):
                logfire.warn("Vote not permitted", comment_id=str(comment.id))
                raise NotAuthorizedError(
                    "comment", str(comment.id), self.actor_ref(actor)
                )

            session_id = ensure_session_token(session) if actor.is_guest else None
            existing = await self.vote_repository.find_by_identity(
                comment.id, actor.user_id, session_id
            )

            if existing and existing.vote_type == direction:
                logfire.info("Vote unchanged", comment_id=str(comment.id))
                return existing

            if existing:
                flipped = existing.model_copy(update={"vote_type": direction})
                logfire.info("Vote flipped", comment_id=str(comment.id))
                return await self.vote_repository.save(flipped)

            vote = Vote(
                id=VoteId(uuid4()),
                comment_id=comment.id,
                user_id=actor.user_id,
                session_id=session_id,
                vote_type=direction,
                created_at=datetime.now(),
            )
            try:
                return await self.vote_repository.save(vote)
            except IntegrityError:
                # Lost a race with a concurrent vote from the same identity
                logfire.warn("Duplicate vote attempt", comment_id=str(comment.id))
                current = await self.vote_repository.find_by_identity(
                    comment.id, actor.user_id, session_id
                )
                if current is None:
                    raise
                return current

    async def get_upvotes(self, comment: Comment) -> int:
        """Number of up votes, read from the store."""
        if comment.id is None:
            return 0
        return await self.vote_repository.count_by_comment(comment.id, VoteType.UP)

    async def get_downvotes(self, comment: Comment) -> int:
        """Number of down votes, read from the store."""
        if comment.id is None:
            return 0
        return await self.vote_repository.count_by_comment(comment.id, VoteType.DOWN)

    async def net_score(self, comment: Comment) -> int:
        """Up votes minus down votes."""
        return await self.get_upvotes(comment) - await self.get_downvotes(comment)

    async def is_poorly_rated(self, comment: Comment) -> bool:
        """Whether the net score has fallen to the downvote limit."""
        limit = self.comment_settings.downvote_comment_limit
        return await self.net_score(comment) <= -limit

    async def delete_votes_for_comment(self, comment_id: CommentId) -> int:
        """Delete every vote on a comment.

        Returns:
            Number of votes deleted
        """
        deleted = await self.vote_repository.delete_by_comment(comment_id)
        logfire.info("Votes deleted", comment_id=str(comment_id), count=deleted)
        return deleted
