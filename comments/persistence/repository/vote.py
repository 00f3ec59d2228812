"""PostgreSQL implementation of Vote repository."""

from typing import Optional

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from comments.domain.model import Vote
from comments.domain.repository import VoteRepository
from comments.domain.value import CommentId, UserId, VoteType
from comments.persistence.mappers import row_to_vote, vote_to_dict
from comments.persistence.repository._identity import identity_clause
from comments.persistence.tables import comment_votes_table


class PostgresVoteRepository(VoteRepository):
    """PostgreSQL implementation of VoteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_identity(
        self,
        comment_id: CommentId,
        user_id: Optional[UserId],
        session_id: Optional[str],
    ) -> Optional[Vote]:
        """Find the vote an identity placed on a comment."""
        if user_id is None and session_id is None:
            return None
        stmt = select(comment_votes_table).where(
            identity_clause(comment_votes_table, comment_id, user_id, session_id)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_vote(row._asdict()) if row else None

    async def count_by_comment(self, comment_id: CommentId, vote_type: VoteType) -> int:
        """Count the votes of one direction on a comment."""
        stmt = (
            select(func.count())
            .select_from(comment_votes_table)
            .where(comment_votes_table.c.comment_id == comment_id)
            .where(comment_votes_table.c.vote_type == vote_type.value)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def save(self, vote: Vote) -> Vote:
        """Save a vote (create, or update its direction).

        Writes run in a savepoint so a duplicate insert leaves the
        request's transaction usable.

        Raises:
            IntegrityError: If the identity already voted on the comment
        """
        exists = await self.session.execute(
            select(comment_votes_table.c.id).where(comment_votes_table.c.id == vote.id)
        )
        if exists.scalar_one_or_none() is None:
            stmt = insert(comment_votes_table).values(**vote_to_dict(vote))
        else:
            stmt = (
                update(comment_votes_table)
                .where(comment_votes_table.c.id == vote.id)
                .values(vote_type=vote.vote_type.value)
            )
        async with self.session.begin_nested():
            await self.session.execute(stmt)
            await self.session.flush()
        return vote

    async def delete_by_comment(self, comment_id: CommentId) -> int:
        """Delete every vote on a comment."""
        stmt = delete(comment_votes_table).where(
            comment_votes_table.c.comment_id == comment_id
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
