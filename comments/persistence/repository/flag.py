"""PostgreSQL implementation of Flag repository."""

from typing import Optional

from sqlalchemy import delete, func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from comments.domain.model import Flag
from comments.domain.repository import FlagRepository
from comments.domain.value import CommentId, FlagId, UserId
from comments.persistence.mappers import flag_to_dict, row_to_flag
from comments.persistence.repository._identity import identity_clause
from comments.persistence.tables import comment_flags_table


class PostgresFlagRepository(FlagRepository):
    """PostgreSQL implementation of FlagRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, flag_id: FlagId) -> Optional[Flag]:
        """Find a flag by ID."""
        stmt = select(comment_flags_table).where(comment_flags_table.c.id == flag_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_flag(row._asdict()) if row else None

    async def find_by_identity(
        self,
        comment_id: CommentId,
        user_id: Optional[UserId],
        session_id: Optional[str],
    ) -> Optional[Flag]:
        """Find the flag an identity placed on a comment."""
        if user_id is None and session_id is None:
            return None
        stmt = select(comment_flags_table).where(
            identity_clause(comment_flags_table, comment_id, user_id, session_id)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_flag(row._asdict()) if row else None

    async def count_by_comment(self, comment_id: CommentId) -> int:
        """Count the flags on a comment."""
        stmt = (
            select(func.count())
            .select_from(comment_flags_table)
            .where(comment_flags_table.c.comment_id == comment_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def save(self, flag: Flag) -> Flag:
        """Save a new flag.

        The insert runs in a savepoint so a duplicate leaves the request's
        transaction usable.

        Raises:
            IntegrityError: If the identity already flagged the comment
        """
        stmt = insert(comment_flags_table).values(**flag_to_dict(flag))
        async with self.session.begin_nested():
            await self.session.execute(stmt)
            await self.session.flush()
        return flag

    async def delete(self, flag_id: FlagId) -> bool:
        """Delete a flag."""
        stmt = delete(comment_flags_table).where(comment_flags_table.c.id == flag_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def delete_by_comment(self, comment_id: CommentId) -> int:
        """Delete every flag on a comment."""
        stmt = delete(comment_flags_table).where(
            comment_flags_table.c.comment_id == comment_id
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
