"""PostgreSQL implementation of Comment repository."""

from typing import List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from comments.domain.model import Comment
from comments.domain.repository import CommentRepository
from comments.domain.value import CommentId, CommentStatus, OwnerId, SiteId
from comments.persistence.mappers import comment_to_dict, row_to_comment
from comments.persistence.tables import comments_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_for_update(self, comment_id: CommentId) -> Optional[Comment]:
        """Read a comment, locking the row until the transaction ends."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.id == comment_id)
            .with_for_update()
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_by_owner(
        self,
        owner_id: OwnerId,
        site_id: SiteId,
        statuses: Optional[Sequence[CommentStatus]] = None,
    ) -> List[Comment]:
        """Find the comments attached to an owner."""
        stmt = select(comments_table).where(
            comments_table.c.owner_id == owner_id,
            comments_table.c.owner_site_id == site_id,
        )

        if statuses is not None:
            stmt = stmt.where(comments_table.c.status.in_([s.value for s in statuses]))

        stmt = stmt.order_by(comments_table.c.comment_date)

        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update)."""
        comment_dict = comment_to_dict(comment)

        if comment.id is None:
            stmt = comments_table.insert().values(**comment_dict).returning(
                comments_table
            )
        else:
            stmt = (
                comments_table.update()
                .where(comments_table.c.id == comment.id)
                .values(**comment_dict)
                .returning(comments_table)
            )

        result = await self.session.execute(stmt)
        await self.session.flush()
        return row_to_comment(result.one()._asdict())

    async def delete(self, comment_id: CommentId) -> None:
        """Delete a comment (hard delete)."""
        stmt = comments_table.delete().where(comments_table.c.id == comment_id)
        await self.session.execute(stmt)
        await self.session.flush()
