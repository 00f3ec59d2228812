"""PostgreSQL implementation of the owner directory."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from comments.domain.model import Owner
from comments.domain.repository import OwnerRepository
from comments.domain.value import OwnerId, SiteId
from comments.persistence.mappers import row_to_owner
from comments.persistence.tables import owners_table


class PostgresOwnerRepository(OwnerRepository):
    """Reads owners from the host platform's table."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, owner_id: OwnerId, site_id: SiteId) -> Optional[Owner]:
        """Find an owner by ID and site."""
        stmt = select(owners_table).where(
            owners_table.c.id == owner_id, owners_table.c.site_id == site_id
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_owner(row._asdict()) if row else None
