"""PostgreSQL implementation of Subscription repository."""

from typing import Any, List, Optional

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from comments.domain.model import Subscription
from comments.domain.repository import SubscriptionRepository
from comments.domain.value import CommentId, OwnerId, SiteId, UserId
from comments.persistence.mappers import row_to_subscription, subscription_to_dict
from comments.persistence.tables import comment_subscriptions_table

_table = comment_subscriptions_table


def _matches(column: Any, value: Any) -> Any:
    """Equality that treats NULL as a value of its own."""
    return column.is_(None) if value is None else column == value


class PostgresSubscriptionRepository(SubscriptionRepository):
    """PostgreSQL implementation of SubscriptionRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_key(
        self,
        owner_id: OwnerId,
        site_id: SiteId,
        user_id: Optional[UserId],
        comment_id: Optional[CommentId],
    ) -> Optional[Subscription]:
        """Find the subscription for a key tuple."""
        stmt = select(_table).where(
            _table.c.owner_id == owner_id,
            _table.c.owner_site_id == site_id,
            _matches(_table.c.user_id, user_id),
            _matches(_table.c.comment_id, comment_id),
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_subscription(row._asdict()) if row else None

    async def find_subscribed(
        self,
        owner_id: OwnerId,
        site_id: SiteId,
        comment_id: Optional[CommentId] = None,
    ) -> List[Subscription]:
        """Find active subscriptions to a thread or to a comment's replies."""
        stmt = select(_table).where(
            _table.c.owner_id == owner_id,
            _table.c.owner_site_id == site_id,
            _table.c.subscribed.is_(True),
            _matches(_table.c.comment_id, comment_id),
        )
        result = await self.session.execute(stmt)
        return [row_to_subscription(row._asdict()) for row in result.fetchall()]

    async def save(self, subscription: Subscription) -> Subscription:
        """Save a subscription, upserting on its key tuple.

        A row that already exists for the key keeps its id and takes the
        new state, so racing subscribers never collide.
        """
        values = subscription_to_dict(subscription)
        stmt = (
            insert(_table)
            .values(**values)
            .on_conflict_do_update(
                constraint="uq_subscription_key",
                set_={"subscribed": subscription.subscribed},
            )
            .returning(*_table.c)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        await self.session.flush()
        return row_to_subscription(row._asdict())
