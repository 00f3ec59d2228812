"""Integration tests for the flag and subscription repositories.

These tests need the docker-compose database with migrations applied:

    pytest -m integration
"""

from datetime import datetime
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from comments.domain.model import Flag, Subscription
from comments.domain.model.comment import Comment
from comments.domain.repository import (
    CommentRepository,
    FlagRepository,
    SubscriptionRepository,
)
from comments.domain.value import (
    CommentStatus,
    FlagId,
    OwnerId,
    SiteId,
    SubscriptionId,
)
from tests.harness import create_env_fixture

pytestmark = pytest.mark.integration

# Integration test fixture - real PostgreSQL
integration_env = create_env_fixture(unmock={"persistence"})


def _guest_flag(comment: Comment, session_id: str) -> Flag:
    return Flag(
        id=FlagId(uuid4()),
        comment_id=comment.id,
        session_id=session_id,
        created_at=datetime.now(),
    )


class TestFlagRepositoryIntegration:
    """Integration tests for PostgresFlagRepository."""

    @pytest.mark.asyncio
    async def test_duplicate_flag_leaves_session_usable(self, integration_env):
        """A rejected duplicate insert does not abort the request's writes."""
        # Arrange
        comment_repo = await integration_env.get(CommentRepository)
        flag_repo = await integration_env.get(FlagRepository)
        comment = await comment_repo.save(
            Comment(
                owner_id=OwnerId(uuid4()),
                owner_site_id=SiteId(1),
                comment="Flag me",
                status=CommentStatus.APPROVED,
            )
        )
        await flag_repo.save(_guest_flag(comment, "guest-session"))

        # Act
        with pytest.raises(IntegrityError):
            await flag_repo.save(_guest_flag(comment, "guest-session"))

        # Assert
        assert await flag_repo.count_by_comment(comment.id) == 1
        assert await comment_repo.find_by_id(comment.id) is not None


class TestSubscriptionRepositoryIntegration:
    """Integration tests for PostgresSubscriptionRepository."""

    @pytest.mark.asyncio
    async def test_save_upserts_on_key(self, integration_env):
        """A second row for the same key updates the first one."""
        # Arrange
        repo = await integration_env.get(SubscriptionRepository)
        owner_id = OwnerId(uuid4())
        first = await repo.save(
            Subscription(
                id=SubscriptionId(uuid4()),
                owner_id=owner_id,
                owner_site_id=SiteId(1),
                subscribed=True,
            )
        )

        # Act
        second = await repo.save(
            Subscription(
                id=SubscriptionId(uuid4()),
                owner_id=owner_id,
                owner_site_id=SiteId(1),
                subscribed=False,
            )
        )

        # Assert
        assert second.id == first.id
        assert not second.subscribed
        stored = await repo.find_by_key(owner_id, SiteId(1), None, None)
        assert stored.id == first.id
        assert not stored.subscribed
