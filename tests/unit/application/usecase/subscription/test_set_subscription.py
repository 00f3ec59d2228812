"""Unit tests for SetSubscriptionUseCase."""

from uuid import uuid4

import pytest

from comments.application.usecase.subscription import (
    SetSubscriptionRequest,
    SetSubscriptionUseCase,
)
from comments.domain.error import NotAuthorizedError
from comments.domain.service import SubscriptionService
from comments.domain.value import Actor, UserId
from tests.conftest import SITE_ID, guest
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestSetSubscriptionUseCase:
    """Tests for SetSubscriptionUseCase."""

    @pytest.mark.asyncio
    async def test_subscribe_and_unsubscribe(self, unit_env):
        """Users can follow a thread and stop following it."""
        # Arrange
        service = await unit_env.get(SubscriptionService)
        use_case = SetSubscriptionUseCase(subscription_service=service)
        actor = Actor(user_id=UserId(uuid4()))
        owner_id = str(uuid4())

        # Act
        subscribed = await use_case.execute(
            SetSubscriptionRequest(owner_id=owner_id, site_id=SITE_ID, actor=actor)
        )
        unsubscribed = await use_case.execute(
            SetSubscriptionRequest(
                owner_id=owner_id, site_id=SITE_ID, actor=actor, subscribed=False
            )
        )

        # Assert
        assert subscribed.subscribed is True
        assert subscribed.comment_id is None
        assert unsubscribed.subscribed is False

    @pytest.mark.asyncio
    async def test_follow_comment_replies(self, unit_env):
        """Following a comment records the comment id."""
        service = await unit_env.get(SubscriptionService)
        use_case = SetSubscriptionUseCase(subscription_service=service)
        comment_id = str(uuid4())

        response = await use_case.execute(
            SetSubscriptionRequest(
                owner_id=str(uuid4()),
                site_id=SITE_ID,
                comment_id=comment_id,
                actor=Actor(user_id=UserId(uuid4())),
            )
        )

        assert response.comment_id == comment_id
        assert response.subscribed is True

    @pytest.mark.asyncio
    async def test_guest_cannot_subscribe(self, unit_env):
        """Subscriptions belong to registered users only."""
        service = await unit_env.get(SubscriptionService)
        use_case = SetSubscriptionUseCase(subscription_service=service)

        with pytest.raises(NotAuthorizedError):
            await use_case.execute(
                SetSubscriptionRequest(
                    owner_id=str(uuid4()), site_id=SITE_ID, actor=guest()
                )
            )
