"""Unit tests for NotificationService and the effects fired by saves."""

from uuid import uuid4

import pytest

from comments.config import CommentSettings, NotificationSettings
from comments.domain.repository import (
    OwnerRepository,
    TransactionManager,
    UserRepository,
)
from comments.domain.service import (
    CommentService,
    NotificationService,
    NotificationTransport,
    SubscriptionService,
)
from comments.domain.value import (
    CommentId,
    CommentStatus,
    NotificationKind,
    Transition,
)
from tests.conftest import (
    SITE_ID,
    admin,
    guest,
    make_owner,
    make_settings,
    make_user,
    member,
    submission,
)
from tests.harness import create_env_fixture

# Unit test fixtures
unit_env = create_env_fixture()

moderated_env = create_env_fixture(
    settings=make_settings(
        notifications=NotificationSettings(
            moderator_enabled=True,
            moderator_approved_enabled=True,
            moderator_emails=["mod@example.com"],
        )
    )
)

open_env = create_env_fixture(
    settings=make_settings(
        comments=CommentSettings(allow_guest=True, require_moderation=False),
        notifications=NotificationSettings(subscribe_enabled=True),
    )
)


async def _seed(env, owner=None, *users):
    """Register host records and return the recording transport."""
    owner_repo = await env.get(OwnerRepository)
    user_repo = await env.get(UserRepository)
    if owner is not None:
        owner_repo.add(owner)
    for user in users:
        user_repo.add(user)
    return await env.get(NotificationTransport)


class TestPlan:
    """Tests for plan."""

    @pytest.mark.asyncio
    async def test_new_approved_reply(self, unit_env):
        """An approved new reply notifies the owner author then the parent author."""
        service = await unit_env.get(NotificationService)

        effects = service.plan(
            Transition(
                is_new=True,
                status=CommentStatus.APPROVED,
                has_new_parent=True,
                parent_id=CommentId(uuid4()),
            )
        )

        assert effects == [service.notify_owner_author, service.notify_parent_author]

    @pytest.mark.asyncio
    async def test_new_pending_comment_notifies_nobody(self, unit_env):
        """Pending comments wait for approval before anyone hears of them."""
        service = await unit_env.get(NotificationService)

        effects = service.plan(
            Transition(is_new=True, status=CommentStatus.PENDING, has_new_parent=True)
        )

        assert effects == []

    @pytest.mark.asyncio
    async def test_approval_of_reply(self, moderated_env):
        """Approving a pending reply notifies moderators and both authors."""
        service = await moderated_env.get(NotificationService)

        effects = service.plan(
            Transition(
                is_new=False,
                previous_status=CommentStatus.PENDING,
                status=CommentStatus.APPROVED,
                parent_id=CommentId(uuid4()),
            )
        )

        assert effects == [
            service.notify_moderators_approved,
            service.notify_owner_author,
            service.notify_parent_author,
        ]

    @pytest.mark.asyncio
    async def test_edit_of_approved_comment(self, unit_env):
        """Saving an already approved comment is not an approval."""
        service = await unit_env.get(NotificationService)

        effects = service.plan(
            Transition(
                is_new=False,
                previous_status=CommentStatus.APPROVED,
                status=CommentStatus.APPROVED,
            )
        )

        assert effects == []


class TestAuthorNotification:
    """Tests for notifications to the owner's author."""

    @pytest.mark.asyncio
    async def test_trusted_comment_notifies_owner_author(self, unit_env):
        """A comment that skips moderation tells the owner's author."""
        # Arrange
        author, commenter = make_user("Grace", "Hopper"), make_user()
        owner = make_owner(author_id=author.id, title="On compilers")
        transport = await _seed(unit_env, owner, author, commenter)
        comment_service = await unit_env.get(CommentService)

        # Act
        comment = await comment_service.save(
            submission(owner), member(commenter, is_trusted=True)
        )

        # Assert
        assert comment.status == CommentStatus.APPROVED
        [message] = transport.of_kind(NotificationKind.AUTHOR_NEW)
        assert message.recipients[0].email == author.email
        assert message.comment_id == comment.id
        assert message.owner_title == "On compilers"
        assert message.author_name == "Ada Lovelace"
        assert message.excerpt == "Great post!"

    @pytest.mark.asyncio
    async def test_no_notice_for_own_content(self, unit_env):
        """Authors are not told about their own comments."""
        author = make_user()
        owner = make_owner(author_id=author.id)
        transport = await _seed(unit_env, owner, author)
        comment_service = await unit_env.get(CommentService)

        await comment_service.save(submission(owner), member(author, is_trusted=True))

        assert transport.sent == []

    @pytest.mark.asyncio
    async def test_approval_notifies_exactly_once(self, unit_env):
        """Approving twice only sends the approval notices once."""
        # Arrange
        author, commenter, moderator = make_user(), make_user("Alan"), make_user()
        owner = make_owner(author_id=author.id)
        transport = await _seed(unit_env, owner, author, commenter, moderator)
        comment_service = await unit_env.get(CommentService)
        comment = await comment_service.save(submission(owner), member(commenter))
        assert comment.status == CommentStatus.PENDING
        assert transport.sent == []

        # Act
        await comment_service.update_status(
            comment.id, CommentStatus.APPROVED, admin(moderator)
        )
        await comment_service.update_status(
            comment.id, CommentStatus.APPROVED, admin(moderator)
        )

        # Assert
        assert len(transport.of_kind(NotificationKind.AUTHOR_NEW)) == 1


class TestModeratorNotification:
    """Tests for notifications to moderators."""

    @pytest.mark.asyncio
    async def test_pending_comment_notifies_moderators(self, moderated_env):
        """A comment awaiting review is announced to the moderators."""
        commenter = make_user()
        owner = make_owner()
        transport = await _seed(moderated_env, owner, commenter)
        comment_service = await moderated_env.get(CommentService)

        await comment_service.save(submission(owner), member(commenter))

        [message] = transport.sent
        assert message.kind == NotificationKind.MODERATOR_NEW
        assert [r.email for r in message.recipients] == ["mod@example.com"]

    @pytest.mark.asyncio
    async def test_approval_notifies_moderators(self, moderated_env):
        """Moderators hear about approvals when enabled."""
        commenter, moderator = make_user(), make_user()
        owner = make_owner()
        transport = await _seed(moderated_env, owner, commenter, moderator)
        comment_service = await moderated_env.get(CommentService)
        comment = await comment_service.save(submission(owner), member(commenter))

        await comment_service.update_status(
            comment.id, CommentStatus.APPROVED, admin(moderator)
        )

        assert [m.kind for m in transport.sent] == [
            NotificationKind.MODERATOR_NEW,
            NotificationKind.MODERATOR_APPROVED,
        ]


class TestReplyNotification:
    """Tests for notifications to the parent comment's author."""

    @pytest.mark.asyncio
    async def test_reply_to_guest_uses_submitted_email(self, open_env):
        """Guests who commented are reached at the address they gave."""
        # Arrange
        replier = make_user()
        owner = make_owner()
        transport = await _seed(open_env, owner, replier)
        comment_service = await open_env.get(CommentService)
        parent = await comment_service.save(
            submission(owner, name="Jo Bloggs", email="jo@example.com"), guest()
        )

        # Act
        await comment_service.save(
            submission(owner, "Agreed", new_parent_id=parent.id), member(replier)
        )

        # Assert
        [message] = transport.of_kind(NotificationKind.REPLY_NEW)
        assert message.recipients[0].email == "jo@example.com"
        assert message.recipients[0].name == "Jo Bloggs"
        assert message.excerpt == "Agreed"

    @pytest.mark.asyncio
    async def test_no_reply_notice_to_self(self, open_env):
        """Replying to one's own comment sends nothing."""
        user = make_user()
        owner = make_owner()
        transport = await _seed(open_env, owner, user)
        comment_service = await open_env.get(CommentService)
        parent = await comment_service.save(submission(owner), member(user))

        await comment_service.save(
            submission(owner, "Also", new_parent_id=parent.id), member(user)
        )

        assert transport.of_kind(NotificationKind.REPLY_NEW) == []


class TestSubscriberNotification:
    """Tests for notifications to thread subscribers."""

    @pytest.mark.asyncio
    async def test_subscribers_notified_except_commenter(self, open_env):
        """Subscribers hear of new comments, but not of their own."""
        # Arrange
        follower, commenter = make_user("Edsger", "Dijkstra"), make_user()
        owner = make_owner()
        transport = await _seed(open_env, owner, follower, commenter)
        subscriptions = await open_env.get(SubscriptionService)
        await subscriptions.subscribe(owner.id, SITE_ID, follower.id)
        await subscriptions.subscribe(owner.id, SITE_ID, commenter.id)
        comment_service = await open_env.get(CommentService)

        # Act
        await comment_service.save(submission(owner), member(commenter))

        # Assert
        [message] = transport.of_kind(NotificationKind.SUBSCRIBER_NEW)
        assert [r.user_id for r in message.recipients] == [follower.id]


class TestDeliveryFailure:
    """Tests for transport failures."""

    @pytest.mark.asyncio
    async def test_failed_delivery_does_not_fail_save(self, unit_env):
        """A broken transport is logged and the comment is still saved."""
        author, commenter = make_user(), make_user()
        owner = make_owner(author_id=author.id)
        transport = await _seed(unit_env, owner, author, commenter)
        transport.fail_with = RuntimeError("SMTP down")
        comment_service = await unit_env.get(CommentService)

        comment = await comment_service.save(
            submission(owner), member(commenter, is_trusted=True)
        )

        assert await comment_service.get_comment_by_id(comment.id) is not None
        assert transport.sent == []

    @pytest.mark.asyncio
    async def test_failed_effect_rolls_back_only_its_savepoint(self, unit_env):
        """Each effect runs in its own savepoint; a failure undoes only that one."""
        # Arrange
        author, commenter = make_user(), make_user()
        owner = make_owner(author_id=author.id)
        transport = await _seed(unit_env, owner, author, commenter)
        transport.fail_with = RuntimeError("SMTP down")
        transactions = await unit_env.get(TransactionManager)
        comment_service = await unit_env.get(CommentService)

        # Act
        comment = await comment_service.save(
            submission(owner), member(commenter, is_trusted=True)
        )

        # Assert
        assert transactions.rolled_back == 1
        assert transactions.opened > transactions.rolled_back
        assert await comment_service.get_comment_by_id(comment.id) is not None
