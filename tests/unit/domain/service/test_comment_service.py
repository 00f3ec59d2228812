"""Unit tests for CommentService."""

from uuid import uuid4

import pytest

from comments.adapter.session import DictSessionStore
from comments.config import CommentSettings
from comments.domain.error import (
    NotAuthorizedError,
    NotFoundError,
    ValidationFailedError,
)
from comments.domain.model.comment import Comment
from comments.domain.repository import (
    CommentRepository,
    OwnerRepository,
    StructureRepository,
    UserRepository,
)
from comments.domain.service import (
    CommentService,
    FlagService,
    ValidatedComment,
    VoteService,
    guest_identity,
)
from comments.domain.value import (
    NOT_PROVIDED,
    CommentId,
    CommentStatus,
    UserId,
    VoteType,
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

open_env = create_env_fixture(
    settings=make_settings(
        comments=CommentSettings(
            allow_guest=True, require_moderation=False, flagged_comment_limit=1
        )
    )
)


async def _seed(env, owner, *users):
    """Register an owner and users with the host directories."""
    (await env.get(OwnerRepository)).add(owner)
    user_repo = await env.get(UserRepository)
    for user in users:
        user_repo.add(user)


async def _levels(service: CommentService, owner) -> list[tuple[CommentId, int]]:
    thread = await service.get_thread(owner.id, owner.site_id)
    return [(comment.id, node.level) for comment, node in thread]


class TestValidate:
    """Tests for validation on save."""

    @pytest.mark.asyncio
    async def test_blank_comment_rejected(self, unit_env):
        """A body of whitespace is blank."""
        user, owner = make_user(), make_owner()
        await _seed(unit_env, owner, user)
        service = await unit_env.get(CommentService)

        with pytest.raises(ValidationFailedError) as exc_info:
            await service.save(submission(owner, "  \r\n "), member(user))

        assert exc_info.value.errors == {"comment": ["Comment must not be blank."]}

    @pytest.mark.asyncio
    async def test_guest_needs_login_when_guests_disabled(self, unit_env):
        """Guests cannot comment unless guest comments are allowed."""
        owner = make_owner()
        await _seed(unit_env, owner)
        service = await unit_env.get(CommentService)

        with pytest.raises(ValidationFailedError) as exc_info:
            await service.save(submission(owner), guest())

        assert exc_info.value.errors["comment"] == ["Must be logged in to comment."]

    @pytest.mark.asyncio
    async def test_errors_are_collected(self, unit_env):
        """Every failing check is reported, not just the first."""
        owner = make_owner()
        await _seed(unit_env, owner)
        service = await unit_env.get(CommentService)

        with pytest.raises(ValidationFailedError) as exc_info:
            await service.save(submission(owner, ""), guest())

        assert exc_info.value.errors["comment"] == [
            "Must be logged in to comment.",
            "Comment must not be blank.",
        ]

    @pytest.mark.asyncio
    async def test_guest_identity_checked_when_guests_disabled(self, unit_env):
        """A refused guest still hears about the missing name and email."""
        owner = make_owner()
        await _seed(unit_env, owner)
        service = await unit_env.get(CommentService)

        with pytest.raises(ValidationFailedError) as exc_info:
            await service.save(submission(owner), guest())

        assert exc_info.value.errors == {
            "comment": ["Must be logged in to comment."],
            "name": ["Name is required."],
            "email": ["Email is required."],
        }

    @pytest.mark.asyncio
    async def test_guest_name_and_email_required(self, open_env):
        """Allowed guests still have to say who they are."""
        owner = make_owner()
        await _seed(open_env, owner)
        service = await open_env.get(CommentService)

        with pytest.raises(ValidationFailedError) as exc_info:
            await service.save(submission(owner), guest())

        assert exc_info.value.errors == {
            "name": ["Name is required."],
            "email": ["Email is required."],
        }

    @pytest.mark.asyncio
    async def test_missing_owner_disables_comments(self, unit_env):
        """Comments on unknown content are refused."""
        user = make_user()
        await _seed(unit_env, make_owner(), user)
        service = await unit_env.get(CommentService)

        with pytest.raises(ValidationFailedError) as exc_info:
            await service.save(submission(make_owner()), member(user))

        assert exc_info.value.errors["comment"] == [
            "Comments are disabled for this element."
        ]

    @pytest.mark.asyncio
    async def test_cannot_edit_another_users_comment(self, open_env):
        """Only the author (or an administrator) may edit a comment."""
        author, other = make_user(), make_user("Alan", "Turing")
        owner = make_owner()
        await _seed(open_env, owner, author, other)
        service = await open_env.get(CommentService)
        comment = await service.save(submission(owner), member(author))

        with pytest.raises(ValidationFailedError) as exc_info:
            await service.save(
                submission(owner, "Hijacked", comment_id=comment.id), member(other)
            )

        assert exc_info.value.errors["comment"] == [
            "Unable to modify another users comment."
        ]

    @pytest.mark.asyncio
    async def test_editing_unknown_comment(self, unit_env):
        """Editing a comment that does not exist is a not-found error."""
        user, owner = make_user(), make_owner()
        await _seed(unit_env, owner, user)
        service = await unit_env.get(CommentService)

        with pytest.raises(NotFoundError):
            await service.save(
                submission(owner, comment_id=CommentId(uuid4())), member(user)
            )


class TestSave:
    """Tests for saving and placing comments."""

    @pytest.mark.asyncio
    async def test_new_comment_is_pending_and_placed_at_root(self, unit_env):
        """Moderated comments start pending, at the thread root."""
        user, owner = make_user(), make_owner(type="product")
        await _seed(unit_env, owner, user)
        service = await unit_env.get(CommentService)
        structure_repo = await unit_env.get(StructureRepository)

        comment = await service.save(submission(owner, "Hello :)"), member(user))

        assert comment.id is not None
        assert comment.status == CommentStatus.PENDING
        assert comment.owner_type == "product"
        assert comment.user_id == user.id
        assert comment.ip_address == "203.0.113.7"
        assert comment.comment_date is not None
        node = await structure_repo.find_node(service.structure_id, comment.id)
        assert node.is_root_level

    @pytest.mark.asyncio
    async def test_reply_is_placed_under_parent(self, open_env):
        """A reply becomes the last child of its parent."""
        user, owner = make_user(), make_owner()
        await _seed(open_env, owner, user)
        service = await open_env.get(CommentService)

        parent = await service.save(submission(owner, "First"), member(user))
        reply = await service.save(
            submission(owner, "Reply", new_parent_id=parent.id), member(user)
        )
        second = await service.save(submission(owner, "Second"), member(user))

        assert await _levels(service, owner) == [
            (parent.id, 1),
            (reply.id, 2),
            (second.id, 1),
        ]

    @pytest.mark.asyncio
    async def test_edit_keeps_position_and_status(self, open_env):
        """Editing without submitting a parent leaves the comment in place."""
        user, owner = make_user(), make_owner()
        await _seed(open_env, owner, user)
        service = await open_env.get(CommentService)
        parent = await service.save(submission(owner, "First"), member(user))
        reply = await service.save(
            submission(owner, "Reply", new_parent_id=parent.id), member(user)
        )

        edited = await service.save(
            submission(owner, "Reply, edited", comment_id=reply.id), member(user)
        )

        assert edited.id == reply.id
        assert edited.text == "Reply, edited"
        assert edited.comment_date == reply.comment_date
        assert await _levels(service, owner) == [(parent.id, 1), (reply.id, 2)]

    @pytest.mark.asyncio
    async def test_move_carries_replies(self, open_env):
        """Moving a comment moves its whole subtree."""
        # Arrange
        user, owner = make_user(), make_owner()
        await _seed(open_env, owner, user)
        service = await open_env.get(CommentService)
        first = await service.save(submission(owner, "First"), member(user))
        second = await service.save(submission(owner, "Second"), member(user))
        reply = await service.save(
            submission(owner, "Reply", new_parent_id=second.id), member(user)
        )

        # Act
        await service.save(
            submission(owner, "Second", comment_id=second.id, new_parent_id=first.id),
            member(user),
        )

        # Assert
        assert await _levels(service, owner) == [
            (first.id, 1),
            (second.id, 2),
            (reply.id, 3),
        ]

    @pytest.mark.asyncio
    async def test_cannot_move_under_own_reply(self, open_env):
        """A comment cannot become a reply to one of its replies."""
        user, owner = make_user(), make_owner()
        await _seed(open_env, owner, user)
        service = await open_env.get(CommentService)
        parent = await service.save(submission(owner, "First"), member(user))
        reply = await service.save(
            submission(owner, "Reply", new_parent_id=parent.id), member(user)
        )

        with pytest.raises(ValidationFailedError) as exc_info:
            await service.save(
                submission(
                    owner, "First", comment_id=parent.id, new_parent_id=reply.id
                ),
                member(user),
            )

        assert exc_info.value.errors == {
            "new_parent_id": ["A comment cannot be moved under one of its replies."]
        }


class TestConcurrentWrites:
    """Tests for writes that interleave between validate and persist."""

    @pytest.mark.asyncio
    async def test_edit_keeps_approval_made_after_validation(self, unit_env):
        """An approval landing mid-edit is not reverted by the edit."""
        # Arrange
        user, moderator, owner = make_user(), make_user("Ada", "Admin"), make_owner()
        await _seed(unit_env, owner, user, moderator)
        service = await unit_env.get(CommentService)
        pending = await service.save(submission(owner, "Draft"), member(user))
        assert pending.status == CommentStatus.PENDING

        # Act
        validated = await service.validate(
            submission(owner, "Draft, edited", comment_id=pending.id), member(user)
        )
        await service.update_status(
            pending.id, CommentStatus.APPROVED, admin(moderator)
        )
        saved, transition = await service.persist(validated)

        # Assert
        assert saved.status == CommentStatus.APPROVED
        assert saved.text == "Draft, edited"
        assert transition.previous_status == CommentStatus.APPROVED
        assert not transition.is_approval
        stored = await (await unit_env.get(CommentRepository)).find_by_id(pending.id)
        assert stored.status == CommentStatus.APPROVED

    @pytest.mark.asyncio
    async def test_status_change_keeps_edit_made_after_read(self, unit_env):
        """A status change written from a stale read keeps the newer body."""
        # Arrange
        user, moderator, owner = make_user(), make_user("Ada", "Admin"), make_owner()
        await _seed(unit_env, owner, user, moderator)
        service = await unit_env.get(CommentService)
        pending = await service.save(submission(owner, "Draft"), member(user))
        moderation = ValidatedComment(
            comment=pending,
            new_parent_id=NOT_PROVIDED,
            actor=admin(moderator),
            status=CommentStatus.APPROVED,
        )

        # Act
        await service.save(
            submission(owner, "Draft, edited", comment_id=pending.id), member(user)
        )
        saved, transition = await service.persist(moderation)

        # Assert
        assert saved.status == CommentStatus.APPROVED
        assert saved.text == "Draft, edited"
        assert transition.is_approval


class TestResolveParent:
    """Tests for resolve_parent."""

    @pytest.mark.asyncio
    async def test_new_comment_without_parent(self, unit_env):
        """New comments always need placing, at the root by default."""
        service = await unit_env.get(CommentService)
        comment = Comment(owner_id=make_owner().id, owner_site_id=SITE_ID)

        decision = await service.resolve_parent(comment, NOT_PROVIDED)

        assert decision.has_new_parent
        assert decision.parent_id is None

    @pytest.mark.asyncio
    async def test_unknown_parent(self, unit_env):
        """A parent that does not exist is a not-found error."""
        service = await unit_env.get(CommentService)
        comment = Comment(owner_id=make_owner().id, owner_site_id=SITE_ID)

        with pytest.raises(NotFoundError):
            await service.resolve_parent(comment, CommentId(uuid4()))

    @pytest.mark.asyncio
    async def test_existing_comment_parent_choices(self, open_env):
        """Existing comments only move when the submitted parent differs."""
        # Arrange
        user, owner = make_user(), make_owner()
        await _seed(open_env, owner, user)
        service = await open_env.get(CommentService)
        root = await service.save(submission(owner, "Root"), member(user))
        other = await service.save(submission(owner, "Other"), member(user))
        reply = await service.save(
            submission(owner, "Reply", new_parent_id=root.id), member(user)
        )

        # Act & Assert
        # Not submitted: unchanged
        assert not (await service.resolve_parent(reply, NOT_PROVIDED)).has_new_parent
        # Explicit None: to the root, unless already there
        to_root = await service.resolve_parent(reply, None)
        assert to_root.has_new_parent and to_root.parent_id is None
        assert not (await service.resolve_parent(root, None)).has_new_parent
        # Same parent: unchanged
        assert not (await service.resolve_parent(reply, root.id)).has_new_parent
        # Different parent: moves
        moved = await service.resolve_parent(reply, other.id)
        assert moved.has_new_parent and moved.parent_id == other.id
        # Root-level comment given a parent: moves
        assert (await service.resolve_parent(other, root.id)).has_new_parent


class TestModeration:
    """Tests for status changes, trashing and deletion."""

    @pytest.mark.asyncio
    async def test_update_status_requires_admin(self, unit_env):
        """Only administrators change statuses."""
        user, owner = make_user(), make_owner()
        await _seed(unit_env, owner, user)
        service = await unit_env.get(CommentService)
        comment = await service.save(submission(owner), member(user))

        with pytest.raises(NotAuthorizedError):
            await service.update_status(
                comment.id, CommentStatus.APPROVED, member(user)
            )

        updated = await service.update_status(
            comment.id, CommentStatus.APPROVED, admin(user)
        )
        assert updated.status == CommentStatus.APPROVED

    @pytest.mark.asyncio
    async def test_bulk_update_reports_each_comment(self, unit_env):
        """One missing comment does not stop the rest of the batch."""
        user, owner = make_user(), make_owner()
        await _seed(unit_env, owner, user)
        service = await unit_env.get(CommentService)
        first = await service.save(submission(owner, "First"), member(user))
        second = await service.save(submission(owner, "Second"), member(user))
        missing = CommentId(uuid4())

        outcomes = await service.bulk_update_status(
            [first.id, missing, second.id], CommentStatus.SPAM, admin(user)
        )

        assert [(o.comment_id, o.success) for o in outcomes] == [
            (first.id, True),
            (missing, False),
            (second.id, True),
        ]
        assert "not found" in outcomes[1].error
        stored = await service.get_comment_by_id(second.id)
        assert stored.status == CommentStatus.SPAM

    @pytest.mark.asyncio
    async def test_trash_own_comment(self, unit_env):
        """Authors can trash their own comments and nobody else's."""
        author, other = make_user(), make_user("Alan", "Turing")
        owner = make_owner()
        await _seed(unit_env, owner, author, other)
        service = await unit_env.get(CommentService)
        comment = await service.save(submission(owner), member(author))

        with pytest.raises(NotAuthorizedError):
            await service.trash(comment.id, member(other))
        with pytest.raises(NotAuthorizedError):
            await service.trash(comment.id, guest())

        trashed = await service.trash(comment.id, member(author))
        assert trashed.status == CommentStatus.TRASHED

    @pytest.mark.asyncio
    async def test_delete_cascades_to_replies(self, open_env):
        """Deleting a comment removes its replies, flags and votes."""
        # Arrange
        user, voter, owner = make_user(), make_user("Alan"), make_owner()
        await _seed(open_env, owner, user, voter)
        service = await open_env.get(CommentService)
        flags = await open_env.get(FlagService)
        votes = await open_env.get(VoteService)
        parent = await service.save(submission(owner, "Parent"), member(user))
        reply = await service.save(
            submission(owner, "Reply", new_parent_id=parent.id), member(user)
        )
        keeper = await service.save(submission(owner, "Keeper"), member(user))
        await flags.toggle_flag(reply, member(voter), DictSessionStore())
        await votes.cast_vote(reply, member(voter), VoteType.UP, DictSessionStore())

        # Act
        deleted = await service.delete_comment(parent.id, admin(user))

        # Assert
        assert deleted == [reply.id, parent.id]
        assert await service.get_comment_by_id(reply.id) is None
        assert await flags.count_flags(reply) == 0
        assert await votes.get_upvotes(reply) == 0
        assert await _levels(service, owner) == [(keeper.id, 1)]

    @pytest.mark.asyncio
    async def test_delete_requires_admin(self, unit_env):
        """Members cannot hard delete."""
        user, owner = make_user(), make_owner()
        await _seed(unit_env, owner, user)
        service = await unit_env.get(CommentService)
        comment = await service.save(submission(owner), member(user))

        with pytest.raises(NotAuthorizedError):
            await service.delete_comment(comment.id, member(user))


class TestThread:
    """Tests for get_thread and author resolution."""

    @pytest.mark.asyncio
    async def test_thread_hides_pending_and_flagged(self, open_env):
        """Only approved comments under the flag limit are listed."""
        # Arrange
        user, flagger = make_user(), make_user("Alan")
        owner = make_owner()
        await _seed(open_env, owner, user, flagger)
        service = await open_env.get(CommentService)
        flags = await open_env.get(FlagService)
        visible = await service.save(submission(owner, "Visible"), member(user))
        flagged = await service.save(submission(owner, "Flagged"), member(user))
        pending = await service.save(submission(owner, "Pending"), member(user))
        await service.update_status(pending.id, CommentStatus.PENDING, admin(user))
        await flags.toggle_flag(flagged, member(flagger), DictSessionStore())

        # Act
        thread = await service.get_thread(owner.id, SITE_ID)
        with_flagged = await service.get_thread(owner.id, SITE_ID, include_flagged=True)

        # Assert
        assert [c.id for c, _ in thread] == [visible.id]
        assert [c.id for c, _ in with_flagged] == [visible.id, flagged.id]

    @pytest.mark.asyncio
    async def test_deleted_user_placeholder(self, unit_env):
        """Comments by removed accounts show a placeholder author."""
        service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        comment = await comment_repo.save(
            Comment(
                owner_id=make_owner().id,
                owner_site_id=SITE_ID,
                user_id=UserId(uuid4()),
                comment="Orphaned",
            )
        )

        author = await service.get_author(comment)

        assert author.full_name == "[Deleted User]"
        assert author.is_deleted

    @pytest.mark.asyncio
    async def test_registered_author(self, unit_env):
        """Registered authors are read from the user directory."""
        user, owner = make_user("Grace", "Hopper"), make_owner()
        await _seed(unit_env, owner, user)
        service = await unit_env.get(CommentService)
        comment = await service.save(submission(owner), member(user))

        author = await service.get_author(comment)

        assert author.full_name == "Grace Hopper"
        assert author.email == user.email
        assert not author.is_guest


class TestGuestIdentity:
    """Tests for guest_identity."""

    def test_full_name_is_split(self):
        identity = guest_identity("Dr. Jo Anne Bloggs", "jo@example.com")

        assert identity.first_name == "Jo"
        assert identity.last_name == "Bloggs"
        assert identity.email == "jo@example.com"
        assert identity.is_guest

    def test_missing_name_falls_back_to_guest(self):
        identity = guest_identity(None, None)

        assert identity.full_name == "Guest"
        assert identity.is_guest
