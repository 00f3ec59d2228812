"""Unit tests for SubmitCommentUseCase."""

from datetime import datetime, timedelta
from uuid import UUID, uuid4

import pytest

from comments.application.usecase.comment import (
    SubmitCommentRequest,
    SubmitCommentUseCase,
)
from comments.config import CommentSettings
from comments.domain.error import NotFoundError
from comments.domain.repository import (
    OwnerRepository,
    StructureRepository,
    UserRepository,
)
from comments.domain.service import CommentService
from comments.domain.value import CommentId, CommentStatus
from tests.conftest import make_owner, make_settings, make_user, member
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture(
    settings=make_settings(comments=CommentSettings(require_moderation=False))
)


async def _setup(unit_env):
    user, owner = make_user(), make_owner()
    (await unit_env.get(OwnerRepository)).add(owner)
    (await unit_env.get(UserRepository)).add(user)
    comment_service = await unit_env.get(CommentService)
    return SubmitCommentUseCase(comment_service=comment_service), owner, user


def _request(owner, user, text="Nice :thumbs_up:", **kwargs) -> SubmitCommentRequest:
    return SubmitCommentRequest(
        owner_id=str(owner.id),
        site_id=owner.site_id,
        comment=text,
        actor=member(user),
        **kwargs,
    )


class TestSubmitCommentUseCase:
    """Tests for SubmitCommentUseCase."""

    @pytest.mark.asyncio
    async def test_submit_new_comment(self, unit_env):
        """A valid submission is saved and returned with Unicode emoji."""
        # Arrange
        use_case, owner, user = await _setup(unit_env)

        # Act
        response = await use_case.execute(_request(owner, user))

        # Assert
        assert response.success is True
        assert response.errors == {}
        assert response.comment.status == CommentStatus.APPROVED
        assert response.comment.text == "Nice \N{THUMBS UP SIGN}"
        assert response.comment.owner_id == str(owner.id)

    @pytest.mark.asyncio
    async def test_validation_errors_are_returned(self, unit_env):
        """Validation failures come back in the response, not as exceptions."""
        use_case, owner, user = await _setup(unit_env)

        response = await use_case.execute(
            _request(owner, user, text="Buy now", honeypot="http://spam.example")
        )

        assert response.success is False
        assert response.comment is None
        assert response.errors == {
            "comment": ["Form validation failed. Marked as spam."]
        }

    @pytest.mark.asyncio
    async def test_fast_submission_is_spam(self, unit_env):
        """A form posted straight after rendering is treated as a bot."""
        use_case, owner, user = await _setup(unit_env)

        response = await use_case.execute(
            _request(owner, user, rendered_at=datetime.now() - timedelta(seconds=1))
        )

        assert response.success is False
        assert "comment" in response.errors

    @pytest.mark.asyncio
    async def test_omitted_parent_keeps_position(self, unit_env):
        """Editing without new_parent_id leaves a reply under its parent."""
        # Arrange
        use_case, owner, user = await _setup(unit_env)
        structure_repo = await unit_env.get(StructureRepository)
        comment_service = await unit_env.get(CommentService)
        parent = (await use_case.execute(_request(owner, user, "Parent"))).comment
        reply = (
            await use_case.execute(
                _request(owner, user, "Reply", new_parent_id=parent.comment_id)
            )
        ).comment

        # Act
        response = await use_case.execute(
            _request(owner, user, "Reply, edited", comment_id=reply.comment_id)
        )

        # Assert
        assert response.success is True
        node = await structure_repo.find_node(
            comment_service.structure_id, CommentId(UUID(reply.comment_id))
        )
        assert str(node.parent_id) == parent.comment_id

    @pytest.mark.asyncio
    async def test_null_parent_moves_to_root(self, unit_env):
        """Sending new_parent_id as null moves a reply to the thread root."""
        use_case, owner, user = await _setup(unit_env)
        structure_repo = await unit_env.get(StructureRepository)
        comment_service = await unit_env.get(CommentService)
        parent = (await use_case.execute(_request(owner, user, "Parent"))).comment
        reply = (
            await use_case.execute(
                _request(owner, user, "Reply", new_parent_id=parent.comment_id)
            )
        ).comment

        response = await use_case.execute(
            _request(
                owner, user, "Reply", comment_id=reply.comment_id, new_parent_id=None
            )
        )

        assert response.success is True
        node = await structure_repo.find_node(
            comment_service.structure_id, CommentId(UUID(reply.comment_id))
        )
        assert node.is_root_level
        assert node.parent_id is None

    @pytest.mark.asyncio
    async def test_unknown_parent_raises(self, unit_env):
        """Replying to a comment that does not exist is a not-found error."""
        use_case, owner, user = await _setup(unit_env)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                _request(owner, user, new_parent_id=str(uuid4()))
            )

    @pytest.mark.asyncio
    async def test_invalid_owner_id(self, unit_env):
        """Malformed ids are rejected."""
        use_case, _, user = await _setup(unit_env)

        with pytest.raises(ValueError):
            await use_case.execute(
                SubmitCommentRequest(
                    owner_id="not-a-uuid", site_id=1, comment="Hi", actor=member(user)
                )
            )
