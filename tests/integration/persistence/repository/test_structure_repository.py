"""Integration tests for the PostgreSQL repositories.

These tests need the docker-compose database with migrations applied:

    pytest -m integration
"""

from uuid import uuid4

import pytest

from comments.domain.model.comment import Comment
from comments.domain.repository import CommentRepository, StructureRepository
from comments.domain.value import CommentStatus, OwnerId, SiteId, StructureId
from tests.harness import create_env_fixture

pytestmark = pytest.mark.integration

# Integration test fixture - real PostgreSQL
integration_env = create_env_fixture(unmock={"persistence"})


class TestStructureRepositoryIntegration:
    """Integration tests for PostgresStructureRepository."""

    @pytest.mark.asyncio
    async def test_move_subtree_rewrites_paths(self, integration_env):
        """Moving a node rewrites the paths and levels of its descendants."""
        # Arrange
        repo = await integration_env.get(StructureRepository)
        structure = StructureId(uuid4())
        a, b, child = uuid4(), uuid4(), uuid4()
        await repo.append_to_root(structure, a)
        await repo.append_to_root(structure, b)
        await repo.append(structure, child, b)

        # Act
        await repo.append(structure, b, a)

        # Assert
        nodes = await repo.find_nodes(structure, [child, b, a])
        assert [(n.element_id, n.level) for n in nodes] == [(a, 1), (b, 2), (child, 3)]
        assert [n.path for n in nodes] == [
            "000001",
            "000001.000001",
            "000001.000001.000001",
        ]
        assert await repo.find_ancestor(structure, child, distance=2) == a


class TestCommentRepositoryIntegration:
    """Integration tests for PostgresCommentRepository."""

    @pytest.mark.asyncio
    async def test_round_trip_keeps_shortcodes(self, integration_env):
        """Bodies are stored with shortcodes and read back as Unicode."""
        repo = await integration_env.get(CommentRepository)
        owner_id = OwnerId(uuid4())

        saved = await repo.save(
            Comment(
                owner_id=owner_id,
                owner_site_id=SiteId(1),
                name="Jo",
                email="jo@example.com",
                comment="Nice \N{THUMBS UP SIGN}",
                status=CommentStatus.APPROVED,
            )
        )

        found = await repo.find_by_id(saved.id)
        assert found.raw_comment == "Nice :thumbs_up:"
        assert found.text == "Nice \N{THUMBS UP SIGN}"
        locked = await repo.find_for_update(saved.id)
        assert locked.status == CommentStatus.APPROVED
        assert [c.id for c in await repo.find_by_owner(owner_id, SiteId(1))] == [
            saved.id
        ]
