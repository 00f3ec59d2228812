"""In-memory hierarchical ordering store for testing."""

from typing import Optional
from uuid import UUID

from comments.domain.model.structure import StructureNode
from comments.domain.repository.structure import StructureRepository
from comments.domain.value import StructureId
from comments.persistence.repository._path import (
    child_path,
    descendant_prefix,
    next_ordinal,
    rebase,
)


class InMemoryStructureRepository(StructureRepository):
    """In-memory implementation of StructureRepository for testing."""

    def __init__(self) -> None:
        self._nodes: dict[tuple[StructureId, UUID], StructureNode] = {}

    async def find_node(
        self, structure_id: StructureId, element_id: UUID
    ) -> Optional[StructureNode]:
        """Find an element's node."""
        return self._nodes.get((structure_id, element_id))

    async def find_ancestor(
        self, structure_id: StructureId, element_id: UUID, distance: int = 1
    ) -> Optional[UUID]:
        """Walk up parent links the given number of levels."""
        current: Optional[UUID] = element_id
        for _ in range(distance):
            node = self._nodes.get((structure_id, current)) if current else None
            if node is None:
                return None
            current = node.parent_id
        return current

    async def find_nodes(
        self, structure_id: StructureId, element_ids: list[UUID]
    ) -> list[StructureNode]:
        """Find the nodes of several elements, in path order."""
        nodes = [
            self._nodes[(structure_id, eid)]
            for eid in element_ids
            if (structure_id, eid) in self._nodes
        ]
        return sorted(nodes, key=lambda n: n.path)

    async def find_descendants(
        self, structure_id: StructureId, element_id: UUID
    ) -> list[StructureNode]:
        """Find every node below an element, in path order."""
        node = self._nodes.get((structure_id, element_id))
        if node is None:
            return []
        return self._subtree(structure_id, node.path)

    async def append_to_root(
        self, structure_id: StructureId, element_id: UUID
    ) -> StructureNode:
        """Place an element as the last root-level node."""
        return self._place(structure_id, element_id, parent=None)

    async def append(
        self, structure_id: StructureId, element_id: UUID, parent_id: UUID
    ) -> StructureNode:
        """Place an element as the last child of a parent."""
        parent = self._nodes.get((structure_id, parent_id))
        if parent is None:
            raise ValueError(f"Parent {parent_id} is not placed in the structure")
        return self._place(structure_id, element_id, parent=parent)

    async def remove(self, structure_id: StructureId, element_id: UUID) -> None:
        """Remove an element's node."""
        self._nodes.pop((structure_id, element_id), None)

    def _subtree(self, structure_id: StructureId, path: str) -> list[StructureNode]:
        prefix = descendant_prefix(path)
        nodes = [
            n
            for (sid, _), n in self._nodes.items()
            if sid == structure_id and n.path.startswith(prefix)
        ]
        return sorted(nodes, key=lambda n: n.path)

    def _place(
        self,
        structure_id: StructureId,
        element_id: UUID,
        parent: Optional[StructureNode],
    ) -> StructureNode:
        existing = self._nodes.get((structure_id, element_id))
        if existing is not None and parent is not None:
            if parent.element_id == element_id or parent.path.startswith(
                descendant_prefix(existing.path)
            ):
                raise ValueError("Cannot move an element below itself")

        parent_id = parent.element_id if parent else None
        siblings = [
            n.path
            for (sid, _), n in self._nodes.items()
            if sid == structure_id and n.parent_id == parent_id
        ]
        last = max(siblings) if siblings else None
        node = StructureNode(
            structure_id=structure_id,
            element_id=element_id,
            parent_id=parent_id,
            level=parent.level + 1 if parent else 1,
            path=child_path(parent.path if parent else None, next_ordinal(last)),
        )

        if existing is not None:
            old_prefix = descendant_prefix(existing.path)
            new_prefix = descendant_prefix(node.path)
            for child in self._subtree(structure_id, existing.path):
                self._nodes[(structure_id, child.element_id)] = child.model_copy(
                    update={
                        "path": rebase(child.path, old_prefix, new_prefix),
                        "level": child.level + node.level - existing.level,
                    }
                )

        self._nodes[(structure_id, element_id)] = node
        return node
