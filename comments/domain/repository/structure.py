"""Hierarchical ordering store interface."""

from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from comments.domain.model.structure import StructureNode
from comments.domain.value import StructureId


class StructureRepository(ABC):
    """Positions elements within named hierarchical orderings."""

    @abstractmethod
    async def find_node(
        self, structure_id: StructureId, element_id: UUID
    ) -> Optional[StructureNode]:
        """Find an element's node.

        Returns:
            The node if the element is placed, None otherwise
        """
        pass

    @abstractmethod
    async def find_ancestor(
        self, structure_id: StructureId, element_id: UUID, distance: int = 1
    ) -> Optional[UUID]:
        """Find the ancestor of an element at the given distance.

        Args:
            structure_id: Structure scope
            element_id: Element to start from
            distance: 1 for the immediate parent

        Returns:
            The ancestor's element ID, or None at/above the root
        """
        pass

    @abstractmethod
    async def find_nodes(
        self, structure_id: StructureId, element_ids: List[UUID]
    ) -> List[StructureNode]:
        """Find the nodes of several elements, in thread (path) order."""
        pass

    @abstractmethod
    async def find_descendants(
        self, structure_id: StructureId, element_id: UUID
    ) -> List[StructureNode]:
        """Find every node below an element, in thread order."""
        pass

    @abstractmethod
    async def append_to_root(
        self, structure_id: StructureId, element_id: UUID
    ) -> StructureNode:
        """Place an element as the last root-level node.

        An element that is already placed is moved.
        """
        pass

    @abstractmethod
    async def append(
        self, structure_id: StructureId, element_id: UUID, parent_id: UUID
    ) -> StructureNode:
        """Place an element as the last child of a parent.

        An element that is already placed is moved, together with its
        descendants.

        Raises:
            ValueError: If the parent is not placed in the structure
        """
        pass

    @abstractmethod
    async def remove(self, structure_id: StructureId, element_id: UUID) -> None:
        """Remove an element's node (descendants are left untouched)."""
        pass
