"""PostgreSQL implementation of the hierarchical ordering store."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from comments.domain.model import StructureNode
from comments.domain.repository import StructureRepository
from comments.domain.value import StructureId
from comments.persistence.mappers import row_to_structure_node
from comments.persistence.repository._path import (
    child_path,
    descendant_prefix,
    next_ordinal,
)
from comments.persistence.tables import structure_elements_table

_table = structure_elements_table


class PostgresStructureRepository(StructureRepository):
    """Structure store using a materialized path column."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_node(
        self, structure_id: StructureId, element_id: UUID
    ) -> Optional[StructureNode]:
        """Find an element's node."""
        stmt = select(_table).where(
            _table.c.structure_id == structure_id,
            _table.c.element_id == element_id,
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_structure_node(row._asdict()) if row else None

    async def find_ancestor(
        self, structure_id: StructureId, element_id: UUID, distance: int = 1
    ) -> Optional[UUID]:
        """Walk up parent links the given number of levels."""
        current: Optional[UUID] = element_id
        for _ in range(distance):
            if current is None:
                return None
            node = await self.find_node(structure_id, current)
            if node is None:
                return None
            current = node.parent_id
        return current

    async def find_nodes(
        self, structure_id: StructureId, element_ids: List[UUID]
    ) -> List[StructureNode]:
        """Find the nodes of several elements, in path order."""
        if not element_ids:
            return []
        stmt = (
            select(_table)
            .where(
                _table.c.structure_id == structure_id,
                _table.c.element_id.in_(element_ids),
            )
            .order_by(_table.c.path)
        )
        result = await self.session.execute(stmt)
        return [row_to_structure_node(row._asdict()) for row in result.fetchall()]

    async def find_descendants(
        self, structure_id: StructureId, element_id: UUID
    ) -> List[StructureNode]:
        """Find every node below an element, in path order."""
        node = await self.find_node(structure_id, element_id)
        if node is None:
            return []
        stmt = (
            select(_table)
            .where(
                _table.c.structure_id == structure_id,
                _table.c.path.startswith(descendant_prefix(node.path), autoescape=True),
            )
            .order_by(_table.c.path)
        )
        result = await self.session.execute(stmt)
        return [row_to_structure_node(row._asdict()) for row in result.fetchall()]

    async def append_to_root(
        self, structure_id: StructureId, element_id: UUID
    ) -> StructureNode:
        """Place an element as the last root-level node."""
        return await self._place(structure_id, element_id, parent=None)

    async def append(
        self, structure_id: StructureId, element_id: UUID, parent_id: UUID
    ) -> StructureNode:
        """Place an element as the last child of a parent."""
        parent = await self.find_node(structure_id, parent_id)
        if parent is None:
            raise ValueError(f"Parent {parent_id} is not placed in the structure")
        return await self._place(structure_id, element_id, parent=parent)

    async def remove(self, structure_id: StructureId, element_id: UUID) -> None:
        """Remove an element's node."""
        stmt = delete(_table).where(
            _table.c.structure_id == structure_id,
            _table.c.element_id == element_id,
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def _last_child_path(
        self, structure_id: StructureId, parent_id: Optional[UUID]
    ) -> Optional[str]:
        parent_clause = (
            _table.c.parent_id.is_(None)
            if parent_id is None
            else _table.c.parent_id == parent_id
        )
        stmt = select(func.max(_table.c.path)).where(
            _table.c.structure_id == structure_id, parent_clause
        )
        result = await self.session.execute(stmt)
        return result.scalar()

    async def _place(
        self,
        structure_id: StructureId,
        element_id: UUID,
        parent: Optional[StructureNode],
    ) -> StructureNode:
        existing = await self.find_node(structure_id, element_id)
        if existing is not None and parent is not None:
            if parent.element_id == element_id or parent.path.startswith(
                descendant_prefix(existing.path)
            ):
                raise ValueError("Cannot move an element below itself")

        parent_id = parent.element_id if parent else None
        last = await self._last_child_path(structure_id, parent_id)
        path = child_path(parent.path if parent else None, next_ordinal(last))
        node = StructureNode(
            structure_id=structure_id,
            element_id=element_id,
            parent_id=parent_id,
            level=parent.level + 1 if parent else 1,
            path=path,
        )

        if existing is None:
            await self.session.execute(insert(_table).values(**node.model_dump()))
        else:
            await self._move_subtree(existing, node)

        await self.session.flush()
        return node

    async def _move_subtree(self, old: StructureNode, new: StructureNode) -> None:
        """Rewrite a node and its descendants under a new path."""
        old_prefix = descendant_prefix(old.path)
        await self.session.execute(
            update(_table)
            .where(
                _table.c.structure_id == old.structure_id,
                _table.c.path.startswith(old_prefix, autoescape=True),
            )
            .values(
                path=func.concat(
                    descendant_prefix(new.path),
                    func.substr(_table.c.path, len(old_prefix) + 1),
                ),
                level=_table.c.level + (new.level - old.level),
            )
        )
        await self.session.execute(
            update(_table)
            .where(
                _table.c.structure_id == old.structure_id,
                _table.c.element_id == old.element_id,
            )
            .values(parent_id=new.parent_id, level=new.level, path=new.path)
        )
