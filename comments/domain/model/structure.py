"""Structure node.

Position of an element within a named hierarchical ordering. Level 1 is
the thread root; path sorts nodes in depth-first thread order.
"""

from typing import Optional
from uuid import UUID

from pydantic import Field

from comments.domain.model.common import DomainModel
from comments.domain.value import StructureId


class StructureNode(DomainModel):
    """Node of a hierarchical ordering."""

    structure_id: StructureId
    element_id: UUID
    parent_id: Optional[UUID] = None
    level: int = Field(default=1, ge=1)
    path: str

    @property
    def is_root_level(self) -> bool:
        return self.level == 1
