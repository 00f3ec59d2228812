"""Owner directory interface (host content store)."""

from abc import ABC, abstractmethod
from typing import Optional

from comments.domain.model.owner import Owner
from comments.domain.value import OwnerId, SiteId


class OwnerRepository(ABC):
    """Read access to the host platform's content items."""

    @abstractmethod
    async def find_by_id(self, owner_id: OwnerId, site_id: SiteId) -> Optional[Owner]:
        """Find an owner by ID within a site.

        Returns:
            The owner if found, None otherwise
        """
        pass
