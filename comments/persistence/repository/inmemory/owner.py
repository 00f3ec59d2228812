"""In-memory owner directory for testing."""

from typing import Optional

from comments.domain.model.owner import Owner
from comments.domain.repository.owner import OwnerRepository
from comments.domain.value import OwnerId, SiteId


class InMemoryOwnerRepository(OwnerRepository):
    """In-memory implementation of OwnerRepository for testing."""

    def __init__(self) -> None:
        self._owners: dict[tuple[OwnerId, SiteId], Owner] = {}

    def add(self, owner: Owner) -> Owner:
        """Register an owner (stands in for the host platform)."""
        self._owners[(owner.id, owner.site_id)] = owner
        return owner

    async def find_by_id(self, owner_id: OwnerId, site_id: SiteId) -> Optional[Owner]:
        """Find an owner by ID and site."""
        return self._owners.get((owner_id, site_id))
