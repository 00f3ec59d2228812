"""Owner read model.

An owner is the host platform's content item a thread is attached to.
The host owns these records; this service only reads them.
"""

from datetime import datetime
from typing import Optional

from comments.domain.model.common import DomainModel
from comments.domain.value import OwnerId, SiteId, UserId


class Owner(DomainModel):
    """Content item that receives comments."""

    id: OwnerId
    site_id: SiteId
    type: str
    title: str = ""
    author_id: Optional[UserId] = None
    comments_enabled: bool = True
    deleted_at: Optional[datetime] = None

    @property
    def is_live(self) -> bool:
        return self.deleted_at is None
