"""User read model (host platform account)."""

from typing import Optional

from comments.domain.model.common import DomainModel
from comments.domain.value import UserId


class User(DomainModel):
    """Registered user as seen by the comments service."""

    id: UserId
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    @property
    def full_name(self) -> str:
        return " ".join(p for p in (self.first_name, self.last_name) if p)
