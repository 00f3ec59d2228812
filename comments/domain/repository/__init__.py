"""Repository interfaces for the comments domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from comments.domain.repository.comment import CommentRepository
from comments.domain.repository.flag import FlagRepository
from comments.domain.repository.owner import OwnerRepository
from comments.domain.repository.structure import StructureRepository
from comments.domain.repository.subscription import SubscriptionRepository
from comments.domain.repository.transaction import TransactionManager
from comments.domain.repository.user import UserRepository
from comments.domain.repository.vote import VoteRepository

__all__ = [
    "CommentRepository",
    "FlagRepository",
    "OwnerRepository",
    "StructureRepository",
    "SubscriptionRepository",
    "TransactionManager",
    "UserRepository",
    "VoteRepository",
]
