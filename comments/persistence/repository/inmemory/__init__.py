"""In-memory repository implementations for testing."""

from .comment import InMemoryCommentRepository
from .flag import InMemoryFlagRepository
from .owner import InMemoryOwnerRepository
from .structure import InMemoryStructureRepository
from .subscription import InMemorySubscriptionRepository
from .transaction import InMemoryTransactionManager
from .user import InMemoryUserRepository
from .vote import InMemoryVoteRepository

__all__ = [
    "InMemoryCommentRepository",
    "InMemoryFlagRepository",
    "InMemoryOwnerRepository",
    "InMemoryStructureRepository",
    "InMemorySubscriptionRepository",
    "InMemoryTransactionManager",
    "InMemoryUserRepository",
    "InMemoryVoteRepository",
]
