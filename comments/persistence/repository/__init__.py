"""PostgreSQL repository implementations."""

from comments.persistence.repository.comment import PostgresCommentRepository
from comments.persistence.repository.flag import PostgresFlagRepository
from comments.persistence.repository.owner import PostgresOwnerRepository
from comments.persistence.repository.structure import PostgresStructureRepository
from comments.persistence.repository.subscription import (
    PostgresSubscriptionRepository,
)
from comments.persistence.repository.transaction import PostgresTransactionManager
from comments.persistence.repository.user import PostgresUserRepository
from comments.persistence.repository.vote import PostgresVoteRepository

__all__ = [
    "PostgresCommentRepository",
    "PostgresFlagRepository",
    "PostgresOwnerRepository",
    "PostgresStructureRepository",
    "PostgresSubscriptionRepository",
    "PostgresTransactionManager",
    "PostgresUserRepository",
    "PostgresVoteRepository",
]
