"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from comments.config import Settings
from comments.domain.repository import (
    CommentRepository,
    FlagRepository,
    OwnerRepository,
    StructureRepository,
    SubscriptionRepository,
    TransactionManager,
    UserRepository,
    VoteRepository,
)
from comments.persistence.database import (
    create_engine,
    create_session_factory,
    unit_of_work,
)
from comments.persistence.repository import (
    PostgresCommentRepository,
    PostgresFlagRepository,
    PostgresOwnerRepository,
    PostgresStructureRepository,
    PostgresSubscriptionRepository,
    PostgresTransactionManager,
    PostgresUserRepository,
    PostgresVoteRepository,
)
from comments.util.di.base import ProviderBase
from comments.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """Provide the engine, disposing its pool when the container closes."""
        engine = create_engine(settings.database, echo=settings.debug)
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide the request's unit of work.

        Committed when the request completes, rolled back if it raised.
        """
        async with unit_of_work(session_factory) as session:
            yield session

    @provide(scope=Scope.REQUEST)
    def get_comment_repository(self, session: AsyncSession) -> CommentRepository:
        """Provide Comment repository."""
        return PostgresCommentRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_flag_repository(self, session: AsyncSession) -> FlagRepository:
        """Provide Flag repository."""
        return PostgresFlagRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_vote_repository(self, session: AsyncSession) -> VoteRepository:
        """Provide Vote repository."""
        return PostgresVoteRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_subscription_repository(
        self, session: AsyncSession
    ) -> SubscriptionRepository:
        """Provide Subscription repository."""
        return PostgresSubscriptionRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_structure_repository(self, session: AsyncSession) -> StructureRepository:
        """Provide Structure repository."""
        return PostgresStructureRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_owner_repository(self, session: AsyncSession) -> OwnerRepository:
        """Provide Owner repository."""
        return PostgresOwnerRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, session: AsyncSession) -> UserRepository:
        """Provide User repository."""
        return PostgresUserRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_transaction_manager(self, session: AsyncSession) -> TransactionManager:
        """Provide savepoint control over the request's session."""
        return PostgresTransactionManager(session)
