"""Database engine, sessions and the request unit of work."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import logfire
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from comments.config import DatabaseSettings


def create_engine(settings: DatabaseSettings, echo: bool = False) -> AsyncEngine:
    """Create the async PostgreSQL engine.

    Args:
        settings: Database settings
        echo: Log every SQL statement

    Returns:
        Configured async engine
    """
    return create_async_engine(
        settings.url,
        echo=echo,
        pool_pre_ping=True,
        pool_size=settings.pool_size,
        max_overflow=settings.max_overflow,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create the session factory.

    Repositories flush explicitly, since structure placement needs the ids
    assigned by a comment insert within the same transaction.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@asynccontextmanager
async def unit_of_work(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    """One transaction spanning everything a request writes.

    A comment, its thread placement and its flag/vote cleanup either all
    commit or all roll back.

    Yields:
        Session bound to the transaction
    """
    async with session_factory() as session:
        try:
            yield session
        except Exception as e:
            await session.rollback()
            logfire.warn(
                "Transaction rolled back", error=str(e), error_type=type(e).__name__
            )
            raise
        else:
            await session.commit()
