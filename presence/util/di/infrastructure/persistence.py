"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from presence.config import Settings
from presence.domain.repository import (
    AccountRepository,
    LinkRepository,
    ProfileRepository,
    UserIdentityRepository,
    UserRepository,
)
from presence.persistence.database import create_engine, create_session_factory
from presence.persistence.repository import (
    PostgresAccountRepository,
    PostgresLinkRepository,
    PostgresProfileRepository,
    PostgresUserIdentityRepository,
    PostgresUserRepository,
)
from presence.util.di.base import ProviderBase
from presence.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """PostgreSQL persistence.

    One engine per process; one session per request shared by all of the
    request's repositories. Repositories commit each store operation
    themselves, so nothing is committed here.
    """

    __is_mock__ = False

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """Provide the engine, disposing its pool when the app shuts down."""
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide the request's session; roll back whatever a failure left open."""
        async with session_factory() as session:
            try:
                yield session
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    users = provide(
        PostgresUserRepository, provides=UserRepository, scope=Scope.REQUEST
    )
    user_identities = provide(
        PostgresUserIdentityRepository,
        provides=UserIdentityRepository,
        scope=Scope.REQUEST,
    )
    accounts = provide(
        PostgresAccountRepository, provides=AccountRepository, scope=Scope.REQUEST
    )
    profiles = provide(
        PostgresProfileRepository, provides=ProfileRepository, scope=Scope.REQUEST
    )
    links = provide(
        PostgresLinkRepository, provides=LinkRepository, scope=Scope.REQUEST
    )
