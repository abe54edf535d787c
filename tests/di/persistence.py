"""In-memory persistence for tests."""

from dishka import Scope, provide

from presence.domain.repository import (
    AccountRepository,
    LinkRepository,
    ProfileRepository,
    UserIdentityRepository,
    UserRepository,
)
from presence.persistence.repository.inmemory import (
    InMemoryAccountRepository,
    InMemoryLinkRepository,
    InMemoryProfileRepository,
    InMemoryUserIdentityRepository,
    InMemoryUserRepository,
)
from presence.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Persistence backed by in-memory repositories.

    APP scope keeps state across the requests made against one container
    (several HTTP calls in a route test). Tests stay isolated because each
    one builds its own container.
    """

    __is_mock__ = True

    users = provide(InMemoryUserRepository, provides=UserRepository, scope=Scope.APP)
    user_identities = provide(
        InMemoryUserIdentityRepository,
        provides=UserIdentityRepository,
        scope=Scope.APP,
    )
    accounts = provide(
        InMemoryAccountRepository, provides=AccountRepository, scope=Scope.APP
    )
    profiles = provide(
        InMemoryProfileRepository, provides=ProfileRepository, scope=Scope.APP
    )
    links = provide(InMemoryLinkRepository, provides=LinkRepository, scope=Scope.APP)
