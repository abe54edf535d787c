"""In-memory repository implementations for testing."""

from .account import InMemoryAccountRepository
from .link import InMemoryLinkRepository
from .profile import InMemoryProfileRepository
from .user import InMemoryUserRepository
from .user_identity import InMemoryUserIdentityRepository

__all__ = [
    "InMemoryAccountRepository",
    "InMemoryLinkRepository",
    "InMemoryProfileRepository",
    "InMemoryUserIdentityRepository",
    "InMemoryUserRepository",
]
