"""PostgreSQL repository implementations."""

from presence.persistence.repository.account import PostgresAccountRepository
from presence.persistence.repository.link import PostgresLinkRepository
from presence.persistence.repository.profile import PostgresProfileRepository
from presence.persistence.repository.user import PostgresUserRepository
from presence.persistence.repository.user_identity import (
    PostgresUserIdentityRepository,
)

__all__ = [
    "PostgresAccountRepository",
    "PostgresLinkRepository",
    "PostgresProfileRepository",
    "PostgresUserIdentityRepository",
    "PostgresUserRepository",
]
