"""Repository interfaces for the presence domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from presence.domain.repository.account import AccountRepository
from presence.domain.repository.link import LinkRepository
from presence.domain.repository.profile import ProfileRepository
from presence.domain.repository.user import UserRepository
from presence.domain.repository.user_identity import UserIdentityRepository

__all__ = [
    "AccountRepository",
    "LinkRepository",
    "ProfileRepository",
    "UserIdentityRepository",
    "UserRepository",
]
