"""Domain model entities for presence."""

from presence.domain.model.account import Account, ProviderAccountData
from presence.domain.model.link import Link
from presence.domain.model.profile import Profile
from presence.domain.model.user import User
from presence.domain.model.user_identity import UserIdentity

__all__ = [
    "Account",
    "Link",
    "Profile",
    "ProviderAccountData",
    "User",
    "UserIdentity",
]
