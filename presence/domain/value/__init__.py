"""Domain value objects for presence."""

from presence.domain.value.identifiers import (
    AccountId,
    LinkId,
    ProfileId,
    UserId,
    UserIdentityId,
)
from presence.domain.value.provider import (
    PROVIDER_DESCRIPTORS,
    ProviderDescriptor,
    get_descriptor,
)
from presence.domain.value.types import (
    AccountType,
    AuthProvider,
    CanonicalIdentity,
    Username,
)

__all__ = [
    # Identifiers
    "AccountId",
    "LinkId",
    "ProfileId",
    "UserId",
    "UserIdentityId",
    # Types
    "AccountType",
    "AuthProvider",
    "CanonicalIdentity",
    "Username",
    # Provider table
    "PROVIDER_DESCRIPTORS",
    "ProviderDescriptor",
    "get_descriptor",
]
