"""Domain value objects for presence.

Value objects are immutable and defined by their values, not identity.
"""

from enum import Enum
from typing import Any

from pydantic import Field, field_validator

from presence.domain.value.common import RootValueObject, ValueObject


class AuthProvider(str, Enum):
    """Supported identity providers."""

    GITHUB = "github"
    GOOGLE = "google"


class AccountType(str, Enum):
    """Billing tier of a user."""

    FREE = "free"
    PREMIUM = "premium"


class Username(RootValueObject[str]):
    """Globally unique public username a profile is keyed by.

    Derived from the provider login handle, or the local part of the email
    address when the provider has no handle.
    """

    @field_validator("root")
    @classmethod
    def validate_username(cls, v: str) -> str:
        """Validate username is not blank and within length limits."""
        if not v.strip():
            raise ValueError("Username must not be blank")
        if len(v) > 255:
            raise ValueError("Username must be at most 255 characters")
        return v


class CanonicalIdentity(ValueObject):
    """Provider-agnostic view of a verified identity assertion."""

    provider: AuthProvider
    provider_id: str  # Permanent id on the provider (GitHub numeric id, Google sub)
    username: Username
    display_name: str
    email: str | None = None
    avatar_url: str | None = None
    provider_meta: dict[str, Any] = Field(default_factory=dict)
