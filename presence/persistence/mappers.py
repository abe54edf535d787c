"""Mappers for converting between database rows and domain models.

Domain models are immutable Pydantic models, so rows are mapped by hand.
"""

from typing import Any, Dict

from presence.domain.model import (
    Account,
    Link,
    Profile,
    ProviderAccountData,
    User,
    UserIdentity,
)
from presence.domain.value import (
    AccountId,
    AccountType,
    AuthProvider,
    LinkId,
    ProfileId,
    UserId,
    UserIdentityId,
    Username,
)


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model."""
    return User(
        id=UserId(row["id"]),
        email=row.get("email"),
        name=row.get("name"),
        account_type=AccountType(row["account_type"]) if row.get("account_type") else None,
        billing_customer_id=row.get("billing_customer_id"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict."""
    data = user.model_dump()
    data["account_type"] = user.account_type.value if user.account_type else None
    return data


def row_to_user_identity(row: Dict[str, Any]) -> UserIdentity:
    """Convert database row to UserIdentity domain model."""
    return UserIdentity(
        id=UserIdentityId(row["id"]),
        user_id=UserId(row["user_id"]),
        provider=AuthProvider(row["provider"]),
        provider_user_id=row["provider_user_id"],
        provider_handle=row.get("provider_handle"),
        provider_email=row.get("provider_email"),
        created_at=row["created_at"],
        last_login_at=row.get("last_login_at"),
    )


def user_identity_to_dict(identity: UserIdentity) -> Dict[str, Any]:
    """Convert UserIdentity domain model to database dict."""
    data = identity.model_dump()
    data["provider"] = identity.provider.value
    return data


def row_to_account(row: Dict[str, Any]) -> Account:
    """Convert database row to Account domain model.

    Provider sub-documents are stored as ``{"data": ..., "updated_at": iso}``.
    """
    return Account(
        id=AccountId(row["id"]),
        user_id=UserId(row["user_id"]),
        providers={
            name: ProviderAccountData.model_validate(doc)
            for name, doc in (row.get("providers") or {}).items()
        },
        profile_ids=[ProfileId(pid) for pid in row.get("profile_ids") or []],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def provider_data_to_json(data: ProviderAccountData) -> Dict[str, Any]:
    """Convert a provider sub-document to its JSONB form."""
    return data.model_dump(mode="json")


def row_to_profile(row: Dict[str, Any]) -> Profile:
    """Convert database row to Profile domain model."""
    return Profile(
        id=ProfileId(row["id"]),
        username=Username(row["username"]),
        name=row.get("name"),
        bio=row.get("bio"),
        user_id=UserId(row["user_id"]),
        source=row.get("source") or "database",
        links=[LinkId(lid) for lid in row.get("links") or []],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def profile_to_dict(profile: Profile) -> Dict[str, Any]:
    """Convert Profile domain model to database dict."""
    data = profile.model_dump()
    data["username"] = profile.username.root
    return data


def row_to_link(row: Dict[str, Any]) -> Link:
    """Convert database row to Link domain model."""
    return Link(
        id=LinkId(row["id"]),
        username=row["username"],
        name=row["name"],
        url=row["url"],
        icon=row["icon"],
        is_enabled=row["is_enabled"],
        is_pinned=row["is_pinned"],
        animation=row.get("animation"),
        profile_id=ProfileId(row["profile_id"]),
        created_at=row["created_at"],
    )


def link_to_dict(link: Link) -> Dict[str, Any]:
    """Convert Link domain model to database dict."""
    return link.model_dump()
