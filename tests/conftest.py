"""Test configuration and fixtures."""

from typing import Any
from uuid import uuid4

from presence.domain.model import User, UserIdentity
from presence.domain.repository import UserIdentityRepository, UserRepository
from presence.domain.value import AuthProvider, UserId, UserIdentityId


def github_profile(
    provider_id: int = 1001, login: str | None = "octocat", **overrides: Any
) -> dict[str, Any]:
    """Raw GitHub profile payload as the provider returns it."""
    profile: dict[str, Any] = {
        "id": provider_id,
        "login": login,
        "name": "The Octocat",
        "email": "octocat@github.com",
        "avatar_url": "https://avatars.githubusercontent.com/u/1001",
        "company": "GitHub",
        "public_repos": 8,
        "followers": 120,
        "following": 9,
    }
    profile.update(overrides)
    return profile


def google_profile(sub: str = "1098765", **overrides: Any) -> dict[str, Any]:
    """Raw Google OpenID profile payload."""
    profile: dict[str, Any] = {
        "sub": sub,
        "name": "Ada Lovelace",
        "email": "ada@example.com",
        "picture": "https://lh3.googleusercontent.com/a/ada",
    }
    profile.update(overrides)
    return profile


async def seed_user(
    user_repo: UserRepository,
    identity_repo: UserIdentityRepository,
    provider: AuthProvider,
    provider_user_id: str,
    email: str | None = "octocat@github.com",
    name: str | None = "The Octocat",
    user_id: UserId | None = None,
) -> User:
    """Create the user and identity link the identity-protocol layer writes."""
    user = User(id=user_id or UserId(uuid4()), email=email, name=name)
    await user_repo.save(user)
    await identity_repo.link_if_absent(
        UserIdentity(
            id=UserIdentityId(uuid4()),
            user_id=user.id,
            provider=provider,
            provider_user_id=provider_user_id,
            provider_email=email,
        )
    )
    return user
