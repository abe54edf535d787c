"""Integration tests for the PostgreSQL repositories.

Require a migrated database reachable through DATABASE__URL.
"""

import os
from uuid import uuid4

import pytest

from presence.domain.model import Link, Profile, User, UserIdentity
from presence.domain.repository import (
    AccountRepository,
    LinkRepository,
    ProfileRepository,
    UserIdentityRepository,
    UserRepository,
)
from presence.domain.value import (
    AuthProvider,
    LinkId,
    ProfileId,
    UserId,
    UserIdentityId,
    Username,
)
from tests.harness import create_env_fixture

pytestmark = pytest.mark.skipif(
    not os.environ.get("DATABASE__URL"), reason="DATABASE__URL not set"
)

# Integration test fixture
integration_env = create_env_fixture(unmock={"persistence"})


async def _user(env) -> User:
    repo = await env.get(UserRepository)
    return await repo.save(User(id=UserId(uuid4()), email="it@example.com"))


class TestPostgresAccountRepository:
    """Account upserts against PostgreSQL."""

    @pytest.mark.asyncio
    async def test_provider_subdocuments_are_merged(self, integration_env):
        # Arrange
        repo = await integration_env.get(AccountRepository)
        user = await _user(integration_env)

        # Act
        await repo.upsert_provider_data(user.id, AuthProvider.GITHUB, {"followers": 1})
        account = await repo.upsert_provider_data(
            user.id, AuthProvider.GOOGLE, {"email": "it@example.com"}
        )

        # Assert
        assert account.providers["github"].data == {"followers": 1}
        assert account.providers["google"].data == {"email": "it@example.com"}

    @pytest.mark.asyncio
    async def test_associate_profile_is_idempotent(self, integration_env):
        # Arrange
        repo = await integration_env.get(AccountRepository)
        user = await _user(integration_env)
        profile_id = ProfileId(uuid4())

        # Act
        await repo.associate_profile(user.id, profile_id)
        account = await repo.associate_profile(user.id, profile_id)

        # Assert
        assert account.profile_ids == [profile_id]


class TestPostgresProfileRepository:
    """Profile primitives against PostgreSQL."""

    @pytest.mark.asyncio
    async def test_find_or_create_and_claim_links(self, integration_env):
        # Arrange
        profiles = await integration_env.get(ProfileRepository)
        links = await integration_env.get(LinkRepository)
        user = await _user(integration_env)
        username = Username(f"it-{uuid4().hex[:12]}")
        defaults = Profile(id=ProfileId(uuid4()), username=username, user_id=user.id)

        # Act
        profile, created = await profiles.find_or_create(defaults)
        again, created_again = await profiles.find_or_create(
            defaults.model_copy(update={"id": ProfileId(uuid4())})
        )
        link = await links.create(
            Link(
                id=LinkId(uuid4()),
                username=username.root,
                name="GitHub",
                url=f"https://github.com/{username.root}",
                icon="FaGithub",
                profile_id=profile.id,
            )
        )
        claimed = await profiles.append_link(profile.id, link.id, only_if_empty=True)
        refused = await profiles.append_link(
            profile.id, LinkId(uuid4()), only_if_empty=True
        )

        # Assert
        assert created is True
        assert created_again is False
        assert again.id == profile.id
        assert claimed.links == [link.id]
        assert refused is None


class TestPostgresUserRepository:
    """Billing customer writes against PostgreSQL."""

    @pytest.mark.asyncio
    async def test_first_billing_customer_wins(self, integration_env):
        # Arrange
        repo = await integration_env.get(UserRepository)
        user = await _user(integration_env)

        # Act
        await repo.set_billing_customer_if_unset(user.id, "cus_a")
        stored = await repo.set_billing_customer_if_unset(user.id, "cus_b")

        # Assert
        assert stored.billing_customer_id == "cus_a"


class TestPostgresUserIdentityRepository:
    """Identity links against PostgreSQL."""

    @pytest.mark.asyncio
    async def test_existing_link_is_kept(self, integration_env):
        # Arrange
        repo = await integration_env.get(UserIdentityRepository)
        first, second = await _user(integration_env), await _user(integration_env)
        provider_user_id = str(uuid4())

        def link(user: User) -> UserIdentity:
            return UserIdentity(
                id=UserIdentityId(uuid4()),
                user_id=user.id,
                provider=AuthProvider.GOOGLE,
                provider_user_id=provider_user_id,
            )

        # Act
        await repo.link_if_absent(link(first))
        stored = await repo.link_if_absent(link(second))

        # Assert
        assert stored.user_id == first.id
        found = await repo.find_by_provider(AuthProvider.GOOGLE, provider_user_id)
        assert found is not None and found.user_id == first.id
