"""Unit tests for ReconcileSignInUseCase."""

from datetime import datetime
from uuid import uuid4

import pytest

from presence.application.usecase.auth import (
    ReconcileSignInUseCase,
    ReconciliationOutcome,
    ReconciliationStep,
    SignInEvent,
)
from presence.domain.error import AccountNotFoundError, MalformedProfileError
from presence.domain.model import Profile
from presence.domain.repository import (
    AccountRepository,
    LinkRepository,
    ProfileRepository,
    UserIdentityRepository,
    UserRepository,
)
from presence.domain.service import BillingClient
from presence.domain.value import AccountType, AuthProvider, ProfileId, UserId, Username
from tests.conftest import github_profile, google_profile, seed_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def _seed(env, provider=AuthProvider.GITHUB, provider_user_id="1001", **kwargs):
    return await seed_user(
        await env.get(UserRepository),
        await env.get(UserIdentityRepository),
        provider,
        provider_user_id,
        **kwargs,
    )


async def _links_of(env, profile_id):
    return await (await env.get(LinkRepository)).find_by_profile(profile_id)


class TestNewIdentity:
    """A first sign-in with a new GitHub identity."""

    @pytest.mark.asyncio
    async def test_creates_account_profile_link_and_billing(self, unit_env):
        """Everything a new user needs is created in one run."""
        # Arrange
        use_case = await unit_env.get(ReconcileSignInUseCase)
        user = await _seed(unit_env, provider_user_id="42", email=None, name="Ada L")
        event = SignInEvent(
            user_id=user.id,
            provider="github",
            raw_profile=github_profile(
                provider_id=42, login="ada", name="Ada L", email=None
            ),
        )

        # Act
        result = await use_case.execute(event)

        # Assert
        account = await (await unit_env.get(AccountRepository)).find_by_user_id(user.id)
        assert "github" in account.providers

        profile = await (await unit_env.get(ProfileRepository)).find_by_username(
            Username("ada")
        )
        assert profile.name == "Ada L"
        assert account.profile_ids == [profile.id]

        links = await _links_of(unit_env, profile.id)
        assert len(links) == 1
        assert links[0].url == "https://github.com/ada"
        assert links[0].icon == "FaGithub"
        assert profile.links == [links[0].id]

        stored_user = await (await unit_env.get(UserRepository)).find_by_id(user.id)
        assert stored_user.billing_customer_id == "cus_mock1"
        assert stored_user.account_type == AccountType.FREE

        assert result.username == "ada"
        assert result.profile_id == str(profile.id)
        assert result.billing_customer_id == "cus_mock1"
        assert result.outcomes == [
            ReconciliationOutcome.ACCOUNT_UPDATED,
            ReconciliationOutcome.PROFILE_CREATED,
            ReconciliationOutcome.PROFILE_ASSOCIATED,
            ReconciliationOutcome.BILLING_PROVISIONED,
        ]
        assert result.errors == {}

    @pytest.mark.asyncio
    async def test_google_identity_uses_email_local_part(self, unit_env):
        """A Google sign-in derives the username from the email."""
        # Arrange
        use_case = await unit_env.get(ReconcileSignInUseCase)
        user = await _seed(
            unit_env, AuthProvider.GOOGLE, "1098765", email="bea@example.com"
        )
        event = SignInEvent(
            user_id=user.id,
            provider="google",
            raw_profile=google_profile(email="bea@example.com"),
        )

        # Act
        result = await use_case.execute(event)

        # Assert
        assert result.username == "bea"
        profile = await (await unit_env.get(ProfileRepository)).find_by_username(
            Username("bea")
        )
        links = await _links_of(unit_env, profile.id)
        assert [link.icon for link in links] == ["FaGoogle"]


class TestRepeatedSignIn:
    """The same identity signing in again."""

    @pytest.mark.asyncio
    async def test_second_run_changes_nothing(self, unit_env):
        """Reconciling twice leaves one profile, one link and one customer."""
        # Arrange
        use_case = await unit_env.get(ReconcileSignInUseCase)
        billing = await unit_env.get(BillingClient)
        profile_repo = await unit_env.get(ProfileRepository)
        account_repo = await unit_env.get(AccountRepository)
        user = await _seed(unit_env)
        event = SignInEvent(user_id=user.id, provider="github", raw_profile=github_profile())

        first = await use_case.execute(event)
        account_before = await account_repo.find_by_user_id(user.id)
        profile_before = await profile_repo.find_by_username(Username("octocat"))

        # Act
        second = await use_case.execute(event)

        # Assert
        account_after = await account_repo.find_by_user_id(user.id)
        profile_after = await profile_repo.find_by_username(Username("octocat"))

        assert profile_repo.count() == 1
        assert profile_after == profile_before
        assert len(await _links_of(unit_env, profile_after.id)) == 1
        assert len(billing.calls) == 1
        assert account_after.profile_ids == account_before.profile_ids
        assert (
            account_after.providers["github"].data
            == account_before.providers["github"].data
        )
        assert (
            account_after.providers["github"].updated_at
            >= account_before.providers["github"].updated_at
        )

        assert second.billing_customer_id == first.billing_customer_id
        assert second.outcomes == [
            ReconciliationOutcome.ACCOUNT_UPDATED,
            ReconciliationOutcome.PROFILE_FOUND,
            ReconciliationOutcome.PROFILE_ASSOCIATED,
            ReconciliationOutcome.BILLING_SKIPPED,
        ]

    @pytest.mark.asyncio
    async def test_billing_created_once_over_many_runs(self, unit_env):
        """The first customer id is kept however often the user signs in."""
        # Arrange
        use_case = await unit_env.get(ReconcileSignInUseCase)
        billing = await unit_env.get(BillingClient)
        user = await _seed(unit_env)
        event = SignInEvent(user_id=user.id, provider="github", raw_profile=github_profile())

        # Act
        for _ in range(5):
            await use_case.execute(event)

        # Assert
        stored = await (await unit_env.get(UserRepository)).find_by_id(user.id)
        assert len(billing.calls) == 1
        assert stored.billing_customer_id == "cus_mock1"

    @pytest.mark.asyncio
    async def test_second_provider_keeps_first_subdocument(self, unit_env):
        """A GitHub sign-in never alters the Google sub-document."""
        # Arrange
        use_case = await unit_env.get(ReconcileSignInUseCase)
        identity_repo = await unit_env.get(UserIdentityRepository)
        user = await _seed(unit_env, AuthProvider.GOOGLE, "1098765")
        await seed_user(
            await unit_env.get(UserRepository),
            identity_repo,
            AuthProvider.GITHUB,
            "1001",
            user_id=user.id,
        )
        await use_case.execute(
            SignInEvent(user_id=user.id, provider="google", raw_profile=google_profile())
        )
        account_repo = await unit_env.get(AccountRepository)
        google_before = (await account_repo.find_by_user_id(user.id)).providers["google"]

        # Act
        await use_case.execute(
            SignInEvent(user_id=user.id, provider="github", raw_profile=github_profile())
        )

        # Assert
        account = await account_repo.find_by_user_id(user.id)
        assert account.providers["google"] == google_before
        assert set(account.providers) == {"github", "google"}
        assert len(account.profile_ids) == 2


class TestLinkBackfill:
    """Profiles whose links were removed outside sign-in."""

    @pytest.mark.asyncio
    async def test_restores_exactly_one_link(self, unit_env):
        """A linkless profile gets its default link back."""
        # Arrange
        use_case = await unit_env.get(ReconcileSignInUseCase)
        profile_repo = await unit_env.get(ProfileRepository)
        user = await _seed(unit_env)
        await profile_repo.save(
            Profile(
                id=ProfileId(uuid4()),
                username=Username("octocat"),
                name="Custom",
                user_id=user.id,
                created_at=datetime(2024, 1, 1),
            )
        )
        event = SignInEvent(user_id=user.id, provider="github", raw_profile=github_profile())

        # Act
        result = await use_case.execute(event)

        # Assert
        profile = await profile_repo.find_by_username(Username("octocat"))
        links = await _links_of(unit_env, profile.id)
        assert len(links) == 1
        assert profile.links == [links[0].id]
        assert profile.name == "Custom"
        assert ReconciliationOutcome.LINK_BACKFILLED in result.outcomes

        # A further run does not add another
        await use_case.execute(event)
        assert len(await _links_of(unit_env, profile.id)) == 1


class TestMalformedProfile:
    """Profiles that cannot be normalized."""

    @pytest.mark.asyncio
    async def test_fails_without_writing_anything(self, unit_env):
        """No id and no email: the run fails before touching any store."""
        # Arrange
        use_case = await unit_env.get(ReconcileSignInUseCase)
        billing = await unit_env.get(BillingClient)
        user = await _seed(unit_env)
        raw = github_profile(login=None, email=None)
        del raw["id"]

        # Act & Assert
        with pytest.raises(MalformedProfileError):
            await use_case.execute(
                SignInEvent(user_id=user.id, provider="github", raw_profile=raw)
            )

        assert (await unit_env.get(ProfileRepository)).count() == 0
        assert await (await unit_env.get(AccountRepository)).find_by_user_id(user.id) is None
        assert billing.calls == []


class TestAccountNotFound:
    """Identities without a user."""

    @pytest.mark.asyncio
    async def test_unknown_identity_aborts_before_profile(self, unit_env):
        """Without an identity link no profile or customer is created."""
        # Arrange
        use_case = await unit_env.get(ReconcileSignInUseCase)
        billing = await unit_env.get(BillingClient)

        # Act & Assert
        with pytest.raises(AccountNotFoundError):
            await use_case.execute(
                SignInEvent(
                    user_id=uuid4(), provider="github", raw_profile=github_profile()
                )
            )

        assert (await unit_env.get(ProfileRepository)).count() == 0
        assert billing.calls == []

    @pytest.mark.asyncio
    async def test_identity_of_another_user_aborts(self, unit_env):
        """An identity linked to a different user is not reconciled."""
        # Arrange
        use_case = await unit_env.get(ReconcileSignInUseCase)
        await _seed(unit_env)

        # Act & Assert
        with pytest.raises(AccountNotFoundError):
            await use_case.execute(
                SignInEvent(
                    user_id=uuid4(), provider="github", raw_profile=github_profile()
                )
            )

        assert (await unit_env.get(ProfileRepository)).count() == 0


class TestUsernameConflict:
    """A derived username that belongs to someone else."""

    @pytest.mark.asyncio
    async def test_conflict_is_recorded_and_sign_in_continues(self, unit_env):
        """The other user's profile is untouched and billing still runs."""
        # Arrange
        use_case = await unit_env.get(ReconcileSignInUseCase)
        profile_repo = await unit_env.get(ProfileRepository)
        account_repo = await unit_env.get(AccountRepository)
        owner_id = UserId(uuid4())
        existing = Profile(
            id=ProfileId(uuid4()), username=Username("octocat"), user_id=owner_id
        )
        await profile_repo.save(existing)
        user = await _seed(unit_env)

        # Act
        result = await use_case.execute(
            SignInEvent(user_id=user.id, provider="github", raw_profile=github_profile())
        )

        # Assert
        assert ReconciliationOutcome.PROFILE_CONFLICT in result.outcomes
        assert ReconciliationOutcome.PROFILE_ASSOCIATED not in result.outcomes
        assert ReconciliationOutcome.BILLING_PROVISIONED in result.outcomes
        assert ReconciliationStep.PROFILE in result.errors
        assert result.profile_id is None

        assert await profile_repo.find_by_id(existing.id) == existing
        account = await account_repo.find_by_user_id(user.id)
        assert account.profile_ids == []
        assert await _links_of(unit_env, existing.id) == []


class TestBillingFailure:
    """Payment provider outages."""

    @pytest.mark.asyncio
    async def test_failure_does_not_block_and_next_run_provisions(self, unit_env):
        """A failed customer creation is retried by the next sign-in."""
        # Arrange
        use_case = await unit_env.get(ReconcileSignInUseCase)
        billing = await unit_env.get(BillingClient)
        user_repo = await unit_env.get(UserRepository)
        user = await _seed(unit_env)
        event = SignInEvent(user_id=user.id, provider="github", raw_profile=github_profile())
        billing.fail = True

        # Act
        failed = await use_case.execute(event)

        # Assert
        assert ReconciliationOutcome.BILLING_FAILED in failed.outcomes
        assert ReconciliationOutcome.PROFILE_CREATED in failed.outcomes
        assert ReconciliationStep.BILLING in failed.errors
        assert (await user_repo.find_by_id(user.id)).billing_customer_id is None

        # Provider recovers
        billing.fail = False
        recovered = await use_case.execute(event)

        assert ReconciliationOutcome.BILLING_PROVISIONED in recovered.outcomes
        assert (await user_repo.find_by_id(user.id)).billing_customer_id == "cus_mock1"
