"""Account domain service."""

from dataclasses import dataclass
from typing import Optional

import logfire

from presence.config import StoreSettings
from presence.domain.error import AccountNotFoundError, StoreUnavailableError
from presence.domain.model import Account, User
from presence.domain.repository import (
    AccountRepository,
    UserIdentityRepository,
    UserRepository,
)
from presence.domain.value import CanonicalIdentity, ProfileId, UserId

from .base import Service, bounded


@dataclass
class AccountOwner:
    """User resolved from a provider identity, with their account if stored."""

    user: User
    account: Optional[Account]


class AccountService(Service):
    """Domain service for account operations."""

    def __init__(
        self,
        account_repository: AccountRepository,
        user_identity_repository: UserIdentityRepository,
        user_repository: UserRepository,
        store_settings: StoreSettings,
    ) -> None:
        """Initialize account service.

        Args:
            account_repository: Account repository
            user_identity_repository: User identity repository
            user_repository: User repository
            store_settings: Store call limits
        """
        self.account_repository = account_repository
        self.user_identity_repository = user_identity_repository
        self.user_repository = user_repository
        self.timeout = store_settings.timeout_seconds

    async def merge_provider_data(
        self, user_id: UserId, identity: CanonicalIdentity
    ) -> Account:
        """Write the identity's provider metadata into the user's account.

        Only the sub-document of ``identity.provider`` is replaced.

        Args:
            user_id: Owning user
            identity: Normalized identity carrying provider_meta

        Returns:
            The account after the write
        """
        with logfire.span(
            "account_service.merge_provider_data",
            user_id=str(user_id),
            provider=identity.provider.value,
        ):
            account = await bounded(
                self.account_repository.upsert_provider_data(
                    user_id, identity.provider, identity.provider_meta
                ),
                self.timeout,
                StoreUnavailableError,
                "upsert account",
            )
            logfire.info(
                "Account provider data merged",
                user_id=str(user_id),
                provider=identity.provider.value,
                providers=sorted(account.providers),
            )
            return account

    async def find_by_provider_identity(
        self, identity: CanonicalIdentity
    ) -> AccountOwner:
        """Resolve the user and account behind a provider identity.

        The identity link and the user are created by the identity-protocol
        layer before reconciliation runs, so their absence is an error.

        Args:
            identity: Normalized identity

        Returns:
            Resolved owner

        Raises:
            AccountNotFoundError: If the identity link or its user is missing
        """
        with logfire.span(
            "account_service.find_by_provider_identity",
            provider=identity.provider.value,
            provider_id=identity.provider_id,
        ):
            link = await bounded(
                self.user_identity_repository.find_by_provider(
                    identity.provider, identity.provider_id
                ),
                self.timeout,
                StoreUnavailableError,
                "find identity",
            )
            if not link:
                logfire.error(
                    "No identity link for provider identity",
                    provider=identity.provider.value,
                    provider_id=identity.provider_id,
                )
                raise AccountNotFoundError(identity.provider.value, identity.provider_id)

            user = await bounded(
                self.user_repository.find_by_id(link.user_id),
                self.timeout,
                StoreUnavailableError,
                "find user",
            )
            if not user:
                logfire.error(
                    "Identity link points at missing user",
                    provider=identity.provider.value,
                    provider_id=identity.provider_id,
                    user_id=str(link.user_id),
                )
                raise AccountNotFoundError(identity.provider.value, identity.provider_id)

            account = await bounded(
                self.account_repository.find_by_user_id(user.id),
                self.timeout,
                StoreUnavailableError,
                "find account",
            )
            return AccountOwner(user=user, account=account)

    async def associate_profile(
        self, user_id: UserId, profile_id: ProfileId
    ) -> Account:
        """Associate a profile with the user's account (idempotent)."""
        with logfire.span(
            "account_service.associate_profile",
            user_id=str(user_id),
            profile_id=str(profile_id),
        ):
            return await bounded(
                self.account_repository.associate_profile(user_id, profile_id),
                self.timeout,
                StoreUnavailableError,
                "associate profile",
            )
