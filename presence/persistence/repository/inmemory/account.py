"""In-memory account repository for testing."""

from datetime import datetime
from typing import Any, Optional
from uuid import uuid4

from presence.domain.model.account import Account, ProviderAccountData
from presence.domain.repository.account import AccountRepository
from presence.domain.value import AccountId, AuthProvider, ProfileId, UserId


class InMemoryAccountRepository(AccountRepository):
    """In-memory implementation of AccountRepository for testing.

    Methods never suspend, so each one is atomic on the event loop.
    """

    def __init__(self) -> None:
        self._accounts: dict[UserId, Account] = {}

    def _get_or_new(self, user_id: UserId) -> Account:
        account = self._accounts.get(user_id)
        if account is None:
            account = Account(id=AccountId(uuid4()), user_id=user_id)
        return account

    async def find_by_user_id(self, user_id: UserId) -> Optional[Account]:
        """Find the account owned by a user."""
        return self._accounts.get(user_id)

    async def upsert_provider_data(
        self, user_id: UserId, provider: AuthProvider, data: dict[str, Any]
    ) -> Account:
        """Overwrite one provider sub-document, creating the account if needed."""
        account = self._get_or_new(user_id)
        now = datetime.now()
        providers = dict(account.providers)
        providers[provider.value] = ProviderAccountData(data=dict(data), updated_at=now)

        updated = account.model_copy(update={"providers": providers, "updated_at": now})
        self._accounts[user_id] = updated
        return updated

    async def associate_profile(self, user_id: UserId, profile_id: ProfileId) -> Account:
        """Add a profile to the account's profile set."""
        account = self._get_or_new(user_id)
        if profile_id in account.profile_ids:
            self._accounts[user_id] = account
            return account

        updated = account.model_copy(
            update={
                "profile_ids": [*account.profile_ids, profile_id],
                "updated_at": datetime.now(),
            }
        )
        self._accounts[user_id] = updated
        return updated
