"""Account repository interface."""

from abc import ABC, abstractmethod
from typing import Any, Optional

from presence.domain.model.account import Account
from presence.domain.value import AuthProvider, ProfileId, UserId


class AccountRepository(ABC):
    """Repository for Account documents, one per user.

    Every write is a single atomic upsert keyed on ``user_id``.
    """

    @abstractmethod
    async def find_by_user_id(self, user_id: UserId) -> Optional[Account]:
        """Find the account owned by a user.

        Args:
            user_id: Owning user

        Returns:
            The account if found, None otherwise
        """
        pass

    @abstractmethod
    async def upsert_provider_data(
        self, user_id: UserId, provider: AuthProvider, data: dict[str, Any]
    ) -> Account:
        """Create the account if missing and overwrite one provider sub-document.

        Sub-documents of other providers are left untouched and the owning
        user never changes.

        Args:
            user_id: Owning user
            provider: Provider whose sub-document is written
            data: Provider metadata

        Returns:
            The account after the write
        """
        pass

    @abstractmethod
    async def associate_profile(self, user_id: UserId, profile_id: ProfileId) -> Account:
        """Add a profile to the account's profile set.

        Repeating the call with the same pair adds nothing.

        Args:
            user_id: Owning user
            profile_id: Profile to associate

        Returns:
            The account after the write
        """
        pass
