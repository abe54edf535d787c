"""User identity repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from presence.domain.model.user_identity import UserIdentity
from presence.domain.value import AuthProvider


class UserIdentityRepository(ABC):
    """Provider identity links.

    Links are written by the identity-protocol layer. A provider identity
    belongs to at most one user and the first link recorded for it is the
    one that stays.
    """

    @abstractmethod
    async def find_by_provider(
        self, provider: AuthProvider, provider_user_id: str
    ) -> Optional[UserIdentity]:
        """Return the link for a provider's permanent user id, if any."""
        pass

    @abstractmethod
    async def link_if_absent(self, identity: UserIdentity) -> UserIdentity:
        """Record a link unless the provider identity is already linked.

        Returns:
            The stored link, which is the earlier one when the provider
            identity was linked before
        """
        pass
