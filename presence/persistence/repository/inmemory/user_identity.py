"""In-memory identity links."""

from typing import Optional

from presence.domain.model.user_identity import UserIdentity
from presence.domain.repository.user_identity import UserIdentityRepository
from presence.domain.value import AuthProvider


class InMemoryUserIdentityRepository(UserIdentityRepository):
    """Links keyed by (provider, provider user id)."""

    def __init__(self) -> None:
        self._links: dict[tuple[AuthProvider, str], UserIdentity] = {}

    async def find_by_provider(
        self, provider: AuthProvider, provider_user_id: str
    ) -> Optional[UserIdentity]:
        return self._links.get((provider, provider_user_id))

    async def link_if_absent(self, identity: UserIdentity) -> UserIdentity:
        key = (identity.provider, identity.provider_user_id)
        return self._links.setdefault(key, identity)
