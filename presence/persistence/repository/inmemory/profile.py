"""In-memory profile repository for testing."""

from datetime import datetime
from typing import Optional

from presence.domain.model.profile import Profile
from presence.domain.repository.profile import ProfileRepository
from presence.domain.value import LinkId, ProfileId, Username


class InMemoryProfileRepository(ProfileRepository):
    """In-memory implementation of ProfileRepository for testing.

    Methods never suspend, so find_or_create and append_link are atomic on
    the event loop.
    """

    def __init__(self) -> None:
        self._profiles: dict[ProfileId, Profile] = {}

    async def find_by_id(self, profile_id: ProfileId) -> Optional[Profile]:
        """Find a profile by ID."""
        return self._profiles.get(profile_id)

    async def find_by_username(self, username: Username) -> Optional[Profile]:
        """Find a profile by username."""
        for profile in self._profiles.values():
            if profile.username == username:
                return profile
        return None

    async def find_or_create(self, defaults: Profile) -> tuple[Profile, bool]:
        """Return the existing profile for the username or insert defaults."""
        existing = await self.find_by_username(defaults.username)
        if existing:
            return existing, False

        self._profiles[defaults.id] = defaults
        return defaults, True

    async def append_link(
        self, profile_id: ProfileId, link_id: LinkId, only_if_empty: bool = False
    ) -> Optional[Profile]:
        """Append a link id to the profile's link list."""
        profile = self._profiles.get(profile_id)
        if profile is None:
            return None
        if only_if_empty and profile.links:
            return None

        updated = profile.model_copy(
            update={"links": [*profile.links, link_id], "updated_at": datetime.now()}
        )
        self._profiles[profile_id] = updated
        return updated

    async def save(self, profile: Profile) -> Profile:
        """Save or update a profile."""
        self._profiles[profile.id] = profile
        return profile

    def count(self) -> int:
        """Number of stored profiles."""
        return len(self._profiles)
