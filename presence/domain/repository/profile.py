"""Profile repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from presence.domain.model.profile import Profile
from presence.domain.value import LinkId, ProfileId, Username


class ProfileRepository(ABC):
    """Repository for Profile documents keyed by unique username."""

    @abstractmethod
    async def find_by_id(self, profile_id: ProfileId) -> Optional[Profile]:
        """Find a profile by ID."""
        pass

    @abstractmethod
    async def find_by_username(self, username: Username) -> Optional[Profile]:
        """Find a profile by username."""
        pass

    @abstractmethod
    async def find_or_create(self, defaults: Profile) -> tuple[Profile, bool]:
        """Return the profile for ``defaults.username``, creating it if missing.

        Lookup and creation are a single atomic operation on the unique
        username: concurrent callers with the same username all receive the
        same profile and exactly one of them sees ``created=True``.

        Args:
            defaults: Profile to insert when none exists for the username

        Returns:
            Tuple of (profile, created)
        """
        pass

    @abstractmethod
    async def append_link(
        self, profile_id: ProfileId, link_id: LinkId, only_if_empty: bool = False
    ) -> Optional[Profile]:
        """Atomically append a link id to the profile's ordered link list.

        Args:
            profile_id: Profile to update
            link_id: Link to append
            only_if_empty: Only append while the profile has no links

        Returns:
            The updated profile, or None if the profile does not exist or
            ``only_if_empty`` was set and the profile already had links
        """
        pass

    @abstractmethod
    async def save(self, profile: Profile) -> Profile:
        """Save a profile (create or update)."""
        pass
