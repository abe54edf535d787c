"""Link repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from presence.domain.model.link import Link
from presence.domain.value import LinkId, ProfileId


class LinkRepository(ABC):
    """Repository for Link documents."""

    @abstractmethod
    async def find_by_id(self, link_id: LinkId) -> Optional[Link]:
        """Find a link by ID."""
        pass

    @abstractmethod
    async def find_by_profile(self, profile_id: ProfileId) -> list[Link]:
        """Get all links owned by a profile, oldest first."""
        pass

    @abstractmethod
    async def create(self, link: Link) -> Link:
        """Insert a new link."""
        pass

    @abstractmethod
    async def delete(self, link_id: LinkId) -> None:
        """Delete a link."""
        pass
