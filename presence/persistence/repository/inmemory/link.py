"""In-memory link repository for testing."""

from typing import Optional

from presence.domain.model.link import Link
from presence.domain.repository.link import LinkRepository
from presence.domain.value import LinkId, ProfileId


class InMemoryLinkRepository(LinkRepository):
    """In-memory implementation of LinkRepository for testing."""

    def __init__(self) -> None:
        self._links: dict[LinkId, Link] = {}

    async def find_by_id(self, link_id: LinkId) -> Optional[Link]:
        """Find a link by ID."""
        return self._links.get(link_id)

    async def find_by_profile(self, profile_id: ProfileId) -> list[Link]:
        """Get all links owned by a profile, oldest first."""
        links = [link for link in self._links.values() if link.profile_id == profile_id]
        links.sort(key=lambda link: link.created_at)
        return links

    async def create(self, link: Link) -> Link:
        """Insert a new link."""
        self._links[link.id] = link
        return link

    async def delete(self, link_id: LinkId) -> None:
        """Delete a link."""
        self._links.pop(link_id, None)
