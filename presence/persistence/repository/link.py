"""PostgreSQL implementation of Link repository."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from presence.domain.model import Link
from presence.domain.repository import LinkRepository
from presence.domain.value import LinkId, ProfileId
from presence.persistence.database import store_operation, store_read
from presence.persistence.mappers import link_to_dict, row_to_link
from presence.persistence.tables import links_table


class PostgresLinkRepository(LinkRepository):
    """PostgreSQL implementation of LinkRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, link_id: LinkId) -> Optional[Link]:
        """Find a link by ID."""
        stmt = select(links_table).where(links_table.c.id == link_id)
        async with store_read(self.session, "find link"):
            result = await self.session.execute(stmt)
            row = result.mappings().first()
        return row_to_link(dict(row)) if row else None

    async def find_by_profile(self, profile_id: ProfileId) -> list[Link]:
        """Get all links owned by a profile, oldest first."""
        stmt = (
            select(links_table)
            .where(links_table.c.profile_id == profile_id)
            .order_by(links_table.c.created_at.asc())
        )
        async with store_read(self.session, "find links"):
            result = await self.session.execute(stmt)
            rows = result.mappings().all()
        return [row_to_link(dict(row)) for row in rows]

    async def create(self, link: Link) -> Link:
        """Insert a new link."""
        stmt = links_table.insert().values(**link_to_dict(link))
        async with store_operation(self.session, "create link"):
            await self.session.execute(stmt)
        return link

    async def delete(self, link_id: LinkId) -> None:
        """Delete a link."""
        stmt = links_table.delete().where(links_table.c.id == link_id)
        async with store_operation(self.session, "delete link"):
            await self.session.execute(stmt)
