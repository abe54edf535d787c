"""PostgreSQL implementation of Profile repository."""

from typing import Optional

from sqlalchemy import func, literal, select
from sqlalchemy.dialects.postgresql import ARRAY, UUID, insert
from sqlalchemy.ext.asyncio import AsyncSession

from presence.domain.model import Profile
from presence.domain.repository import ProfileRepository
from presence.domain.value import LinkId, ProfileId, Username
from presence.persistence.database import store_operation, store_read
from presence.persistence.mappers import profile_to_dict, row_to_profile
from presence.persistence.tables import profiles_table


class PostgresProfileRepository(ProfileRepository):
    """PostgreSQL implementation of ProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, profile_id: ProfileId) -> Optional[Profile]:
        """Find a profile by ID."""
        stmt = select(profiles_table).where(profiles_table.c.id == profile_id)
        async with store_read(self.session, "find profile"):
            result = await self.session.execute(stmt)
            row = result.mappings().first()
        return row_to_profile(dict(row)) if row else None

    async def find_by_username(self, username: Username) -> Optional[Profile]:
        """Find a profile by username."""
        stmt = select(profiles_table).where(profiles_table.c.username == username.root)
        async with store_read(self.session, "find profile"):
            result = await self.session.execute(stmt)
            row = result.mappings().first()
        return row_to_profile(dict(row)) if row else None

    async def find_or_create(self, defaults: Profile) -> tuple[Profile, bool]:
        """Insert the profile unless its username exists, then return it.

        ``ON CONFLICT (username) DO NOTHING`` waits for a concurrent insert of
        the same username to commit, so exactly one caller gets a row back
        from RETURNING and every other caller reads that row.
        """
        stmt = (
            insert(profiles_table)
            .values(**profile_to_dict(defaults))
            .on_conflict_do_nothing(index_elements=[profiles_table.c.username])
            .returning(*profiles_table.c)
        )
        async with store_operation(self.session, "find or create profile"):
            result = await self.session.execute(stmt)
            row = result.mappings().first()
            if row is None:
                existing = await self.session.execute(
                    select(profiles_table).where(
                        profiles_table.c.username == defaults.username.root
                    )
                )
                row = existing.mappings().one()
                created = False
            else:
                created = True
        return row_to_profile(dict(row)), created

    async def append_link(
        self, profile_id: ProfileId, link_id: LinkId, only_if_empty: bool = False
    ) -> Optional[Profile]:
        """Append a link id to the profile's ordered link list."""
        stmt = profiles_table.update().where(profiles_table.c.id == profile_id)
        if only_if_empty:
            stmt = stmt.where(func.cardinality(profiles_table.c.links) == 0)
        stmt = stmt.values(
            links=func.array_append(
                profiles_table.c.links,
                literal(link_id, UUID(as_uuid=True)),
                type_=ARRAY(UUID(as_uuid=True)),
            ),
            updated_at=func.now(),
        ).returning(*profiles_table.c)

        async with store_operation(self.session, "append link"):
            result = await self.session.execute(stmt)
            row = result.mappings().first()
        return row_to_profile(dict(row)) if row else None

    async def save(self, profile: Profile) -> Profile:
        """Save a profile (create or update)."""
        profile_dict = profile_to_dict(profile)
        stmt = insert(profiles_table).values(**profile_dict)
        stmt = stmt.on_conflict_do_update(
            index_elements=[profiles_table.c.id],
            set_={k: v for k, v in profile_dict.items() if k != "id"},
        )
        async with store_operation(self.session, "save profile"):
            await self.session.execute(stmt)
        return profile
