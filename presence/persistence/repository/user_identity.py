"""PostgreSQL identity links."""

from typing import Optional

from sqlalchemy import and_, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from presence.domain.error import StoreUnavailableError
from presence.domain.model.user_identity import UserIdentity
from presence.domain.repository.user_identity import UserIdentityRepository
from presence.domain.value import AuthProvider
from presence.persistence.database import store_operation, store_read
from presence.persistence.mappers import row_to_user_identity, user_identity_to_dict
from presence.persistence.tables import user_identities_table


class PostgresUserIdentityRepository(UserIdentityRepository):
    """Identity links in the user_identities table."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_provider(
        self, provider: AuthProvider, provider_user_id: str
    ) -> Optional[UserIdentity]:
        """Look a link up through the uq_provider_identity index."""
        stmt = select(user_identities_table).where(
            and_(
                user_identities_table.c.provider == provider.value,
                user_identities_table.c.provider_user_id == provider_user_id,
            )
        )
        async with store_read(self.session, "find identity"):
            result = await self.session.execute(stmt)
            row = result.mappings().first()
        return row_to_user_identity(dict(row)) if row else None

    async def link_if_absent(self, identity: UserIdentity) -> UserIdentity:
        """Insert the link; an existing (provider, provider_user_id) wins."""
        stmt = (
            insert(user_identities_table)
            .values(**user_identity_to_dict(identity))
            .on_conflict_do_nothing(constraint="uq_provider_identity")
            .returning(user_identities_table)
        )
        async with store_operation(self.session, "link identity"):
            result = await self.session.execute(stmt)
            row = result.mappings().first()
        if row:
            return row_to_user_identity(dict(row))

        existing = await self.find_by_provider(
            identity.provider, identity.provider_user_id
        )
        if existing is None:
            raise StoreUnavailableError(
                f"identity link for {identity.provider.value} "
                f"{identity.provider_user_id} conflicted but cannot be read"
            )
        return existing
