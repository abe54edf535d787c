"""PostgreSQL implementation of Account repository."""

from datetime import datetime, timezone
from typing import Any, Optional
from uuid import uuid4

from sqlalchemy import case, func, literal, select
from sqlalchemy.dialects.postgresql import ARRAY, UUID, insert
from sqlalchemy.ext.asyncio import AsyncSession

from presence.domain.model import Account, ProviderAccountData
from presence.domain.repository import AccountRepository
from presence.domain.value import AuthProvider, ProfileId, UserId
from presence.persistence.database import store_operation, store_read
from presence.persistence.mappers import provider_data_to_json, row_to_account
from presence.persistence.tables import accounts_table


class PostgresAccountRepository(AccountRepository):
    """PostgreSQL implementation of AccountRepository.

    Writes are single ``INSERT ... ON CONFLICT (user_id) DO UPDATE``
    statements, so concurrent sign-ins for one user never create two
    accounts and never change an account's owner.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_user_id(self, user_id: UserId) -> Optional[Account]:
        """Find the account owned by a user."""
        stmt = select(accounts_table).where(accounts_table.c.user_id == user_id)
        async with store_read(self.session, "find account"):
            result = await self.session.execute(stmt)
            row = result.mappings().first()
        return row_to_account(dict(row)) if row else None

    async def upsert_provider_data(
        self, user_id: UserId, provider: AuthProvider, data: dict[str, Any]
    ) -> Account:
        """Overwrite one provider sub-document, creating the account if needed.

        JSONB ``||`` replaces only the top-level key of this provider.
        """
        sub_document = {
            provider.value: provider_data_to_json(
                ProviderAccountData(data=data, updated_at=datetime.now(timezone.utc))
            )
        }
        stmt = insert(accounts_table).values(
            id=uuid4(), user_id=user_id, providers=sub_document, profile_ids=[]
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[accounts_table.c.user_id],
            set_={
                "providers": accounts_table.c.providers.op("||")(
                    stmt.excluded.providers
                ),
                "updated_at": func.now(),
            },
        ).returning(*accounts_table.c)

        async with store_operation(self.session, "upsert account"):
            result = await self.session.execute(stmt)
            row = result.mappings().one()
        return row_to_account(dict(row))

    async def associate_profile(self, user_id: UserId, profile_id: ProfileId) -> Account:
        """Add a profile id to the account's set of profiles."""
        profile_param = literal(profile_id, UUID(as_uuid=True))
        stmt = insert(accounts_table).values(
            id=uuid4(), user_id=user_id, providers={}, profile_ids=[profile_id]
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[accounts_table.c.user_id],
            set_={
                "profile_ids": case(
                    (
                        accounts_table.c.profile_ids.any(profile_param),
                        accounts_table.c.profile_ids,
                    ),
                    else_=func.array_append(
                        accounts_table.c.profile_ids,
                        profile_param,
                        type_=ARRAY(UUID(as_uuid=True)),
                    ),
                ),
                "updated_at": func.now(),
            },
        ).returning(*accounts_table.c)

        async with store_operation(self.session, "associate profile"):
            result = await self.session.execute(stmt)
            row = result.mappings().one()
        return row_to_account(dict(row))
