"""PostgreSQL implementation of User repository."""

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from presence.domain.model import User
from presence.domain.repository import UserRepository
from presence.domain.value import AccountType, UserId
from presence.persistence.database import store_operation, store_read
from presence.persistence.mappers import row_to_user, user_to_dict
from presence.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: User ID to look up

        Returns:
            User if found, None otherwise
        """
        async with store_read(self.session, "find user"):
            stmt = select(users_table).where(users_table.c.id == user_id)
            result = await self.session.execute(stmt)
            row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def save(self, user: User) -> User:
        """Save a user (create or update) with a single upsert."""
        user_dict = user_to_dict(user)
        stmt = insert(users_table).values(**user_dict)
        stmt = stmt.on_conflict_do_update(
            index_elements=[users_table.c.id],
            set_={k: v for k, v in user_dict.items() if k != "id"},
        )
        async with store_operation(self.session, "save user"):
            await self.session.execute(stmt)
        return user

    async def set_billing_customer_if_unset(
        self, user_id: UserId, customer_id: str
    ) -> Optional[User]:
        """Record the billing customer id unless one is already set.

        The NULL check lives in the UPDATE's WHERE clause, so only the first
        concurrent writer succeeds.

        Args:
            user_id: User to update
            customer_id: Billing customer id

        Returns:
            Stored user after the write, None if the user does not exist
        """
        stmt = (
            users_table.update()
            .where(users_table.c.id == user_id)
            .where(users_table.c.billing_customer_id.is_(None))
            .values(
                billing_customer_id=customer_id,
                account_type=func.coalesce(
                    users_table.c.account_type, AccountType.FREE.value
                ),
                updated_at=func.now(),
            )
            .returning(*users_table.c)
        )
        async with store_operation(self.session, "record billing customer"):
            result = await self.session.execute(stmt)
            row = result.mappings().first()

        if row:
            return row_to_user(dict(row))
        return await self.find_by_id(user_id)
