"""In-memory user repository for testing."""

from datetime import datetime
from typing import Optional

from presence.domain.model.user import User
from presence.domain.repository.user import UserRepository
from presence.domain.value import AccountType, UserId


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._users.get(user_id)

    async def save(self, user: User) -> User:
        """Save or update a user."""
        self._users[user.id] = user
        return user

    async def set_billing_customer_if_unset(
        self, user_id: UserId, customer_id: str
    ) -> Optional[User]:
        """Record the billing customer unless one is already set."""
        user = self._users.get(user_id)
        if not user or user.billing_customer_id:
            return user

        updated = user.model_copy(
            update={
                "billing_customer_id": customer_id,
                "account_type": user.account_type or AccountType.FREE,
                "updated_at": datetime.now(),
            }
        )
        self._users[user_id] = updated
        return updated
