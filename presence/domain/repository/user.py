"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from presence.domain.model.user import User
from presence.domain.value import UserId


class UserRepository(ABC):
    """Repository for User aggregate.

    Defines the contract for user persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: The user to save

        Returns:
            The saved user
        """
        pass

    @abstractmethod
    async def set_billing_customer_if_unset(
        self, user_id: UserId, customer_id: str
    ) -> Optional[User]:
        """Atomically record a billing customer id unless one is already set.

        Also sets the account type to free when it is unset. When another
        writer got there first the stored id is kept.

        Args:
            user_id: The user's unique identifier
            customer_id: Billing customer id to record

        Returns:
            The stored user after the write, None if the user does not exist
        """
        pass
