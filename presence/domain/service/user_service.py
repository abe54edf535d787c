"""User domain service."""

from typing import Optional

import logfire

from presence.config import StoreSettings
from presence.domain.error import NotFoundError, StoreUnavailableError
from presence.domain.model import User
from presence.domain.repository import UserRepository
from presence.domain.value import UserId

from .base import Service, bounded


class UserService(Service):
    """Domain service for user operations."""

    def __init__(
        self, user_repository: UserRepository, store_settings: StoreSettings
    ) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
            store_settings: Store call limits
        """
        self.user_repository = user_repository
        self.timeout = store_settings.timeout_seconds

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find user by ID.

        Args:
            user_id: User ID

        Returns:
            User if found, None otherwise
        """
        with logfire.span("user_service.find_by_id", user_id=str(user_id)):
            user = await bounded(
                self.user_repository.find_by_id(user_id),
                self.timeout,
                StoreUnavailableError,
                "find user",
            )
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
            return user

    async def get_by_id(self, user_id: UserId) -> User:
        """Get user by ID.

        Raises:
            NotFoundError: If user not found
        """
        user = await self.find_by_id(user_id)
        if not user:
            raise NotFoundError("User", str(user_id))
        return user

    async def save(self, user: User) -> User:
        """Save user (create or update)."""
        with logfire.span("user_service.save", user_id=str(user.id)):
            return await bounded(
                self.user_repository.save(user),
                self.timeout,
                StoreUnavailableError,
                "save user",
            )

    async def record_billing_customer(
        self, user_id: UserId, customer_id: str
    ) -> User:
        """Persist a billing customer id unless the user already has one.

        Args:
            user_id: User ID
            customer_id: Id returned by the payment provider

        Returns:
            Stored user; its billing_customer_id is the first one ever written

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span(
            "user_service.record_billing_customer",
            user_id=str(user_id),
            customer_id=customer_id,
        ):
            user = await bounded(
                self.user_repository.set_billing_customer_if_unset(
                    user_id, customer_id
                ),
                self.timeout,
                StoreUnavailableError,
                "record billing customer",
            )
            if not user:
                raise NotFoundError("User", str(user_id))
            if user.billing_customer_id != customer_id:
                logfire.warn(
                    "Billing customer already recorded, keeping existing id",
                    user_id=str(user_id),
                    existing_customer_id=user.billing_customer_id,
                    discarded_customer_id=customer_id,
                )
            return user
