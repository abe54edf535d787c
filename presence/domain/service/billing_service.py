"""Billing domain service."""

import logfire

from presence.config import BillingSettings
from presence.domain.error import BillingProviderError
from presence.domain.model import User
from presence.domain.value import CanonicalIdentity

from .base import Service, bounded


class BillingClient:
    """Payment provider client interface.

    Creating a customer is not idempotent on the provider side: two calls
    create two customers. Callers must check for an existing id first.
    """

    async def create_customer(
        self, email: str | None, name: str | None, metadata: dict[str, str]
    ) -> str:
        """Create a billing customer.

        Args:
            email: Customer email
            name: Customer name
            metadata: Free-form key/value pairs stored on the customer

        Returns:
            Opaque customer id

        Raises:
            BillingProviderError: If the provider call fails
        """
        raise NotImplementedError


class BillingService(Service):
    """Domain service wrapping the payment provider."""

    def __init__(
        self, billing_client: BillingClient, billing_settings: BillingSettings
    ) -> None:
        """Initialize billing service.

        Args:
            billing_client: Payment provider client
            billing_settings: Billing configuration
        """
        self.billing_client = billing_client
        self.timeout = billing_settings.timeout_seconds

    async def create_customer(self, user: User, identity: CanonicalIdentity) -> str:
        """Create the billing customer for a user.

        Args:
            user: User to provision
            identity: Identity the user signed in with

        Returns:
            Billing customer id

        Raises:
            BillingProviderError: If the provider fails or times out
        """
        with logfire.span(
            "billing_service.create_customer",
            user_id=str(user.id),
            provider=identity.provider.value,
        ):
            customer_id = await bounded(
                self.billing_client.create_customer(
                    email=user.email,
                    name=user.name,
                    metadata={
                        "userId": str(user.id),
                        "provider": identity.provider.value,
                        "username": identity.username.root,
                    },
                ),
                self.timeout,
                BillingProviderError,
                "create billing customer",
            )
            logfire.info(
                "Billing customer created",
                user_id=str(user.id),
                customer_id=customer_id,
            )
            return customer_id
