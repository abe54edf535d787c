"""Stripe billing client.

Creates customers through the Stripe REST API.
"""

import hashlib
from itertools import count

import httpx
import logfire

from presence.domain.error import BillingProviderError
from presence.domain.service.billing_service import BillingClient


def idempotency_key(user_id: str, data: dict[str, str]) -> str:
    """Key repeated creates for one user with the same customer fields.

    Stripe rejects a reused key whose parameters differ, so the fields are
    part of the key: a user whose email or name changed gets a fresh create.
    """
    digest = hashlib.sha256(
        "&".join(f"{k}={v}" for k, v in sorted(data.items())).encode()
    ).hexdigest()[:16]
    return f"customer-create-{user_id}-{digest}"


class StripeBillingClient(BillingClient):
    """Base class for Stripe billing clients.

    Provides type distinction for dependency injection.
    """

    pass


class RealStripeBillingClient(StripeBillingClient):
    """Stripe customers API client."""

    def __init__(self, api_key: str, base_url: str, timeout: float) -> None:
        """Initialize Stripe client.

        Args:
            api_key: Stripe secret key
            base_url: Stripe API base URL
            timeout: Request timeout in seconds
        """
        self.api_key = api_key
        self.customers_url = f"{base_url.rstrip('/')}/v1/customers"
        self.timeout = timeout

    async def create_customer(
        self, email: str | None, name: str | None, metadata: dict[str, str]
    ) -> str:
        """Create a Stripe customer.

        Requests carrying a ``userId`` in their metadata send an idempotency
        key derived from it and the customer fields, so Stripe returns the
        same customer when an identical create is repeated for one user.

        Args:
            email: Customer email
            name: Customer name
            metadata: Stored as Stripe customer metadata

        Returns:
            Stripe customer id (cus_...)

        Raises:
            BillingProviderError: If the request fails
        """
        data: dict[str, str] = {}
        if email:
            data["email"] = email
        if name:
            data["name"] = name
        for key, value in metadata.items():
            data[f"metadata[{key}]"] = value

        headers = {"Content-Type": "application/x-www-form-urlencoded"}
        if metadata.get("userId"):
            headers["Idempotency-Key"] = idempotency_key(metadata["userId"], data)

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.customers_url,
                    data=data,
                    auth=(self.api_key, ""),
                    headers=headers,
                    timeout=self.timeout,
                )

                if response.status_code != 200:
                    logfire.error(
                        "Stripe customer creation failed",
                        status_code=response.status_code,
                        error=response.text,
                    )
                    raise BillingProviderError(
                        f"Customer creation failed: {response.status_code}"
                    )

                try:
                    return response.json()["id"]
                except (ValueError, KeyError, TypeError) as e:
                    logfire.error(
                        "Stripe customer response unreadable", error=str(e)
                    )
                    raise BillingProviderError(
                        f"Unreadable customer response: {e!r}"
                    ) from e

        except httpx.HTTPError as e:
            logfire.error("Stripe customer creation HTTP error", error=str(e))
            raise BillingProviderError(f"HTTP error creating customer: {e}")


class MockStripeBillingClient(StripeBillingClient):
    """Mock Stripe client for testing.

    Records every call and returns deterministic customer ids without making
    real API calls. Set ``fail`` to simulate provider outages.
    """

    def __init__(self) -> None:
        self.calls: list[dict] = []
        self.fail = False
        self._ids = count(1)

    async def create_customer(
        self, email: str | None, name: str | None, metadata: dict[str, str]
    ) -> str:
        """Return a fresh mock customer id."""
        self.calls.append({"email": email, "name": name, "metadata": dict(metadata)})
        if self.fail:
            raise BillingProviderError("Mock billing provider unavailable")
        return f"cus_mock{next(self._ids)}"
