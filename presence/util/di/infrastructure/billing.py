"""Billing infrastructure providers."""

from dishka import Scope, provide

from presence.adapter.error import ConfigurationError
from presence.adapter.stripe import RealStripeBillingClient
from presence.config import BillingSettings
from presence.domain.service import BillingClient
from presence.util.di.base import ProviderBase


class BillingProvider(ProviderBase):
    """Billing component base."""

    __mock_component__ = "billing"


class ProdBillingProvider(BillingProvider):
    """Production billing provider backed by Stripe."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_billing_client(self, billing_settings: BillingSettings) -> BillingClient:
        """Provide Stripe billing client.

        Returns:
            Stripe customers API client

        Raises:
            ConfigurationError: If the Stripe API key is not configured
        """
        if not billing_settings.api_key:
            raise ConfigurationError("Stripe API key must be configured")

        return RealStripeBillingClient(
            api_key=billing_settings.api_key,
            base_url=billing_settings.base_url,
            timeout=billing_settings.timeout_seconds,
        )
