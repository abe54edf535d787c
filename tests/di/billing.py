"""Mock billing providers for testing."""

from dishka import Scope, provide

from presence.adapter.stripe import MockStripeBillingClient
from presence.domain.service import BillingClient
from presence.util.di.infrastructure.billing import BillingProvider


class MockBillingProvider(BillingProvider):
    """Mock billing provider using the recording Stripe client."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_billing_client(self) -> BillingClient:
        """Provide mock billing client."""
        return MockStripeBillingClient()
