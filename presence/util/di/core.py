"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from presence.config import (
    AuthSettings,
    BillingSettings,
    ReconciliationSettings,
    Settings,
    StoreSettings,
)
from presence.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    Sections are provided separately so services only see their own config.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Provide auth settings."""
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_billing_settings(self, settings: Settings) -> BillingSettings:
        """Provide billing settings."""
        return settings.billing

    @provide(scope=Scope.APP)
    def provide_store_settings(self, settings: Settings) -> StoreSettings:
        """Provide store settings."""
        return settings.store

    @provide(scope=Scope.APP)
    def provide_reconciliation_settings(
        self, settings: Settings
    ) -> ReconciliationSettings:
        """Provide reconciliation settings."""
        return settings.reconciliation
