"""Domain layer DI providers."""

from dishka import Scope, provide

from presence.config import (
    AuthSettings,
    BillingSettings,
    ReconciliationSettings,
    StoreSettings,
)
from presence.domain.repository import (
    AccountRepository,
    LinkRepository,
    ProfileRepository,
    UserIdentityRepository,
    UserRepository,
)
from presence.domain.service import (
    AccountService,
    BillingClient,
    BillingService,
    JWTService,
    ProfileService,
    UserService,
)
from presence.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide session token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_user_service(
        self, user_repository: UserRepository, store_settings: StoreSettings
    ) -> UserService:
        """Provide user domain service."""
        return UserService(
            user_repository=user_repository, store_settings=store_settings
        )

    @provide
    def get_account_service(
        self,
        account_repository: AccountRepository,
        user_identity_repository: UserIdentityRepository,
        user_repository: UserRepository,
        store_settings: StoreSettings,
    ) -> AccountService:
        """Provide account domain service."""
        return AccountService(
            account_repository=account_repository,
            user_identity_repository=user_identity_repository,
            user_repository=user_repository,
            store_settings=store_settings,
        )

    @provide
    def get_profile_service(
        self,
        profile_repository: ProfileRepository,
        link_repository: LinkRepository,
        store_settings: StoreSettings,
        reconciliation_settings: ReconciliationSettings,
    ) -> ProfileService:
        """Provide profile domain service."""
        return ProfileService(
            profile_repository=profile_repository,
            link_repository=link_repository,
            store_settings=store_settings,
            reconciliation_settings=reconciliation_settings,
        )

    @provide
    def get_billing_service(
        self, billing_client: BillingClient, billing_settings: BillingSettings
    ) -> BillingService:
        """Provide billing domain service."""
        return BillingService(
            billing_client=billing_client, billing_settings=billing_settings
        )
