"""Application layer DI providers."""

from dishka import Scope, provide

from presence.application.usecase.auth import (
    DispatchSignInUseCase,
    ProjectSessionUseCase,
    ReconcileSignInUseCase,
)
from presence.config import ReconciliationSettings
from presence.domain.service import (
    AccountService,
    BillingService,
    JWTService,
    ProfileService,
    UserService,
)
from presence.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Application use cases provider - concrete, no mocks needed."""

    @provide(scope=Scope.REQUEST)
    def get_reconcile_sign_in_use_case(
        self,
        account_service: AccountService,
        profile_service: ProfileService,
        billing_service: BillingService,
        user_service: UserService,
    ) -> ReconcileSignInUseCase:
        """Provide sign-in reconciliation use case."""
        return ReconcileSignInUseCase(
            account_service=account_service,
            profile_service=profile_service,
            billing_service=billing_service,
            user_service=user_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_dispatch_sign_in_use_case(
        self,
        reconcile_use_case: ReconcileSignInUseCase,
        jwt_service: JWTService,
        settings: ReconciliationSettings,
    ) -> DispatchSignInUseCase:
        """Provide authentication event dispatcher."""
        return DispatchSignInUseCase(
            reconcile_use_case=reconcile_use_case,
            jwt_service=jwt_service,
            settings=settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_project_session_use_case(
        self, user_service: UserService
    ) -> ProjectSessionUseCase:
        """Provide session projection use case."""
        return ProjectSessionUseCase(user_service=user_service)
