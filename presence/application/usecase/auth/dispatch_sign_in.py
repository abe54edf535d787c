"""Authentication event dispatcher."""

import asyncio

import logfire
from pydantic import BaseModel

from presence.config import ReconciliationSettings
from presence.domain.error import StoreUnavailableError
from presence.domain.service import JWTService

from .reconcile_sign_in import (
    ReconcileSignInUseCase,
    ReconciliationResult,
    SignInEvent,
)


class SignInResponse(BaseModel):
    """Session token plus what reconciliation did."""

    token: str
    result: ReconciliationResult


class DispatchSignInUseCase:
    """Handle a successful-authentication event.

    Runs reconciliation, retrying the whole run on transient store failures
    (every step is idempotent), then issues the session token. Malformed
    profiles and missing accounts are not retried and deny the sign-in.
    Billing and account-metadata failures never reach this level.
    """

    def __init__(
        self,
        reconcile_use_case: ReconcileSignInUseCase,
        jwt_service: JWTService,
        settings: ReconciliationSettings,
    ) -> None:
        """Initialize dispatcher.

        Args:
            reconcile_use_case: Reconciliation orchestrator
            jwt_service: Session token service
            settings: Retry configuration
        """
        self.reconcile_use_case = reconcile_use_case
        self.jwt_service = jwt_service
        self.settings = settings

    async def execute(self, event: SignInEvent) -> SignInResponse:
        """Reconcile the event and issue a session token.

        Raises:
            MalformedProfileError: If the provider profile is unusable
            AccountNotFoundError: If no user exists for the identity
            StoreUnavailableError: If the store stays unavailable after
                all attempts
        """
        result = await self._reconcile_with_retry(event)

        token = self.jwt_service.create_token(
            user_id=str(event.user_id),
            username=result.username,
            provider=event.provider,
        )
        return SignInResponse(token=token, result=result)

    async def _reconcile_with_retry(self, event: SignInEvent) -> ReconciliationResult:
        max_attempts = max(1, self.settings.max_attempts)
        backoff = self.settings.backoff_seconds

        attempt = 0
        while True:
            attempt += 1
            try:
                return await self.reconcile_use_case.execute(event)
            except StoreUnavailableError as e:
                if attempt >= max_attempts:
                    logfire.error(
                        "Reconciliation failed, giving up",
                        user_id=str(event.user_id),
                        attempts=attempt,
                        error=str(e),
                    )
                    raise
                logfire.warn(
                    "Reconciliation failed, retrying",
                    user_id=str(event.user_id),
                    attempt=attempt,
                    backoff=backoff,
                    error=str(e),
                )
                await asyncio.sleep(backoff)
                backoff = min(backoff * 2, self.settings.max_backoff_seconds)
