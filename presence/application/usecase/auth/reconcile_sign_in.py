"""Sign-in reconciliation use case."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Optional
from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from presence.domain.error import (
    AccountNotFoundError,
    BillingProviderError,
    NotFoundError,
    StoreUnavailableError,
    UsernameConflictError,
)
from presence.domain.model import Profile
from presence.domain.service import (
    AccountOwner,
    AccountService,
    BillingService,
    ProfileService,
    UserService,
    normalize_identity,
)
from presence.domain.value import CanonicalIdentity, UserId


class ReconciliationStep(str, Enum):
    """Ordered steps of a reconciliation run."""

    ACCOUNT_MERGE = "account-merge"
    ACCOUNT_LOOKUP = "account-lookup"
    PROFILE = "profile"
    ASSOCIATION = "association"
    BILLING = "billing"
    LINK_BACKFILL = "link-backfill"


class ReconciliationOutcome(str, Enum):
    """What a step did."""

    ACCOUNT_UPDATED = "account-updated"
    ACCOUNT_UPDATE_FAILED = "account-update-failed"
    PROFILE_CREATED = "profile-created"
    PROFILE_FOUND = "profile-found"
    PROFILE_CONFLICT = "profile-conflict"
    PROFILE_ASSOCIATED = "profile-associated"
    BILLING_PROVISIONED = "billing-provisioned"
    BILLING_SKIPPED = "billing-skipped"
    BILLING_FAILED = "billing-failed"
    LINK_BACKFILLED = "link-backfilled"


# Failures a step absorbs, and the outcome recorded in their place.
# Any other exception aborts the run and propagates to the dispatcher.
FAILURE_POLICY: dict[
    ReconciliationStep, tuple[tuple[type[Exception], ...], ReconciliationOutcome]
] = {
    ReconciliationStep.ACCOUNT_MERGE: (
        (StoreUnavailableError,),
        ReconciliationOutcome.ACCOUNT_UPDATE_FAILED,
    ),
    ReconciliationStep.PROFILE: (
        (UsernameConflictError,),
        ReconciliationOutcome.PROFILE_CONFLICT,
    ),
    ReconciliationStep.BILLING: (
        (BillingProviderError, NotFoundError),
        ReconciliationOutcome.BILLING_FAILED,
    ),
}


class SignInEvent(BaseModel):
    """Successful-authentication event from the identity-protocol layer."""

    user_id: UUID
    provider: str
    raw_profile: dict[str, Any]


class ReconciliationResult(BaseModel):
    """Record of what a reconciliation run did.

    For observability and tests; callers do not branch on it.
    """

    user_id: str
    username: str
    profile_id: str | None = None
    billing_customer_id: str | None = None
    outcomes: list[ReconciliationOutcome] = Field(default_factory=list)
    errors: dict[ReconciliationStep, str] = Field(default_factory=dict)


@dataclass
class _RunState:
    user_id: UserId
    identity: CanonicalIdentity
    owner: Optional[AccountOwner] = None
    profile: Optional[Profile] = None


StepHandler = Callable[[_RunState, ReconciliationResult], Awaitable[Optional[ReconciliationOutcome]]]


class ReconcileSignInUseCase:
    """Converge account, profile, link and billing state after a sign-in.

    Every step is idempotent, so a failed or cancelled run is repaired by
    running the whole reconciliation again. Mutual exclusion between
    concurrent runs comes only from the stores' per-key atomic operations.
    """

    def __init__(
        self,
        account_service: AccountService,
        profile_service: ProfileService,
        billing_service: BillingService,
        user_service: UserService,
    ) -> None:
        """Initialize reconciliation use case.

        Args:
            account_service: Account domain service
            profile_service: Profile and link domain service
            billing_service: Billing domain service
            user_service: User domain service
        """
        self.account_service = account_service
        self.profile_service = profile_service
        self.billing_service = billing_service
        self.user_service = user_service

        self._steps: list[tuple[ReconciliationStep, StepHandler]] = [
            (ReconciliationStep.ACCOUNT_MERGE, self._merge_account),
            (ReconciliationStep.ACCOUNT_LOOKUP, self._lookup_account),
            (ReconciliationStep.PROFILE, self._resolve_profile),
            (ReconciliationStep.ASSOCIATION, self._associate_profile),
            (ReconciliationStep.BILLING, self._provision_billing),
            (ReconciliationStep.LINK_BACKFILL, self._backfill_link),
        ]

    async def execute(self, event: SignInEvent) -> ReconciliationResult:
        """Normalize the event's provider profile and reconcile.

        Raises:
            MalformedProfileError: If the profile cannot be normalized;
                nothing is written in that case
            AccountNotFoundError: If no user exists for the identity
            StoreUnavailableError: If a store call fails outside step 1
        """
        identity = normalize_identity(event.provider, event.raw_profile)
        return await self.reconcile(UserId(event.user_id), identity)

    async def reconcile(
        self, user_id: UserId, identity: CanonicalIdentity
    ) -> ReconciliationResult:
        """Run the reconciliation steps in order.

        Args:
            user_id: Authenticated user
            identity: Normalized identity from the provider

        Returns:
            Outcomes of the run
        """
        state = _RunState(user_id=user_id, identity=identity)
        result = ReconciliationResult(
            user_id=str(user_id), username=identity.username.root
        )

        with logfire.span(
            "reconcile_sign_in",
            user_id=str(user_id),
            provider=identity.provider.value,
            username=identity.username.root,
        ):
            for step, handler in self._steps:
                await self._run_step(step, handler, state, result)

            logfire.info(
                "Sign-in reconciled",
                user_id=str(user_id),
                username=identity.username.root,
                outcomes=[o.value for o in result.outcomes],
            )
            return result

    async def _run_step(
        self,
        step: ReconciliationStep,
        handler: StepHandler,
        state: _RunState,
        result: ReconciliationResult,
    ) -> None:
        tolerated, failure_outcome = FAILURE_POLICY.get(step, ((), None))
        try:
            outcome = await handler(state, result)
        except tolerated as e:
            logfire.warn(
                "Reconciliation step failed, continuing",
                step=step.value,
                user_id=str(state.user_id),
                error=str(e),
                error_type=type(e).__name__,
            )
            result.errors[step] = str(e)
            result.outcomes.append(failure_outcome)
            return

        if outcome is not None:
            result.outcomes.append(outcome)

    async def _merge_account(
        self, state: _RunState, result: ReconciliationResult
    ) -> ReconciliationOutcome:
        await self.account_service.merge_provider_data(state.user_id, state.identity)
        return ReconciliationOutcome.ACCOUNT_UPDATED

    async def _lookup_account(
        self, state: _RunState, result: ReconciliationResult
    ) -> None:
        owner = await self.account_service.find_by_provider_identity(state.identity)
        if owner.user.id != state.user_id:
            logfire.error(
                "Provider identity belongs to a different user",
                user_id=str(state.user_id),
                owner_id=str(owner.user.id),
                provider=state.identity.provider.value,
            )
            raise AccountNotFoundError(
                state.identity.provider.value, state.identity.provider_id
            )
        state.owner = owner

    async def _resolve_profile(
        self, state: _RunState, result: ReconciliationResult
    ) -> ReconciliationOutcome:
        profile, created = await self.profile_service.find_or_create_profile(
            state.user_id, state.identity
        )
        state.profile = profile
        result.profile_id = str(profile.id)

        if not created:
            return ReconciliationOutcome.PROFILE_FOUND

        await self.profile_service.ensure_default_link(profile, state.identity)
        return ReconciliationOutcome.PROFILE_CREATED

    async def _associate_profile(
        self, state: _RunState, result: ReconciliationResult
    ) -> Optional[ReconciliationOutcome]:
        if state.profile is None:
            return None
        await self.account_service.associate_profile(state.user_id, state.profile.id)
        return ReconciliationOutcome.PROFILE_ASSOCIATED

    async def _provision_billing(
        self, state: _RunState, result: ReconciliationResult
    ) -> ReconciliationOutcome:
        if state.owner is None:
            raise AccountNotFoundError(
                state.identity.provider.value, state.identity.provider_id
            )
        user = state.owner.user

        if user.billing_customer_id:
            result.billing_customer_id = user.billing_customer_id
            return ReconciliationOutcome.BILLING_SKIPPED

        customer_id = await self.billing_service.create_customer(user, state.identity)
        stored = await self.user_service.record_billing_customer(user.id, customer_id)
        result.billing_customer_id = stored.billing_customer_id
        return ReconciliationOutcome.BILLING_PROVISIONED

    async def _backfill_link(
        self, state: _RunState, result: ReconciliationResult
    ) -> Optional[ReconciliationOutcome]:
        if state.profile is None:
            return None

        current = await self.profile_service.get_profile(state.profile.id)
        if current is None or current.links:
            return None

        link = await self.profile_service.ensure_default_link(current, state.identity)
        if link is None:
            return None
        return ReconciliationOutcome.LINK_BACKFILLED
