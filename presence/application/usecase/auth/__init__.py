"""Authentication use cases."""

from .dispatch_sign_in import DispatchSignInUseCase, SignInResponse
from .project_session import (
    ProjectSessionRequest,
    ProjectSessionUseCase,
    SessionProjection,
)
from .reconcile_sign_in import (
    FAILURE_POLICY,
    ReconcileSignInUseCase,
    ReconciliationOutcome,
    ReconciliationResult,
    ReconciliationStep,
    SignInEvent,
)

__all__ = [
    "FAILURE_POLICY",
    "DispatchSignInUseCase",
    "ProjectSessionRequest",
    "ProjectSessionUseCase",
    "ReconcileSignInUseCase",
    "ReconciliationOutcome",
    "ReconciliationResult",
    "ReconciliationStep",
    "SessionProjection",
    "SignInEvent",
    "SignInResponse",
]
