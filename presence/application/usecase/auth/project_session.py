"""Session projection use case."""

from uuid import UUID

from pydantic import BaseModel

from presence.domain.service import UserService
from presence.domain.value import AccountType, UserId


class ProjectSessionRequest(BaseModel):
    """Session read request."""

    user_id: UUID


class SessionProjection(BaseModel):
    """Fields added to a minimal session token on every read."""

    account_type: AccountType
    billing_customer_id: str | None = None


class ProjectSessionUseCase:
    """Enrich a session with the user's account type and billing id.

    Read-only; never contacts the payment provider.
    """

    def __init__(self, user_service: UserService) -> None:
        """Initialize session projection use case.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def execute(self, request: ProjectSessionRequest) -> SessionProjection:
        """Project persisted user state onto the session.

        A missing user (not expected after reconciliation) projects as a
        free account without billing.
        """
        user = await self.user_service.find_by_id(UserId(request.user_id))
        if user is None:
            return SessionProjection(
                account_type=AccountType.FREE, billing_customer_id=None
            )

        return SessionProjection(
            account_type=user.account_type or AccountType.FREE,
            billing_customer_id=user.billing_customer_id,
        )
