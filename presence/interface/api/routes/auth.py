"""Authentication routes.

The identity-protocol layer posts a sign-in event here once a provider has
authenticated the user. Reconciliation runs before the session cookie is
issued, so a sign-in is only completed once the user's records converge.
"""

import logging
from typing import Any
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, HTTPException, Response, status
from pydantic import BaseModel

from presence.application.usecase.auth import (
    DispatchSignInUseCase,
    ProjectSessionRequest,
    ProjectSessionUseCase,
    SignInEvent,
    SignInResponse,
)
from presence.config import Settings
from presence.domain.error import (
    AccountNotFoundError,
    MalformedProfileError,
    StoreUnavailableError,
)
from presence.domain.service import JWTService
from presence.domain.value import AccountType
from presence.interface.error import status_for
from presence.util.jwt import JWTError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"], route_class=DishkaRoute)

AUTH_COOKIE = "auth_token"


class SignInEventRequest(BaseModel):
    """Successful-authentication event."""

    user_id: UUID
    provider: str
    raw_profile: dict[str, Any]


class SessionResponse(BaseModel):
    """Current session, enriched with persisted account state."""

    user_id: str
    username: str
    provider: str
    account_type: AccountType
    billing_customer_id: str | None = None


@router.post("/sign-in-events", response_model=SignInResponse)
async def sign_in_event(
    request: SignInEventRequest,
    response: Response,
    dispatch_use_case: FromDishka[DispatchSignInUseCase],
    settings: FromDishka[Settings],
) -> SignInResponse:
    """Reconcile a successful sign-in and issue the session cookie.

    Returns:
        Session token and the reconciliation outcomes

    Raises:
        HTTPException: 422 for an unusable provider profile, 404 when no
            user exists for the identity, 503 when the store stays down

    Examples:
        POST /auth/sign-in-events
        {
            "user_id": "5f0c...",
            "provider": "github",
            "raw_profile": {"id": 42, "login": "octocat", ...}
        }
    """
    logger.info(f"Sign-in event for user {request.user_id} via {request.provider}")

    try:
        result = await dispatch_use_case.execute(
            SignInEvent(
                user_id=request.user_id,
                provider=request.provider,
                raw_profile=request.raw_profile,
            )
        )
    except (MalformedProfileError, AccountNotFoundError, StoreUnavailableError) as e:
        logger.warning(f"Sign-in denied for user {request.user_id}: {e}")
        raise HTTPException(status_code=status_for(e), detail=str(e))

    is_production = settings.environment == "production"
    response.set_cookie(
        key=AUTH_COOKIE,
        value=result.token,
        httponly=True,
        secure=is_production,
        samesite="lax",
        path="/",
        max_age=settings.auth.jwt_expiry_days * 24 * 60 * 60,
    )
    return result


@router.get("/session", response_model=SessionResponse)
async def get_session(
    jwt_service: FromDishka[JWTService],
    project_session_use_case: FromDishka[ProjectSessionUseCase],
    auth_token: str | None = Cookie(default=None),
) -> SessionResponse:
    """Read the current session.

    The token carries only identity claims; account type and billing
    customer are read from the store on every call.

    Raises:
        HTTPException: 401 if the cookie is missing or the token is invalid
    """
    if not auth_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated"
        )

    try:
        payload = jwt_service.verify_token(auth_token)
    except JWTError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))

    try:
        projection = await project_session_use_case.execute(
            ProjectSessionRequest(user_id=UUID(payload.user_id))
        )
    except StoreUnavailableError as e:
        raise HTTPException(status_code=status_for(e), detail=str(e))

    return SessionResponse(
        user_id=payload.user_id,
        username=payload.username,
        provider=payload.provider,
        account_type=projection.account_type,
        billing_customer_id=projection.billing_customer_id,
    )


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(response: Response) -> None:
    """Clear the session cookie."""
    response.delete_cookie(key=AUTH_COOKIE, path="/")
