"""Session token encoding.

Tokens carry identity claims only. Account type and billing customer are
projected from the store on every session read, so a token never goes stale
when either changes.
"""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel

from presence.config import AuthSettings

IDENTITY_CLAIMS = ("user_id", "username", "provider")


class TokenPayload(BaseModel):
    """Decoded session token."""

    user_id: str
    username: str
    provider: str
    exp: datetime
    iat: datetime | None = None


class JWTError(Exception):
    """Token failed verification (bad signature, expired, missing claims)."""

    pass


def create_token(
    user_id: str, username: str, provider: str, settings: AuthSettings
) -> str:
    """Sign a session token valid for ``settings.jwt_expiry_days``."""
    issued_at = datetime.now(timezone.utc)
    claims = {
        "user_id": user_id,
        "username": username,
        "provider": provider,
        "iat": issued_at,
        "exp": issued_at + timedelta(days=settings.jwt_expiry_days),
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Check signature, expiry and required claims of a session token.

    Raises:
        JWTError: If the token cannot be trusted
    """
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", *IDENTITY_CLAIMS]},
        )
    except jwt.ExpiredSignatureError as e:
        raise JWTError("Token has expired") from e
    except jwt.InvalidTokenError as e:
        raise JWTError(f"Invalid token: {e}") from e

    return TokenPayload.model_validate(claims)
