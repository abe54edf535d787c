"""Session token domain service."""

import logfire

from presence.config import AuthSettings
from presence.util.jwt import JWTError, TokenPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Domain service for session token operations."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_token(self, user_id: str, username: str, provider: str) -> str:
        """Create a minimal session token for a signed-in user.

        Args:
            user_id: User ID
            username: Username derived from the identity
            provider: Provider used to sign in

        Returns:
            JWT token string
        """
        with logfire.span("jwt_service.create_token", user_id=user_id):
            token = create_token(user_id, username, provider, self.auth_settings)
            logfire.info("Session token created", user_id=user_id, username=username)
            return token

    def verify_token(self, token: str) -> TokenPayload:
        """Verify session token and extract payload.

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                return verify_token(token, self.auth_settings)
            except JWTError as e:
                logfire.warn("Session token verification failed", error=str(e))
                raise
