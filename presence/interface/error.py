"""Interface layer errors and their HTTP status codes."""

from fastapi import status

from presence.domain.error import (
    AccountNotFoundError,
    DomainError,
    MalformedProfileError,
    NotFoundError,
    StoreUnavailableError,
)


class InterfaceError(Exception):
    """Base interface error."""

    pass


class AuthenticationError(InterfaceError):
    """Missing or invalid session token."""

    pass


# Domain errors that reach the HTTP layer; anything else is a 500.
DOMAIN_ERROR_STATUS: dict[type[DomainError], int] = {
    MalformedProfileError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    AccountNotFoundError: status.HTTP_404_NOT_FOUND,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    StoreUnavailableError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def status_for(error: DomainError) -> int:
    """HTTP status code for a domain error."""
    for error_type, code in DOMAIN_ERROR_STATUS.items():
        if isinstance(error, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR
