"""Base service class for domain services."""

import asyncio
from typing import Awaitable, TypeVar

from presence.domain.error import DomainError

T = TypeVar("T")


class Service:
    """Base class for all domain services.

    Domain services contain business logic that doesn't naturally belong
    to a single entity or spans multiple entities/aggregates.
    """

    pass


async def bounded(
    awaitable: Awaitable[T],
    timeout: float,
    error_type: type[DomainError],
    operation: str,
) -> T:
    """Await an external call with an upper time bound.

    Args:
        awaitable: The store or provider call
        timeout: Seconds before giving up
        error_type: Error raised on timeout (same as the call's failure mode)
        operation: Name used in the error message

    Returns:
        The call's result

    Raises:
        error_type: If the call does not finish within ``timeout``
    """
    try:
        async with asyncio.timeout(timeout):
            return await awaitable
    except TimeoutError as e:
        raise error_type(f"{operation} timed out after {timeout}s") from e
