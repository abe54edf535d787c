"""Unit tests for domain error to HTTP status mapping."""

import pytest

from presence.domain.error import (
    AccountNotFoundError,
    BillingProviderError,
    MalformedProfileError,
    NotFoundError,
    StoreUnavailableError,
)
from presence.interface.error import status_for


@pytest.mark.parametrize(
    ("error", "expected"),
    [
        (MalformedProfileError("github", "missing provider id"), 422),
        (AccountNotFoundError("github", "1001"), 404),
        (NotFoundError("User", "u-1"), 404),
        (StoreUnavailableError("down"), 503),
        (BillingProviderError("declined"), 500),
    ],
)
def test_status_for(error, expected):
    assert status_for(error) == expected
