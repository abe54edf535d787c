"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class MalformedProfileError(DomainError):
    """Raised when a provider profile lacks the fields needed for an identity."""

    def __init__(self, provider: str, reason: str):
        self.provider = provider
        self.reason = reason
        super().__init__(f"Malformed {provider} profile: {reason}")


class AccountNotFoundError(DomainError):
    """Raised when no account exists for an authenticated provider identity."""

    def __init__(self, provider: str, provider_id: str):
        self.provider = provider
        self.provider_id = provider_id
        super().__init__(f"No account for {provider} identity {provider_id}")


class StoreUnavailableError(DomainError):
    """Raised when the document store cannot be reached or times out.

    Transient: the whole reconciliation may be retried.
    """

    pass


class BillingProviderError(DomainError):
    """Raised when the payment provider rejects or fails a request."""

    pass


class UsernameConflictError(DomainError):
    """Raised when a derived username belongs to another user's profile."""

    def __init__(self, username: str, owner_id: str, user_id: str):
        self.username = username
        self.owner_id = owner_id
        self.user_id = user_id
        super().__init__(
            f"Username {username} is owned by user {owner_id}, not {user_id}"
        )


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")
