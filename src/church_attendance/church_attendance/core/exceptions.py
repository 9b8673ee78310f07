from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid or no identity is present.

    retry_after is set when the provider asked the caller to back off.
    """

    def __init__(self, message: str = "", *, retry_after: Optional[int] = None):
        super().__init__(message)
        self.retry_after = retry_after


class PendingApprovalError(AuthenticationError):
    """Credentials were correct but the account still awaits admin approval."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class StoreError(DomainError):
    """Raised when the database rejects or fails an operation."""


class CredentialError(DomainError):
    """Failure reported by the credential provider.

    The message keeps the provider's wording ("Invalid login credentials",
    "User already registered", ...) so callers can translate it.
    """


class RateLimitError(CredentialError):
    def __init__(self, message: str, *, retry_after: Optional[int] = None):
        super().__init__(message)
        self.retry_after = retry_after
