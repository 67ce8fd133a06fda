"""Gateway error hierarchy.

Every failure surfaced to a formula caller is one of these, carrying a
human-readable message.
"""

from typing import Any


class GatewayError(Exception):
    """Base exception for gateway operations."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationFailure(GatewayError):
    """Caller arguments violate a precondition.

    Raised before any network call. Examples: mismatched example lists,
    no training examples, temperature outside [0, 1].
    """

    pass


class TransportError(GatewayError):
    """Network or HTTP failure other than quota exhaustion.

    Keeps the upstream status code, error type and structured error body
    so callers can inspect them.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        error_type: str | None = None,
        body: Any = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.error_type = error_type
        self.body = body

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.status_code is not None:
            parts.append(f"status_code={self.status_code}")
        if self.error_type:
            parts.append(f"error_type={self.error_type}")
        return " ".join(parts)


class QuotaError(GatewayError):
    """429 - Billing quota exhausted.

    Not retryable. The user has to act on their account.
    """

    pass


class MalformedResponseError(GatewayError):
    """Successful response that lacks the expected fields."""

    pass
