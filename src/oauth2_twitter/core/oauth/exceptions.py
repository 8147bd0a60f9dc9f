"""
Custom exception hierarchy for the OAuth engine.

All exceptions inherit from OAuthError, allowing users to
catch all library-specific errors with a single except clause.

Example:
    >>> try:
    ...     token = flow.exchange_code(code, redirect_uri, verifier)
    ... except ProviderError as e:
    ...     print(f"Provider rejected the code: {e.message} ({e.code})")
    ... except OAuthError as e:
    ...     print(f"Token exchange failed: {e}")
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from typing import Any


class OAuthError(Exception):
    """Base exception for all engine errors."""

    pass


class InvalidConfigError(OAuthError):
    """Raised when a caller supplies a missing or invalid required value.

    Fatal: retrying with the same input fails the same way.

    Attributes:
        field: Name of the field that failed validation
        value: The invalid value that was provided
        message: Human-readable explanation of the validation error

    Example:
        >>> ProviderConfig(..., token_base_url="http://example.com/token")
        InvalidConfigError: Invalid 'token_base_url': URL must use HTTPS scheme
        (got 'http://example.com/token')
    """

    def __init__(self, field: str, value: object, message: str) -> None:
        self.field = field
        self.value = value
        self.message = message
        super().__init__(f"Invalid {field!r}: {message} (got {value!r})")

    def __repr__(self) -> str:
        return (
            f"InvalidConfigError(field={self.field!r}, value={self.value!r}, "
            f"message={self.message!r})"
        )


class RandomSourceUnavailableError(OAuthError):
    """Raised when the secure random source cannot supply entropy."""

    pass


class TransportErrorKind(str, enum.Enum):
    """Categories of transport-level failures."""

    NETWORK_FAILURE = "network_failure"
    TIMEOUT = "timeout"
    CANCELLED = "cancelled"
    TLS_ERROR = "tls_error"


class TransportError(OAuthError):
    """HTTP request could not be completed.

    Never retried by the engine; retry policy belongs to the caller.

    Attributes:
        kind: What went wrong at the transport level
        reason: Human-readable reason
        url: Request URL
    """

    def __init__(self, kind: TransportErrorKind, reason: str, url: str) -> None:
        self.kind = kind
        self.reason = reason
        self.url = url
        super().__init__(f"{kind.value} for {url}: {reason}")


class ProviderError(OAuthError):
    """The provider answered with a non-success status.

    Attributes:
        message: Provider error description (may be empty)
        code: Provider error code, or the HTTP status code when absent
        raw_body: Parsed response body, for logging or display
    """

    def __init__(self, message: str, code: str | int, raw_body: Mapping[str, Any]) -> None:
        self.message = message
        self.code = code
        self.raw_body = raw_body
        super().__init__(f"Provider error {code}: {message or '(no description)'}")


class MalformedResponseError(OAuthError):
    """Raised when a success response cannot be parsed or lacks required fields.

    Attributes:
        raw_body: Whatever could be recovered from the response
    """

    def __init__(self, message: str, raw_body: object = None) -> None:
        self.raw_body = raw_body
        super().__init__(message)


__all__ = [
    "OAuthError",
    "InvalidConfigError",
    "RandomSourceUnavailableError",
    "TransportErrorKind",
    "TransportError",
    "ProviderError",
    "MalformedResponseError",
]
