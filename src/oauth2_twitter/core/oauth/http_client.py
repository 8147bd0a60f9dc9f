"""
HTTP client abstraction for the OAuth engine.

Provides a testable, observable interface for HTTP requests using
httpx as the default implementation. The engine sends at most one
request per operation and never retries; retry policy belongs to the
caller.
"""

from __future__ import annotations

import abc
import json
import logging
import ssl
import threading
import typing
from dataclasses import dataclass, field

import httpx

from .constants import OAuthDefaults
from .exceptions import MalformedResponseError, TransportError, TransportErrorKind

_logger = logging.getLogger(__name__)

_REDACTED_HEADERS = frozenset({"authorization"})


def redact_headers(headers: typing.Mapping[str, str]) -> dict[str, str]:
    """Copy headers with credentials masked, for logging."""
    return {
        name: ("<redacted>" if name.lower() in _REDACTED_HEADERS else value)
        for name, value in headers.items()
    }


# =============================================================================
# Cancellation
# =============================================================================


class CancellationToken:
    """Caller-owned cancellation flag, safe to set from another thread.

    Example:
        >>> token = CancellationToken()
        >>> token.cancel()
        >>> token.cancelled
        True
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


# =============================================================================
# Request / Response
# =============================================================================


@dataclass(frozen=True)
class HttpRequest:
    """Fully prepared HTTP request.

    Attributes:
        method: HTTP method ("GET", "POST")
        url: Absolute request URL
        headers: Request headers
        data: Encoded request body (empty for GET)
    """

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    data: bytes = b""


@dataclass
class HttpResponse:
    """HTTP response wrapper adapting httpx.Response to our interface."""

    _raw: httpx.Response
    _text: str | None = field(init=False, default=None)

    @property
    def status_code(self) -> int:
        return self._raw.status_code

    @property
    def headers(self) -> dict[str, str]:
        return dict(self._raw.headers)

    @property
    def body(self) -> bytes:
        return self._raw.content

    @property
    def text(self) -> str:
        if self._text is None:
            self._text = self._raw.text
        return self._text

    def json(self) -> typing.Any:
        """Parse the body as JSON.

        Raises:
            MalformedResponseError: If the body is not valid JSON
        """
        try:
            return self._raw.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise MalformedResponseError(
                f"Response body is not valid JSON: {e}", raw_body=self.text
            ) from e


# =============================================================================
# Abstract Client
# =============================================================================


class HttpClient(abc.ABC):
    """Abstract HTTP client for the engine.

    Implementations return responses for every status code; classifying
    non-success responses is the ResponseValidator's job.
    """

    @abc.abstractmethod
    def send(
        self,
        request: HttpRequest,
        timeout: float | None = None,
        cancel_token: CancellationToken | None = None,
    ) -> HttpResponse:
        """Send a request.

        Args:
            request: Prepared request
            timeout: Optional timeout override in seconds
            cancel_token: Optional caller cancellation flag

        Returns:
            HttpResponse, whatever its status code

        Raises:
            TransportError: If no response could be obtained
        """

    def post(
        self,
        url: str,
        data: bytes,
        headers: dict[str, str],
        timeout: float | None = None,
        cancel_token: CancellationToken | None = None,
    ) -> HttpResponse:
        """Make an HTTP POST request."""
        return self.send(HttpRequest("POST", url, headers, data), timeout, cancel_token)

    def get(
        self,
        url: str,
        headers: dict[str, str],
        timeout: float | None = None,
        cancel_token: CancellationToken | None = None,
    ) -> HttpResponse:
        """Make an HTTP GET request."""
        return self.send(HttpRequest("GET", url, headers), timeout, cancel_token)


def _raise_if_cancelled(cancel_token: CancellationToken | None, url: str) -> None:
    if cancel_token is not None and cancel_token.cancelled:
        raise TransportError(TransportErrorKind.CANCELLED, "request cancelled by caller", url)


def _is_tls_error(exc: BaseException) -> bool:
    """Walk the exception chain looking for an SSL failure."""
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        if isinstance(current, ssl.SSLError):
            return True
        if "CERTIFICATE_VERIFY_FAILED" in str(current):
            return True
        current = current.__cause__ or current.__context__
    return False


def classify_transport_error(exc: httpx.RequestError, url: str) -> TransportError:
    """Map an httpx request exception onto a TransportError kind.

    Covers failures after the request was sent too, such as an undecodable
    body or a redirect loop; those count as NETWORK_FAILURE.
    """
    if isinstance(exc, httpx.TimeoutException):
        kind = TransportErrorKind.TIMEOUT
    elif _is_tls_error(exc):
        kind = TransportErrorKind.TLS_ERROR
    else:
        kind = TransportErrorKind.NETWORK_FAILURE
    return TransportError(kind, str(exc) or type(exc).__name__, url)


# =============================================================================
# httpx Implementation
# =============================================================================


class HttpxHttpClient(HttpClient):
    """Default HTTP client using httpx.

    Features:
    - Connection pooling via httpx.Client
    - Structured debug logging with credentials redacted
    - Transport failures classified into TransportError kinds

    Example:
        >>> with HttpxHttpClient() as client:
        ...     response = client.post(
        ...         "https://example.com/token",
        ...         b"grant_type=authorization_code",
        ...         {"Content-Type": "application/x-www-form-urlencoded"},
        ...     )
    """

    def __init__(
        self,
        timeout: float = OAuthDefaults.HTTP_REQUEST_TIMEOUT,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize HTTP client.

        Args:
            timeout: Default request timeout in seconds
            client: Preconfigured httpx.Client (proxies, custom CA, transport)
        """
        self.timeout = timeout
        self._client = client or httpx.Client(timeout=httpx.Timeout(timeout))

    def send(
        self,
        request: HttpRequest,
        timeout: float | None = None,
        cancel_token: CancellationToken | None = None,
    ) -> HttpResponse:
        effective_timeout = timeout if timeout is not None else self.timeout

        _raise_if_cancelled(cancel_token, request.url)

        _logger.debug(
            "HTTP %s %s (timeout=%.1fs, headers=%s)",
            request.method,
            request.url,
            effective_timeout,
            redact_headers(request.headers),
        )

        try:
            response = self._client.request(
                request.method,
                request.url,
                content=request.data or None,
                headers=request.headers,
                timeout=httpx.Timeout(effective_timeout),
            )
        except httpx.RequestError as e:
            error = classify_transport_error(e, request.url)
            _logger.warning("HTTP %s %s failed: %s", request.method, request.url, error)
            raise error from e

        # A response that arrives after cancellation is discarded
        _raise_if_cancelled(cancel_token, request.url)

        _logger.debug(
            "HTTP %s from %s (body=%d bytes)",
            response.status_code,
            request.url,
            len(response.content),
        )

        return HttpResponse(response)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> HttpxHttpClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


# =============================================================================
# Mock Client for Testing
# =============================================================================


class MockHttpClient(HttpClient):
    """Mock HTTP client for testing.

    Returns a predefined response without making network requests.
    Tracks all requests made for test assertions.

    Example:
        >>> mock = MockHttpClient(status_code=200, json_response={"access_token": "T"})
        >>> response = mock.post("https://example.com", b"", {})
        >>> assert response.json()["access_token"] == "T"
        >>> assert len(mock.requests) == 1
    """

    def __init__(
        self,
        status_code: int = 200,
        json_response: typing.Any = None,
        text_response: str = "",
        headers: dict[str, str] | None = None,
        raise_error: Exception | None = None,
    ) -> None:
        """Initialize mock client.

        Args:
            status_code: HTTP status code to return
            json_response: JSON response body (serialized to bytes)
            text_response: Text response body (used if json_response is None)
            headers: Response headers
            raise_error: Exception to raise on every request (for testing errors)
        """
        self.status_code = status_code
        self.json_response = json_response
        self.text_response = text_response
        self.response_headers = headers or {}
        self.raise_error = raise_error

        self.requests: list[HttpRequest] = []
        self.timeouts: list[float | None] = []

    def send(
        self,
        request: HttpRequest,
        timeout: float | None = None,
        cancel_token: CancellationToken | None = None,
    ) -> HttpResponse:
        """Record request and return mock response."""
        self.requests.append(request)
        self.timeouts.append(timeout)

        _raise_if_cancelled(cancel_token, request.url)

        if self.raise_error is not None:
            raise self.raise_error

        if self.json_response is not None:
            body = json.dumps(self.json_response).encode()
        else:
            body = self.text_response.encode()

        mock_response = httpx.Response(
            status_code=self.status_code,
            content=body,
            headers=self.response_headers,
            request=httpx.Request(request.method, request.url),
        )

        return HttpResponse(mock_response)


__all__ = [
    "CancellationToken",
    "HttpRequest",
    "HttpResponse",
    "HttpClient",
    "HttpxHttpClient",
    "MockHttpClient",
    "classify_transport_error",
    "redact_headers",
]
