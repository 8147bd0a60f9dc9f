"""Provider response classification.

Turns raw HTTP responses into either parsed bodies or a ProviderError
carrying the provider's own message and code.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from .constants import OAuthDefaults, OAuthProtocol
from .exceptions import MalformedResponseError, ProviderError
from .http_client import HttpResponse
from .provider import ProviderConfig

_logger = logging.getLogger(__name__)


def parse_response(response: HttpResponse) -> Mapping[str, Any] | list[Any] | str:
    """Parse a response body.

    Success bodies must be JSON. Error bodies are often HTML or plain
    text from a gateway, so an unparsable non-success body is returned
    as text and left for ResponseValidator to report.

    Raises:
        MalformedResponseError: If a success body is not valid JSON
    """
    try:
        return response.json()
    except MalformedResponseError:
        if response.status_code == OAuthProtocol.HTTP_OK:
            raise
        return response.text


class ResponseValidator:
    """Accepts 200 responses and raises ProviderError for anything else.

    Error fields are read with provider-configurable keys. Missing or
    oddly typed fields degrade to an empty message and the HTTP status
    code; extraction itself never raises.
    """

    def __init__(
        self,
        message_key: str = OAuthDefaults.ERROR_MESSAGE_KEY,
        code_key: str = OAuthDefaults.ERROR_CODE_KEY,
    ) -> None:
        self.message_key = message_key
        self.code_key = code_key

    @classmethod
    def for_provider(cls, config: ProviderConfig) -> ResponseValidator:
        return cls(message_key=config.error_message_key, code_key=config.error_code_key)

    def check(self, status_code: int, body: object) -> None:
        """Raise ProviderError unless status_code is 200.

        Args:
            status_code: HTTP status code
            body: Parsed body (mapping) or raw text

        Raises:
            ProviderError: For any non-200 status
        """
        if status_code == OAuthProtocol.HTTP_OK:
            return

        raw_body: Mapping[str, Any]
        if isinstance(body, Mapping):
            raw_body = body
        elif body in (None, ""):
            raw_body = {}
        else:
            raw_body = {"body": body}

        message = raw_body.get(self.message_key) if isinstance(body, Mapping) else None
        if not isinstance(message, str):
            message = "" if message is None else str(message)

        code = raw_body.get(self.code_key) if isinstance(body, Mapping) else None
        if not isinstance(code, str | int) or isinstance(code, bool) or code == "":
            code = status_code

        _logger.warning("Provider returned HTTP %s: code=%s message=%r", status_code, code, message)
        raise ProviderError(message, code, raw_body)

    def check_response(self, response: HttpResponse) -> Mapping[str, Any] | list[Any] | str:
        """Parse then check a response, returning the parsed body on success."""
        body = parse_response(response)
        self.check(response.status_code, body)
        return body


def require_mapping(body: object, what: str) -> Mapping[str, Any]:
    """Ensure a success body is a JSON object.

    Raises:
        MalformedResponseError: If body is a list, string or scalar
    """
    if not isinstance(body, Mapping):
        raise MalformedResponseError(
            f"{what} response must be a JSON object, got {type(body).__name__}", raw_body=body
        )
    return body


__all__ = [
    "ResponseValidator",
    "parse_response",
    "require_mapping",
]
