"""Token endpoint requests.

Builds authorization-code and refresh-token grant requests, applies the
provider's client authentication strategy, and turns the response into
a TokenModel. Business logic only: sending goes through HttpClient.
"""

from __future__ import annotations

import base64
import datetime
import logging
import urllib.parse
from typing import TYPE_CHECKING

from .constants import OAuthProtocol
from .http_client import HttpRequest
from .provider import AuthHeaderStrategy, ProviderConfig
from .response import ResponseValidator, require_mapping
from .tokens import TokenModel
from .validation import validate_string

if TYPE_CHECKING:
    from .http_client import CancellationToken, HttpClient

_logger = logging.getLogger(__name__)


def basic_auth_header(client_id: str, client_secret: str) -> str:
    """Value for ``Authorization: Basic base64(client_id:client_secret)``."""
    credentials = f"{client_id}:{client_secret}".encode()
    return f"Basic {base64.b64encode(credentials).decode('ascii')}"


class TokenRequestBuilder:
    """Exchange authorization codes and refresh tokens for access tokens.

    Separates token request construction from HTTP transport, so the
    prepared requests can be inspected without sending them.
    """

    def __init__(self, http_client: HttpClient) -> None:
        """Initialize token request builder.

        Args:
            http_client: HTTP client for making requests
        """
        self.http_client = http_client

    # ------------------------------------------------------------------
    # Request construction
    # ------------------------------------------------------------------

    def build_request(self, config: ProviderConfig, params: dict[str, str]) -> HttpRequest:
        """Build a token endpoint POST with client authentication applied."""
        body = dict(params)
        body["client_id"] = config.client_id

        headers = {
            "Content-Type": OAuthProtocol.FORM_CONTENT_TYPE,
            "Accept": OAuthProtocol.JSON_CONTENT_TYPE,
        }

        if config.auth_header_strategy is AuthHeaderStrategy.BASIC_HEADER:
            headers["Authorization"] = basic_auth_header(config.client_id, config.client_secret)
        elif config.client_secret:
            # public clients (no secret) authenticate with client_id + PKCE only
            body["client_secret"] = config.client_secret

        return HttpRequest(
            method="POST",
            url=config.token_base_url,
            headers=headers,
            data=urllib.parse.urlencode(body).encode(),
        )

    def build_code_request(
        self,
        config: ProviderConfig,
        code: str,
        redirect_uri: str,
        verifier: str,
    ) -> HttpRequest:
        """Build the authorization_code grant request.

        Raises:
            InvalidConfigError: If code, redirect_uri or verifier is empty
        """
        validate_string(code, "code")
        validate_string(redirect_uri, "redirect_uri")
        validate_string(verifier, "verifier", secret=True)

        return self.build_request(
            config,
            {
                "grant_type": OAuthProtocol.GRANT_TYPE_AUTH_CODE,
                "code": code,
                "redirect_uri": redirect_uri,
                "code_verifier": verifier,
            },
        )

    def build_refresh_request(self, config: ProviderConfig, refresh_token: str) -> HttpRequest:
        """Build the refresh_token grant request.

        Raises:
            InvalidConfigError: If refresh_token is empty
        """
        validate_string(refresh_token, "refresh_token", secret=True)

        return self.build_request(
            config,
            {
                "grant_type": OAuthProtocol.GRANT_TYPE_REFRESH_TOKEN,
                "refresh_token": refresh_token,
            },
        )

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def exchange_code(
        self,
        config: ProviderConfig,
        code: str,
        redirect_uri: str,
        verifier: str,
        timeout: float | None = None,
        cancel_token: CancellationToken | None = None,
    ) -> TokenModel:
        """Exchange an authorization code for tokens.

        Args:
            config: Provider configuration
            code: Authorization code from the redirect
            redirect_uri: Same redirect URI used for authorization
            verifier: PKCE verifier matching the challenge that was sent
            timeout: Optional timeout forwarded to the HTTP client
            cancel_token: Optional cancellation flag forwarded to the HTTP client

        Returns:
            TokenModel parsed from the response

        Raises:
            InvalidConfigError: If a required argument is empty
            TransportError: If the request could not be completed
            ProviderError: If the provider rejected the request
            MalformedResponseError: If a 200 body is unusable
        """
        request = self.build_code_request(config, code, redirect_uri, verifier)
        return self._send(config, request, OAuthProtocol.GRANT_TYPE_AUTH_CODE, timeout, cancel_token)

    def refresh(
        self,
        config: ProviderConfig,
        refresh_token: str,
        timeout: float | None = None,
        cancel_token: CancellationToken | None = None,
    ) -> TokenModel:
        """Obtain new tokens with a refresh token.

        Raises:
            Same as exchange_code
        """
        request = self.build_refresh_request(config, refresh_token)
        return self._send(
            config, request, OAuthProtocol.GRANT_TYPE_REFRESH_TOKEN, timeout, cancel_token
        )

    def _send(
        self,
        config: ProviderConfig,
        request: HttpRequest,
        grant_type: str,
        timeout: float | None,
        cancel_token: CancellationToken | None,
    ) -> TokenModel:
        _logger.debug(
            "Requesting %s grant from %s for provider %s",
            grant_type,
            config.token_base_url,
            config.name,
        )

        response = self.http_client.send(request, timeout=timeout, cancel_token=cancel_token)

        validator = ResponseValidator.for_provider(config)
        payload = require_mapping(validator.check_response(response), "Token")

        token = TokenModel.from_response(payload, now=datetime.datetime.now(datetime.timezone.utc))

        _logger.info(
            "Token %s grant succeeded for provider %s (expires_at=%s, refresh_token=%s)",
            grant_type,
            config.name,
            token.expires_at.isoformat() if token.expires_at else "unknown",
            "yes" if token.refresh_token else "no",
        )
        return token


__all__ = [
    "TokenRequestBuilder",
    "basic_auth_header",
]
