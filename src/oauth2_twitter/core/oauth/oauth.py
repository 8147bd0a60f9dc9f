"""OAuth 2.0 authorization code + PKCE flow for one provider.

This module binds a ProviderConfig to the engine components. It holds
no per-user state: the caller stores the state and verifier returned by
start() until the provider redirects back.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field

from .authorization import AuthorizationUrlBuilder
from .http_client import CancellationToken, HttpClient, HttpxHttpClient
from .pkce import PkceGenerator, PkcePair
from .provider import ProviderConfig
from .resource_owner import ResourceOwner, ResourceOwnerFetcher
from .token_exchanger import TokenRequestBuilder
from .tokens import TokenModel

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthorizationStart:
    """Everything the caller must keep between redirect and callback.

    Attributes:
        url: Authorization URL to send the user to
        state: CSRF value to compare with the callback's ``state``
        pkce: PKCE pair; the verifier is needed for the code exchange
    """

    url: str
    state: str
    pkce: PkcePair = field(repr=False)


class OAuthFlow:
    """High-level flow manager for a single provider.

    Example:
        >>> from oauth2_twitter.core.oauth import OAuthFlow, twitter_config
        >>> flow = OAuthFlow(twitter_config("client-id", "client-secret"))
        >>> start = flow.start("https://app.example.com/callback")
        >>> # redirect the user to start.url, keep start.state and start.pkce.verifier
        >>> token = flow.exchange_code(code, "https://app.example.com/callback",
        ...                            start.pkce.verifier)
        >>> owner = flow.fetch_resource_owner(token)
    """

    def __init__(
        self,
        config: ProviderConfig,
        http_client: HttpClient | None = None,
        pkce_generator: PkceGenerator | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize OAuth flow.

        Args:
            config: Provider configuration
            http_client: HTTP client for token and resource owner requests
                (uses HttpxHttpClient if None)
            pkce_generator: PKCE generator (uses config.pkce_method if None)
            timeout: Default timeout for requests, overridable per call
        """
        self.config = config
        self.http_client = http_client or HttpxHttpClient()
        self.pkce_generator = pkce_generator or PkceGenerator(method=config.pkce_method)
        self.timeout = timeout

        self._tokens = TokenRequestBuilder(self.http_client)
        self._owners = ResourceOwnerFetcher(self.http_client)

    def start(
        self,
        redirect_uri: str,
        scopes: list[str] | tuple[str, ...] | None = None,
        state: str | None = None,
        extra_params: Mapping[str, str] | None = None,
    ) -> AuthorizationStart:
        """Generate PKCE (and state if not given) and build the authorization URL.

        Raises:
            InvalidConfigError: If redirect_uri is empty
            RandomSourceUnavailableError: If PKCE or state generation fails
        """
        pkce = self.pkce_generator.generate()
        state = state or self.pkce_generator.generate_state()

        url = AuthorizationUrlBuilder.build(
            self.config,
            redirect_uri,
            state,
            pkce,
            scopes=scopes,
            extra_params=extra_params,
        )

        _logger.info("Generated authorization URL for provider %s", self.config.name)
        return AuthorizationStart(url=url, state=state, pkce=pkce)

    def get_auth_url(
        self,
        redirect_uri: str,
        state: str,
        pkce: PkcePair,
        scopes: list[str] | tuple[str, ...] | None = None,
        extra_params: Mapping[str, str] | None = None,
    ) -> str:
        """Build the authorization URL from caller-supplied state and PKCE."""
        return AuthorizationUrlBuilder.build(
            self.config, redirect_uri, state, pkce, scopes=scopes, extra_params=extra_params
        )

    def exchange_code(
        self,
        code: str,
        redirect_uri: str,
        verifier: str,
        timeout: float | None = None,
        cancel_token: CancellationToken | None = None,
    ) -> TokenModel:
        return self._tokens.exchange_code(
            self.config,
            code,
            redirect_uri,
            verifier,
            timeout=timeout if timeout is not None else self.timeout,
            cancel_token=cancel_token,
        )

    def refresh(
        self,
        refresh_token: str,
        timeout: float | None = None,
        cancel_token: CancellationToken | None = None,
    ) -> TokenModel:
        return self._tokens.refresh(
            self.config,
            refresh_token,
            timeout=timeout if timeout is not None else self.timeout,
            cancel_token=cancel_token,
        )

    def fetch_resource_owner(
        self,
        token: TokenModel,
        timeout: float | None = None,
        cancel_token: CancellationToken | None = None,
    ) -> ResourceOwner:
        return self._owners.fetch(
            self.config,
            token,
            timeout=timeout if timeout is not None else self.timeout,
            cancel_token=cancel_token,
        )


__all__ = [
    "AuthorizationStart",
    "OAuthFlow",
]
