"""
OAuth2 Client Library

Framework-agnostic OAuth 2.0 authorization code + PKCE client engine,
configured per provider by data. Twitter/X ships as the bundled provider.

This library provides:
- Authorization URL construction with PKCE (plain or S256)
- Code and refresh-token exchange with selectable client authentication
- Resource owner retrieval for flat or enveloped user payloads
- One error shape for provider error responses

Basic Usage:
    >>> from oauth2_twitter.core.oauth import OAuthFlow, twitter_config
    >>>
    >>> flow = OAuthFlow(twitter_config(client_id, client_secret))
    >>> start = flow.start("https://app.example.com/callback")
    >>> # Redirect the user to start.url; keep start.state and start.pkce.verifier
    >>>
    >>> token = flow.exchange_code(code, "https://app.example.com/callback",
    ...                            start.pkce.verifier)
    >>> owner = flow.fetch_resource_owner(token)
    >>> print(owner.username)

For Testing:
    >>> from oauth2_twitter.core.oauth import MockHttpClient
    >>> http = MockHttpClient(json_response={"access_token": "T"})
    >>> flow = OAuthFlow(config, http_client=http)
"""

# Authorization URL
from .authorization import AuthorizationRequest, AuthorizationUrlBuilder

# Exceptions
from .exceptions import (
    InvalidConfigError,
    MalformedResponseError,
    OAuthError,
    ProviderError,
    RandomSourceUnavailableError,
    TransportError,
    TransportErrorKind,
)

# HTTP client
from .http_client import (
    CancellationToken,
    HttpClient,
    HttpRequest,
    HttpResponse,
    HttpxHttpClient,
    MockHttpClient,
)

# OAuth flow
from .oauth import AuthorizationStart, OAuthFlow
from .pkce import (
    PkceGenerator,
    PkcePair,
    compute_challenge,
    generate_pkce,
    generate_state,
    verify_challenge,
)
from .provider import AuthHeaderStrategy, PkceMethod, ProviderConfig, twitter_config
from .resource_owner import ResourceOwner, ResourceOwnerFetcher, select_owner_fields
from .response import ResponseValidator
from .token_exchanger import TokenRequestBuilder

# Tokens
from .tokens import TokenModel

__all__ = [
    # Provider
    "ProviderConfig",
    "PkceMethod",
    "AuthHeaderStrategy",
    "twitter_config",
    # OAuth
    "OAuthFlow",
    "AuthorizationStart",
    "AuthorizationRequest",
    "AuthorizationUrlBuilder",
    "TokenRequestBuilder",
    "ResponseValidator",
    "ResourceOwnerFetcher",
    # Models
    "TokenModel",
    "ResourceOwner",
    "PkcePair",
    # Utilities
    "PkceGenerator",
    "generate_pkce",
    "generate_state",
    "compute_challenge",
    "verify_challenge",
    "select_owner_fields",
    # HTTP client
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpxHttpClient",
    "MockHttpClient",
    "CancellationToken",
    # Exceptions
    "OAuthError",
    "InvalidConfigError",
    "RandomSourceUnavailableError",
    "TransportError",
    "TransportErrorKind",
    "ProviderError",
    "MalformedResponseError",
]
