"""Provider configuration for the OAuth engine.

A provider is described by data, not by a subclass: endpoints, scopes,
PKCE method, how client credentials reach the token endpoint, and which
keys carry error details. Adding a provider means constructing another
ProviderConfig.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from .constants import OAuthDefaults, PkceProtocol, TwitterEndpoints, ValidationLimits
from .exceptions import InvalidConfigError
from .validation import validate_scopes, validate_string, validate_type, validate_url


class PkceMethod(str, enum.Enum):
    """PKCE code challenge method, valued by its wire string."""

    PLAIN = PkceProtocol.METHOD_PLAIN
    S256 = PkceProtocol.METHOD_S256


class AuthHeaderStrategy(str, enum.Enum):
    """Where client credentials go on token requests.

    BASIC_HEADER: ``Authorization: Basic base64(id:secret)``, no secret in body.
    BODY_PARAMS: ``client_secret`` form field, no Authorization header.
    """

    BASIC_HEADER = "basic_header"
    BODY_PARAMS = "body_params"


@dataclass(frozen=True)
class ProviderConfig:
    """Immutable provider description passed to every engine operation.

    Attributes:
        authorization_base_url: Where the user is sent to authorize (HTTPS)
        token_base_url: Token endpoint for code exchange and refresh (HTTPS)
        resource_owner_url: "Who am I" endpoint (HTTPS)
        client_id: OAuth client ID
        client_secret: OAuth client secret (never logged or repr'd)
        default_scopes: Scopes requested when the caller passes none
        scope_separator: Single character joining scopes
        pkce_method: Challenge derivation method
        auth_header_strategy: Client credential placement on token requests
        error_message_key: Error body key holding the message
        error_code_key: Error body key holding the code
        name: Label for log lines

    Raises:
        InvalidConfigError: If any field fails validation
    """

    authorization_base_url: str
    token_base_url: str
    resource_owner_url: str
    client_id: str
    client_secret: str = field(default="", repr=False)
    default_scopes: tuple[str, ...] = ()
    scope_separator: str = " "
    pkce_method: PkceMethod = PkceMethod.S256
    auth_header_strategy: AuthHeaderStrategy = AuthHeaderStrategy.BODY_PARAMS
    error_message_key: str = OAuthDefaults.ERROR_MESSAGE_KEY
    error_code_key: str = OAuthDefaults.ERROR_CODE_KEY
    name: str = "oauth2"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        validate_url(self.authorization_base_url, "authorization_base_url", require_https=True)
        validate_url(self.token_base_url, "token_base_url", require_https=True)
        validate_url(self.resource_owner_url, "resource_owner_url", require_https=True)
        validate_string(self.client_id, "client_id")

        validate_type(self.pkce_method, PkceMethod, "pkce_method")
        validate_type(self.auth_header_strategy, AuthHeaderStrategy, "auth_header_strategy")

        validate_string(
            self.client_secret,
            "client_secret",
            allow_empty=self.auth_header_strategy is not AuthHeaderStrategy.BASIC_HEADER,
            secret=True,
        )

        # frozen: normalise lists to tuples through object.__setattr__
        object.__setattr__(
            self, "default_scopes", validate_scopes(self.default_scopes, "default_scopes")
        )

        validate_string(self.scope_separator, "scope_separator")
        if len(self.scope_separator) != ValidationLimits.SCOPE_SEPARATOR_LENGTH:
            raise InvalidConfigError(
                "scope_separator", self.scope_separator, "must be a single character"
            )

        validate_string(self.error_message_key, "error_message_key")
        validate_string(self.error_code_key, "error_code_key")

    def join_scopes(self, scopes: list[str] | tuple[str, ...] | None = None) -> str:
        """Join scopes with the separator, falling back to the defaults."""
        chosen = validate_scopes(scopes, "scopes") if scopes else self.default_scopes
        return self.scope_separator.join(chosen)

    def split_scopes(self, scope: str) -> tuple[str, ...]:
        """Inverse of join_scopes for a scope string returned by the provider."""
        return tuple(part for part in scope.split(self.scope_separator) if part)


def twitter_config(client_id: str, client_secret: str, **overrides: object) -> ProviderConfig:
    """Build the ProviderConfig for Twitter/X OAuth 2.0.

    Twitter requires HTTP Basic client authentication on the token
    endpoint and S256 PKCE. Any field may be overridden by keyword.

    Example:
        >>> config = twitter_config("my-client-id", "my-client-secret")
        >>> config.default_scopes
        ('tweet.read', 'users.read', 'offline.access')
    """
    values: dict[str, object] = {
        "authorization_base_url": TwitterEndpoints.AUTHORIZATION_URL,
        "token_base_url": TwitterEndpoints.TOKEN_URL,
        "resource_owner_url": TwitterEndpoints.RESOURCE_OWNER_URL,
        "client_id": client_id,
        "client_secret": client_secret,
        "default_scopes": TwitterEndpoints.DEFAULT_SCOPES,
        "scope_separator": TwitterEndpoints.SCOPE_SEPARATOR,
        "pkce_method": PkceMethod.S256,
        "auth_header_strategy": AuthHeaderStrategy.BASIC_HEADER,
        "name": "twitter",
    }
    values.update(overrides)
    return ProviderConfig(**values)  # type: ignore[arg-type]


__all__ = [
    "PkceMethod",
    "AuthHeaderStrategy",
    "ProviderConfig",
    "twitter_config",
]
