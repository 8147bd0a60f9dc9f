"""
Centralized constants for the OAuth engine.

Constants are grouped by:
- Provider defaults: Endpoints and scopes of the bundled Twitter provider
- Configurable defaults: Values users may want to override
- Protocol constants: Fixed by OAuth/PKCE specifications
- Validation limits: Valid ranges for parameters
"""

from __future__ import annotations

# =============================================================================
# PROVIDER DEFAULTS
# =============================================================================


class TwitterEndpoints:
    """Endpoints and defaults of the Twitter/X OAuth 2.0 authorization server.

    The resource owner URL requests the user fields mapped onto
    ResourceOwner, since the API only returns id/name/username otherwise.
    """

    AUTHORIZATION_URL = "https://twitter.com/i/oauth2/authorize"
    TOKEN_URL = "https://api.twitter.com/2/oauth2/token"
    RESOURCE_OWNER_URL = (
        "https://api.twitter.com/2/users/me?user.fields=id,name,username,profile_image_url"
    )

    # Only what is needed to read the resource owner and keep a refresh token
    DEFAULT_SCOPES = ("tweet.read", "users.read", "offline.access")
    SCOPE_SEPARATOR = " "


# =============================================================================
# CONFIGURABLE DEFAULTS
# =============================================================================


class OAuthDefaults:
    """Default values for engine configuration."""

    # HTTP request timeout (seconds)
    HTTP_REQUEST_TIMEOUT = 30.0

    # Provider error body keys
    ERROR_MESSAGE_KEY = "error_description"
    ERROR_CODE_KEY = "code"

    # Length of generated state values (characters)
    STATE_LENGTH = 32


# =============================================================================
# PROTOCOL CONSTANTS (Fixed by Standards)
# =============================================================================


class OAuthProtocol:
    """Constants defined by OAuth 2.0 (RFC 6749)."""

    HTTP_OK = 200

    RESPONSE_TYPE_CODE = "code"

    GRANT_TYPE_AUTH_CODE = "authorization_code"
    GRANT_TYPE_REFRESH_TOKEN = "refresh_token"

    FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
    JSON_CONTENT_TYPE = "application/json"

    # Response key under which Twitter nests resource owner fields
    DATA_ENVELOPE_KEY = "data"


class PkceProtocol:
    """Constants defined by PKCE (RFC 7636).

    Code verifier requirements (RFC 7636 Section 4.1):
    - Must be 43-128 characters
    - Using unreserved characters (A-Z, a-z, 0-9, -, ., _, ~)
    """

    VERIFIER_ALPHABET = (
        "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-._~"
    )

    MIN_VERIFIER_LENGTH = 43
    MAX_VERIFIER_LENGTH = 128
    DEFAULT_VERIFIER_LENGTH = 128

    METHOD_PLAIN = "plain"
    METHOD_S256 = "S256"


# =============================================================================
# VALIDATION RANGES
# =============================================================================


class ValidationLimits:
    """Valid ranges for user-configurable parameters."""

    SCOPE_SEPARATOR_LENGTH = 1


__all__ = [
    "TwitterEndpoints",
    "OAuthDefaults",
    "OAuthProtocol",
    "PkceProtocol",
    "ValidationLimits",
]
