"""Authorization URL construction.

Pure string building: no network I/O and no state. The caller keeps the
PKCE verifier and the state value for the callback step.
"""

from __future__ import annotations

import urllib.parse
from collections.abc import Mapping
from dataclasses import dataclass

from .constants import OAuthProtocol
from .pkce import PkcePair
from .provider import ProviderConfig
from .validation import validate_string


@dataclass(frozen=True)
class AuthorizationRequest:
    """Authorization request parameters, in wire order."""

    client_id: str
    redirect_uri: str
    scope: str
    state: str
    code_challenge: str
    code_challenge_method: str
    response_type: str = OAuthProtocol.RESPONSE_TYPE_CODE

    def to_query_params(self) -> dict[str, str]:
        return {
            "response_type": self.response_type,
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "scope": self.scope,
            "state": self.state,
            "code_challenge": self.code_challenge,
            "code_challenge_method": self.code_challenge_method,
        }


def append_query(base_url: str, params: Mapping[str, str]) -> str:
    """Append URL-encoded params, keeping any query the base URL already has."""
    query = urllib.parse.urlencode(params, quote_via=urllib.parse.quote)
    separator = "&" if urllib.parse.urlparse(base_url).query else "?"
    return f"{base_url}{separator}{query}"


class AuthorizationUrlBuilder:
    """Builds the provider authorization URL for the code + PKCE flow."""

    @staticmethod
    def build_request(
        config: ProviderConfig,
        redirect_uri: str,
        state: str,
        pkce: PkcePair,
        scopes: list[str] | tuple[str, ...] | None = None,
    ) -> AuthorizationRequest:
        """Assemble the request parameters.

        Raises:
            InvalidConfigError: If redirect_uri or state is empty
        """
        validate_string(redirect_uri, "redirect_uri")
        validate_string(state, "state")

        return AuthorizationRequest(
            client_id=config.client_id,
            redirect_uri=redirect_uri,
            scope=config.join_scopes(scopes),
            state=state,
            code_challenge=pkce.challenge,
            code_challenge_method=pkce.method.value,
        )

    @classmethod
    def build(
        cls,
        config: ProviderConfig,
        redirect_uri: str,
        state: str,
        pkce: PkcePair,
        scopes: list[str] | tuple[str, ...] | None = None,
        extra_params: Mapping[str, str] | None = None,
    ) -> str:
        """Build the authorization URL.

        Args:
            config: Provider configuration
            redirect_uri: Where the provider sends the user back
            state: Opaque CSRF value echoed back on the redirect
            pkce: PKCE pair whose challenge is sent
            scopes: Scopes to request (provider defaults when empty)
            extra_params: Additional query parameters; keys that are
                already set (including the PKCE ones) are ignored

        Returns:
            Absolute URL to redirect the user to

        Raises:
            InvalidConfigError: If redirect_uri or state is empty
        """
        params = cls.build_request(config, redirect_uri, state, pkce, scopes).to_query_params()

        for key, value in (extra_params or {}).items():
            if key not in params:
                params[key] = str(value)

        return append_query(config.authorization_base_url, params)


__all__ = [
    "AuthorizationRequest",
    "AuthorizationUrlBuilder",
    "append_query",
]
