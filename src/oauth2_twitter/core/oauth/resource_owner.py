"""Resource owner ("who am I") retrieval.

Twitter wraps the user under a ``data`` envelope
(``{"data": {"id": ..., "name": ..., "username": ...}}``); other
providers return the fields at the top level. Both shapes are accepted.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from .constants import OAuthProtocol
from .exceptions import MalformedResponseError
from .http_client import HttpRequest
from .provider import ProviderConfig
from .response import ResponseValidator, require_mapping
from .tokens import TokenModel

if TYPE_CHECKING:
    from .http_client import CancellationToken, HttpClient

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResourceOwner:
    """Authenticated user as reported by the provider.

    Attributes:
        id: Provider user ID
        name: Display name
        username: Handle
        profile_image_url: Avatar URL
        raw_values: Full response body
    """

    id: str
    name: str | None = None
    username: str | None = None
    profile_image_url: str | None = None
    raw_values: Mapping[str, Any] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "raw_values", MappingProxyType(dict(self.raw_values)))

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> ResourceOwner:
        """Map a parsed resource owner body onto a ResourceOwner.

        Raises:
            MalformedResponseError: If the user object or its id is missing
        """
        fields = select_owner_fields(payload)

        owner_id = fields.get("id")
        if owner_id is None or owner_id == "":
            raise MalformedResponseError(
                "Resource owner response missing required id", raw_body=dict(payload)
            )

        return cls(
            id=str(owner_id),
            name=_optional_str(fields.get("name")),
            username=_optional_str(fields.get("username")),
            profile_image_url=_optional_str(fields.get("profile_image_url")),
            raw_values=payload,
        )

    def to_dict(self) -> dict[str, Any]:
        return dict(self.raw_values)


def _optional_str(value: object) -> str | None:
    return None if value is None else str(value)


def select_owner_fields(payload: Mapping[str, Any]) -> Mapping[str, Any]:
    """Pick the user object: the ``data`` envelope if present, else the payload.

    Raises:
        MalformedResponseError: If ``data`` is present but not an object
    """
    if OAuthProtocol.DATA_ENVELOPE_KEY not in payload:
        return payload

    nested = payload[OAuthProtocol.DATA_ENVELOPE_KEY]
    if not isinstance(nested, Mapping):
        raise MalformedResponseError(
            f"Resource owner 'data' must be an object, got {type(nested).__name__}",
            raw_body=dict(payload),
        )
    return nested


class ResourceOwnerFetcher:
    """Fetch the resource owner for an access token."""

    def __init__(self, http_client: HttpClient) -> None:
        self.http_client = http_client

    @staticmethod
    def build_request(config: ProviderConfig, token: TokenModel) -> HttpRequest:
        return HttpRequest(
            method="GET",
            url=config.resource_owner_url,
            headers={
                "Accept": OAuthProtocol.JSON_CONTENT_TYPE,
                **token.authorization_header(),
            },
        )

    def fetch(
        self,
        config: ProviderConfig,
        token: TokenModel,
        timeout: float | None = None,
        cancel_token: CancellationToken | None = None,
    ) -> ResourceOwner:
        """GET the resource owner endpoint with the bearer token.

        Raises:
            TransportError: If the request could not be completed
            ProviderError: If the provider rejected the token
            MalformedResponseError: If a 200 body is unusable
        """
        request = self.build_request(config, token)
        response = self.http_client.send(request, timeout=timeout, cancel_token=cancel_token)

        body = ResponseValidator.for_provider(config).check_response(response)
        owner = ResourceOwner.from_response(require_mapping(body, "Resource owner"))

        _logger.debug("Fetched resource owner %s from provider %s", owner.id, config.name)
        return owner


__all__ = [
    "ResourceOwner",
    "ResourceOwnerFetcher",
    "select_owner_fields",
]
