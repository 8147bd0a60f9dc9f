"""
Access token value object.

A TokenModel is parsed from a successful token endpoint response and
never changes afterwards. Refreshing produces a new TokenModel through
the same exchange path; nothing here refreshes in the background.
"""

from __future__ import annotations

import datetime
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from .exceptions import MalformedResponseError

_PARSED_KEYS = frozenset({"access_token", "refresh_token", "expires_in"})


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


@dataclass(frozen=True)
class TokenModel:
    """Tokens returned by the provider.

    Attributes:
        access_token: Bearer token for API calls
        refresh_token: Token for the refresh grant, if issued
        expires_at: UTC expiry computed from ``expires_in``, if given
        raw_values: Every other response key (token_type, scope, ...)
    """

    access_token: str = field(repr=False)
    refresh_token: str | None = field(default=None, repr=False)
    expires_at: datetime.datetime | None = None
    raw_values: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "raw_values", MappingProxyType(dict(self.raw_values)))

    @classmethod
    def from_response(
        cls,
        payload: Mapping[str, Any],
        now: datetime.datetime | None = None,
    ) -> TokenModel:
        """Build a TokenModel from a parsed token endpoint body.

        Args:
            payload: Parsed JSON object from a 200 response
            now: Reference time for ``expires_in`` (defaults to current UTC)

        Raises:
            MalformedResponseError: If access_token is missing or fields
                have the wrong type
        """
        access_token = payload.get("access_token")
        if not isinstance(access_token, str) or not access_token:
            raise MalformedResponseError(
                "Token response missing required access_token", raw_body=dict(payload)
            )

        refresh_token = payload.get("refresh_token")
        if refresh_token is not None and not isinstance(refresh_token, str):
            raise MalformedResponseError(
                f"Token response refresh_token must be a string, got "
                f"{type(refresh_token).__name__}",
                raw_body=dict(payload),
            )

        expires_at = None
        expires_in = payload.get("expires_in")
        if expires_in is not None:
            try:
                seconds = int(expires_in)
                expires_at = (now or _utcnow()) + datetime.timedelta(seconds=seconds)
            except (TypeError, ValueError, OverflowError) as e:
                raise MalformedResponseError(
                    f"Token response expires_in is not a usable number of seconds: "
                    f"{expires_in!r}",
                    raw_body=dict(payload),
                ) from e

        return cls(
            access_token=access_token,
            refresh_token=refresh_token or None,
            expires_at=expires_at,
            raw_values={k: v for k, v in payload.items() if k not in _PARSED_KEYS},
        )

    @property
    def token_type(self) -> str:
        return str(self.raw_values.get("token_type", "bearer"))

    @property
    def scope(self) -> str | None:
        scope = self.raw_values.get("scope")
        return scope if isinstance(scope, str) else None

    def expires_in(self, now: datetime.datetime | None = None) -> float | None:
        """Seconds until expiry (negative once expired), or None if unknown."""
        if self.expires_at is None:
            return None
        return (self.expires_at - (now or _utcnow())).total_seconds()

    def has_expired(self, now: datetime.datetime | None = None) -> bool:
        """True once expires_at has passed. Tokens without expiry never expire."""
        remaining = self.expires_in(now)
        return remaining is not None and remaining <= 0

    def authorization_header(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.access_token}"}

    def to_dict(self) -> dict[str, Any]:
        """Serialize back to a token-response-like mapping."""
        data: dict[str, Any] = dict(self.raw_values)
        data["access_token"] = self.access_token
        if self.refresh_token:
            data["refresh_token"] = self.refresh_token
        if self.expires_at is not None:
            data["expires_at"] = self.expires_at.isoformat()
        return data


__all__ = ["TokenModel"]
