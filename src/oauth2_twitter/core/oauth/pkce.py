"""
PKCE (Proof Key for Code Exchange) utilities for OAuth security.

PKCE is an extension to the Authorization Code flow to prevent
authorization code interception attacks. The client sends a challenge
with the authorization request and proves possession of the matching
verifier when it exchanges the code.

The verifier is never stored here: the caller keeps it (typically in
the user's session) between the authorization redirect and the token
exchange.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import secrets
from collections.abc import Callable
from dataclasses import dataclass

from .constants import OAuthDefaults, PkceProtocol
from .exceptions import RandomSourceUnavailableError
from .provider import PkceMethod
from .validation import validate_range

RandomSource = Callable[[int], bytes]

_ALPHABET = PkceProtocol.VERIFIER_ALPHABET
_STATE_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_"


@dataclass(frozen=True)
class PkcePair:
    """PKCE code verifier and challenge pair.

    Attributes:
        verifier: Random string (43-128 unreserved characters)
        challenge: Value derived from the verifier using ``method``
        method: Derivation method
    """

    verifier: str
    challenge: str
    method: PkceMethod = PkceMethod.S256


def compute_challenge(verifier: str, method: PkceMethod) -> str:
    """Derive the code challenge for a verifier.

    RFC 7636 Section 4.2: plain uses the verifier as is; S256 is
    BASE64URL-ENCODE(SHA256(ASCII(code_verifier))) without padding.
    """
    if method is PkceMethod.PLAIN:
        return verifier
    digest = hashlib.sha256(verifier.encode("ascii")).digest()
    return base64.urlsafe_b64encode(digest).rstrip(b"=").decode("ascii")


def verify_challenge(verifier: str, challenge: str, method: PkceMethod) -> bool:
    """Check that a challenge was derived from a verifier."""
    return hmac.compare_digest(compute_challenge(verifier, method), challenge)


def _random_string(random_source: RandomSource, length: int, alphabet: str) -> str:
    # Rejection sampling keeps every character equally likely
    limit = 256 - (256 % len(alphabet))
    chars: list[str] = []
    while len(chars) < length:
        needed = length - len(chars)
        try:
            chunk = random_source(needed)
        except Exception as e:
            raise RandomSourceUnavailableError(f"Secure random source failed: {e}") from e

        if not isinstance(chunk, (bytes, bytearray)) or len(chunk) < needed:
            raise RandomSourceUnavailableError(
                f"Secure random source returned insufficient entropy "
                f"({len(chunk) if isinstance(chunk, (bytes, bytearray)) else 0} of {needed} bytes)"
            )

        chars.extend(alphabet[byte % len(alphabet)] for byte in chunk if byte < limit)

    return "".join(chars[:length])


class PkceGenerator:
    """Generates PKCE pairs for one challenge method.

    Example:
        >>> pkce = PkceGenerator().generate()
        >>> verify_challenge(pkce.verifier, pkce.challenge, PkceMethod.S256)
        True
    """

    def __init__(
        self,
        method: PkceMethod = PkceMethod.S256,
        length: int = PkceProtocol.DEFAULT_VERIFIER_LENGTH,
        random_source: RandomSource = secrets.token_bytes,
    ) -> None:
        """Initialize the generator.

        Args:
            method: Challenge derivation method
            length: Verifier length, 43 to 128 characters
            random_source: Returns n cryptographically secure random bytes

        Raises:
            InvalidConfigError: If length is outside 43-128
        """
        validate_range(
            length,
            "length",
            min_value=PkceProtocol.MIN_VERIFIER_LENGTH,
            max_value=PkceProtocol.MAX_VERIFIER_LENGTH,
        )
        self.method = method
        self.length = int(length)
        self._random_source = random_source

    def generate(self) -> PkcePair:
        """Generate a fresh verifier and its challenge.

        Raises:
            RandomSourceUnavailableError: If the random source fails
        """
        verifier = _random_string(self._random_source, self.length, _ALPHABET)
        return PkcePair(
            verifier=verifier,
            challenge=compute_challenge(verifier, self.method),
            method=self.method,
        )

    def generate_state(self, length: int = OAuthDefaults.STATE_LENGTH) -> str:
        """Generate an unguessable state value for CSRF protection."""
        return _random_string(self._random_source, length, _STATE_ALPHABET)


def generate_pkce(method: PkceMethod = PkceMethod.S256) -> PkcePair:
    """Generate a PKCE pair with the default verifier length."""
    return PkceGenerator(method=method).generate()


def generate_state() -> str:
    """Generate a random state parameter."""
    return PkceGenerator().generate_state()


__all__ = [
    "PkcePair",
    "PkceGenerator",
    "RandomSource",
    "compute_challenge",
    "verify_challenge",
    "generate_pkce",
    "generate_state",
]
