"""Tests for PKCE verifier, challenge and state generation."""

import base64
import hashlib

import pytest

from oauth2_twitter.core.oauth import (
    InvalidConfigError,
    PkceGenerator,
    PkceMethod,
    RandomSourceUnavailableError,
    compute_challenge,
    generate_pkce,
    generate_state,
    verify_challenge,
)
from oauth2_twitter.core.oauth.constants import PkceProtocol


@pytest.mark.unit
class TestComputeChallenge:
    def test_s256_matches_rfc7636_appendix_b(self):
        verifier = "dBjftJeZ4CVP-mB92K27uhbUJU1p1r_wW1gFWFOEjXk"
        assert (
            compute_challenge(verifier, PkceMethod.S256)
            == "E9Melhoa2OwvFrEMTJguCHaoeK1t8URWbuGJSstw-cM"
        )

    def test_s256_is_unpadded_base64url_of_sha256(self):
        verifier = "a" * 43
        expected = (
            base64.urlsafe_b64encode(hashlib.sha256(verifier.encode()).digest())
            .rstrip(b"=")
            .decode()
        )
        challenge = compute_challenge(verifier, PkceMethod.S256)
        assert challenge == expected
        assert "=" not in challenge

    def test_plain_returns_verifier(self):
        assert compute_challenge("x" * 43, PkceMethod.PLAIN) == "x" * 43

    def test_verify_challenge(self):
        pair = generate_pkce()
        assert verify_challenge(pair.verifier, pair.challenge, PkceMethod.S256)
        assert not verify_challenge(pair.verifier + "x", pair.challenge, PkceMethod.S256)


@pytest.mark.unit
class TestPkceGenerator:
    def test_default_verifier_length_and_charset(self):
        pair = PkceGenerator().generate()
        assert len(pair.verifier) == PkceProtocol.DEFAULT_VERIFIER_LENGTH
        assert set(pair.verifier) <= set(PkceProtocol.VERIFIER_ALPHABET)

    def test_s256_pair_verifies(self):
        pair = PkceGenerator(method=PkceMethod.S256).generate()
        assert pair.method is PkceMethod.S256
        assert pair.challenge == compute_challenge(pair.verifier, PkceMethod.S256)

    def test_plain_pair_challenge_equals_verifier(self):
        pair = PkceGenerator(method=PkceMethod.PLAIN).generate()
        assert pair.method is PkceMethod.PLAIN
        assert pair.challenge == pair.verifier

    @pytest.mark.parametrize("length", [43, 64, 128])
    def test_accepts_lengths_in_range(self, length):
        assert len(PkceGenerator(length=length).generate().verifier) == length

    @pytest.mark.parametrize("length", [42, 129, 0])
    def test_rejects_lengths_out_of_range(self, length):
        with pytest.raises(InvalidConfigError) as exc_info:
            PkceGenerator(length=length)
        assert exc_info.value.field == "length"

    def test_successive_verifiers_differ(self):
        generator = PkceGenerator()
        assert generator.generate().verifier != generator.generate().verifier

    def test_uses_injected_random_source(self):
        # byte 0 maps to the first alphabet character
        generator = PkceGenerator(length=43, random_source=lambda n: bytes(n))
        assert generator.generate().verifier == PkceProtocol.VERIFIER_ALPHABET[0] * 43

    def test_rejected_bytes_are_resampled(self):
        # 255 is above the rejection limit for a 66 character alphabet
        calls = []

        def source(n):
            calls.append(n)
            return bytes([255] * n) if len(calls) == 1 else bytes([1] * n)

        verifier = PkceGenerator(length=43, random_source=source).generate().verifier
        assert verifier == PkceProtocol.VERIFIER_ALPHABET[1] * 43
        assert len(calls) == 2

    def test_random_source_failure_is_wrapped(self):
        def broken(n):
            raise OSError("no entropy")

        with pytest.raises(RandomSourceUnavailableError, match="no entropy"):
            PkceGenerator(random_source=broken).generate()

    def test_short_random_read_is_rejected(self):
        with pytest.raises(RandomSourceUnavailableError, match="insufficient entropy"):
            PkceGenerator(random_source=lambda n: b"\x01").generate()


@pytest.mark.unit
class TestGenerateState:
    def test_state_is_url_safe_and_32_chars(self):
        state = generate_state()
        assert len(state) == 32
        assert all(c.isalnum() or c in "-_" for c in state)

    def test_states_differ(self):
        assert generate_state() != generate_state()

    def test_custom_length(self):
        assert len(PkceGenerator().generate_state(length=48)) == 48
