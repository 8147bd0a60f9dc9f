"""Tests for ProviderConfig validation and the bundled Twitter provider."""

import dataclasses

import pytest

from oauth2_twitter.core.oauth import (
    AuthHeaderStrategy,
    InvalidConfigError,
    PkceMethod,
    ProviderConfig,
    twitter_config,
)
from oauth2_twitter.core.oauth.constants import TwitterEndpoints


def _config(**overrides) -> ProviderConfig:
    values = {
        "authorization_base_url": "https://auth.example.com/authorize",
        "token_base_url": "https://auth.example.com/token",
        "resource_owner_url": "https://api.example.com/me",
        "client_id": "client",
    }
    values.update(overrides)
    return ProviderConfig(**values)


@pytest.mark.unit
class TestTwitterConfig:
    def test_twitter_defaults(self):
        config = twitter_config("id", "secret")

        assert config.authorization_base_url == TwitterEndpoints.AUTHORIZATION_URL
        assert config.token_base_url == "https://api.twitter.com/2/oauth2/token"
        assert config.resource_owner_url.startswith("https://api.twitter.com/2/users/me")
        assert config.default_scopes == ("tweet.read", "users.read", "offline.access")
        assert config.scope_separator == " "
        assert config.pkce_method is PkceMethod.S256
        assert config.auth_header_strategy is AuthHeaderStrategy.BASIC_HEADER
        assert config.name == "twitter"

    def test_overrides(self):
        config = twitter_config("id", "secret", default_scopes=["users.read"])
        assert config.default_scopes == ("users.read",)

    def test_basic_header_requires_secret(self):
        with pytest.raises(InvalidConfigError) as exc_info:
            twitter_config("id", "")
        assert exc_info.value.field == "client_secret"

    def test_secret_not_in_repr(self):
        assert "secret-value" not in repr(twitter_config("id", "secret-value"))

    def test_is_frozen(self):
        config = twitter_config("id", "secret")
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.client_id = "other"


@pytest.mark.unit
class TestProviderConfigValidation:
    @pytest.mark.parametrize(
        "field", ["authorization_base_url", "token_base_url", "resource_owner_url"]
    )
    def test_rejects_plain_http_urls(self, field):
        with pytest.raises(InvalidConfigError, match="HTTPS") as exc_info:
            _config(**{field: "http://auth.example.com/x"})
        assert exc_info.value.field == field

    def test_rejects_relative_url(self):
        with pytest.raises(InvalidConfigError, match="scheme and netloc"):
            _config(token_base_url="/token")

    def test_rejects_empty_client_id(self):
        with pytest.raises(InvalidConfigError) as exc_info:
            _config(client_id="")
        assert exc_info.value.field == "client_id"

    def test_body_params_allows_public_client(self):
        config = _config(auth_header_strategy=AuthHeaderStrategy.BODY_PARAMS)
        assert config.client_secret == ""

    def test_rejects_plain_string_pkce_method(self):
        with pytest.raises(InvalidConfigError) as exc_info:
            _config(pkce_method="S256-ish")
        assert exc_info.value.field == "pkce_method"

    @pytest.mark.parametrize("separator", ["", ", "])
    def test_separator_must_be_one_character(self, separator):
        with pytest.raises(InvalidConfigError) as exc_info:
            _config(scope_separator=separator)
        assert exc_info.value.field == "scope_separator"

    def test_scopes_string_rejected(self):
        with pytest.raises(InvalidConfigError, match="list or tuple"):
            _config(default_scopes="read write")

    def test_empty_scope_entry_rejected(self):
        with pytest.raises(InvalidConfigError) as exc_info:
            _config(default_scopes=["read", ""])
        assert exc_info.value.field == "default_scopes[1]"

    def test_empty_error_key_rejected(self):
        with pytest.raises(InvalidConfigError):
            _config(error_message_key="")

    def test_secret_masked_in_error(self):
        with pytest.raises(InvalidConfigError) as exc_info:
            _config(client_secret=12345, auth_header_strategy=AuthHeaderStrategy.BASIC_HEADER)
        assert "12345" not in str(exc_info.value)


@pytest.mark.unit
class TestScopes:
    def test_join_uses_defaults_when_empty(self):
        config = _config(default_scopes=("read", "write"), scope_separator=",")
        assert config.join_scopes() == "read,write"
        assert config.join_scopes([]) == "read,write"

    def test_join_preserves_order(self):
        config = _config()
        assert config.join_scopes(["b", "a", "c"]) == "b a c"

    def test_split_inverts_join(self):
        config = _config(scope_separator=",")
        assert config.split_scopes(config.join_scopes(["x", "y"])) == ("x", "y")

    def test_split_ignores_empty_parts(self):
        assert _config().split_scopes("a  b") == ("a", "b")
