"""Tests for the oauth2-twitter CLI."""

import logging
import os
import urllib.parse

import httpx
import pytest
from typer.testing import CliRunner

from oauth2_twitter.cli.main import app
from oauth2_twitter.core.oauth import HttpxHttpClient

runner = CliRunner()

# wide enough that rich never wraps the authorization URL
WIDE = {"COLUMNS": "500"}


@pytest.fixture(autouse=True)
def restore_root_logger():
    """The CLI callback reconfigures the root logger; put it back afterwards."""
    root = logging.getLogger()
    saved = (root.level, list(root.handlers))
    yield
    root.setLevel(saved[0])
    root.handlers[:] = saved[1]


@pytest.fixture
def closed_clients(monkeypatch):
    """Record every HttpxHttpClient the CLI closes."""
    closed = []
    original = HttpxHttpClient.close

    def close(self):
        closed.append(self)
        original(self)

    monkeypatch.setattr(HttpxHttpClient, "close", close)
    return closed


@pytest.mark.unit
class TestAuthorizeUrlCommand:
    def test_prints_url_state_and_verifier(self, twitter_env):
        result = runner.invoke(app, ["oauth", "authorize-url", "--state", "fixed-state"], env=WIDE)

        assert result.exit_code == 0, result.output
        url = next(
            line.strip("│ ").strip()
            for line in result.output.splitlines()
            if "https://twitter.com/i/oauth2/authorize?" in line
        )
        query = urllib.parse.parse_qs(urllib.parse.urlparse(url).query)
        assert query["state"] == ["fixed-state"]
        assert query["client_id"] == ["test-client-id"]
        assert query["code_challenge_method"] == ["S256"]
        assert query["scope"] == ["tweet.read users.read offline.access"]
        assert "Code Verifier" in result.output

    def test_scope_option(self, twitter_env):
        result = runner.invoke(
            app, ["oauth", "authorize-url", "-s", "users.read", "-s", "offline.access"], env=WIDE
        )

        assert result.exit_code == 0, result.output
        assert "scope=users.read%20offline.access" in result.output

    def test_missing_client_id(self):
        result = runner.invoke(app, ["oauth", "authorize-url"], env=WIDE)

        assert result.exit_code == 1
        assert "Client ID is required" in result.output


@pytest.mark.unit
class TestExchangeCommand:
    def test_exchange_success(self, twitter_env, mock_twitter_api, twitter_token_response):
        route = mock_twitter_api.post("/2/oauth2/token").mock(
            return_value=httpx.Response(200, json=twitter_token_response)
        )

        result = runner.invoke(
            app, ["oauth", "exchange", "the-code", "--verifier", "v" * 43], env=WIDE
        )

        assert result.exit_code == 0, result.output
        assert "test-access-token" in result.output
        form = dict(urllib.parse.parse_qsl(route.calls.last.request.content.decode()))
        assert form["code"] == "the-code"
        assert form["redirect_uri"] == "https://app.example.com/callback"

    def test_exchange_provider_error(self, twitter_env, mock_twitter_api, twitter_error_response):
        mock_twitter_api.post("/2/oauth2/token").mock(
            return_value=httpx.Response(400, json=twitter_error_response)
        )

        result = runner.invoke(app, ["oauth", "exchange", "bad", "--verifier", "v"], env=WIDE)

        assert result.exit_code == 1
        assert "Token Exchange Error" in result.output
        assert "invalid_request" in result.output

    def test_http_client_closed_after_success(
        self, twitter_env, mock_twitter_api, twitter_token_response, closed_clients
    ):
        mock_twitter_api.post("/2/oauth2/token").mock(
            return_value=httpx.Response(200, json=twitter_token_response)
        )

        result = runner.invoke(app, ["oauth", "exchange", "c", "--verifier", "v" * 43], env=WIDE)

        assert result.exit_code == 0, result.output
        assert len(closed_clients) == 1

    def test_http_client_closed_after_error(
        self, twitter_env, mock_twitter_api, twitter_error_response, closed_clients
    ):
        mock_twitter_api.post("/2/oauth2/token").mock(
            return_value=httpx.Response(400, json=twitter_error_response)
        )

        result = runner.invoke(app, ["oauth", "refresh", "old-refresh"], env=WIDE)

        assert result.exit_code == 1
        assert len(closed_clients) == 1

    def test_refresh_success(self, twitter_env, mock_twitter_api, twitter_token_response):
        route = mock_twitter_api.post("/2/oauth2/token").mock(
            return_value=httpx.Response(200, json=twitter_token_response)
        )

        result = runner.invoke(app, ["oauth", "refresh", "old-refresh"], env=WIDE)

        assert result.exit_code == 0, result.output
        form = dict(urllib.parse.parse_qsl(route.calls.last.request.content.decode()))
        assert form["grant_type"] == "refresh_token"


@pytest.mark.unit
class TestWhoamiCommand:
    def test_whoami(self, twitter_env, mock_twitter_api, twitter_user_response):
        route = mock_twitter_api.get("/2/users/me").mock(
            return_value=httpx.Response(200, json=twitter_user_response)
        )

        result = runner.invoke(app, ["oauth", "whoami", "access"], env=WIDE)

        assert result.exit_code == 0, result.output
        assert "TwitterDev" in result.output
        assert route.calls.last.request.headers["authorization"] == "Bearer access"

    def test_whoami_timeout(self, twitter_env, mock_twitter_api):
        mock_twitter_api.get("/2/users/me").mock(side_effect=httpx.ReadTimeout("slow"))

        result = runner.invoke(app, ["oauth", "whoami", "access"], env=WIDE)

        assert result.exit_code == 1
        assert "timeout" in result.output

    def test_whoami_closes_http_client(
        self, twitter_env, mock_twitter_api, twitter_user_response, closed_clients
    ):
        mock_twitter_api.get("/2/users/me").mock(
            return_value=httpx.Response(200, json=twitter_user_response)
        )

        result = runner.invoke(app, ["oauth", "whoami", "access"], env=WIDE)

        assert result.exit_code == 0, result.output
        assert len(closed_clients) == 1


@pytest.mark.unit
class TestConfigCommands:
    def test_show_masks_secret(self, twitter_env):
        result = runner.invoke(app, ["config", "show"], env=WIDE)

        assert result.exit_code == 0, result.output
        assert "test-client-secret" not in result.output
        assert "***" in result.output

    def test_validate_reports_errors(self):
        os.environ["OAUTH_HTTP_TIMEOUT"] = "never"
        result = runner.invoke(app, ["config", "validate"], env=WIDE)

        assert result.exit_code == 1
        assert "OAUTH_HTTP_TIMEOUT" in result.output

    def test_validate_ok(self):
        result = runner.invoke(app, ["config", "validate"], env=WIDE)

        assert result.exit_code == 0
        assert "Configuration is valid" in result.output

    def test_docs(self):
        result = runner.invoke(app, ["config", "docs"], env=WIDE)

        assert result.exit_code == 0
        assert "TWITTER_CLIENT_ID" in result.output


@pytest.mark.unit
def test_version():
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert "oauth2-twitter" in result.output
