"""OAuth commands for the oauth2-twitter CLI."""

import json
from collections.abc import Iterator
from contextlib import contextmanager

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from oauth2_twitter.core.config import ConfigError, Settings
from oauth2_twitter.core.oauth import (
    HttpxHttpClient,
    OAuthError,
    OAuthFlow,
    ProviderError,
    TokenModel,
)

app = typer.Typer(help="OAuth 2.0 authorization code + PKCE flow")


def _error_panel(console: Console, title: str, error: Exception) -> None:
    details = f"Error: {error}"
    if isinstance(error, ProviderError) and error.raw_body:
        details += f"\n\nResponse: {json.dumps(dict(error.raw_body), indent=2, default=str)}"
    console.print(Panel(f"[red]{escape(details)}[/red]", title=title, border_style="red"))


@contextmanager
def _open_flow(settings: Settings) -> Iterator[OAuthFlow]:
    """Yield a flow whose HTTP client is closed when the command finishes."""
    with HttpxHttpClient(timeout=settings.http_timeout) as http:
        yield OAuthFlow(settings.provider_config(), http_client=http, timeout=settings.http_timeout)


def _token_table(token: TokenModel) -> Table:
    table = Table(title="Access Token")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Access Token", token.access_token)
    table.add_row("Refresh Token", token.refresh_token or "-")
    table.add_row("Expires At", token.expires_at.isoformat() if token.expires_at else "Unknown")
    table.add_row("Token Type", token.token_type)
    table.add_row("Scope", token.scope or "-")
    return table


@app.command("authorize-url")
def authorize_url(
    redirect_uri: str = typer.Option(None, "--redirect-uri", help="Override the redirect URI"),
    scope: list[str] = typer.Option(None, "--scope", "-s", help="Scope to request (repeatable)"),
    state: str = typer.Option(None, "--state", help="State value (random if omitted)"),
) -> None:
    """Print an authorization URL plus the state and PKCE verifier to keep.

    Example:
        oauth2-twitter oauth authorize-url --scope tweet.read --scope users.read
    """
    console = Console()

    try:
        settings = Settings.load()
        with _open_flow(settings) as flow:
            start = flow.start(
                redirect_uri or settings.redirect_uri,
                scopes=scope or None,
                state=state,
            )
    except (ConfigError, OAuthError) as e:
        _error_panel(console, "Authorization URL Error", e)
        raise typer.Exit(1) from None

    console.print(Panel(start.url, title="Open this URL to authorize", border_style="cyan"))

    table = Table(title="Keep these for the token exchange")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("State", start.state)
    table.add_row("Code Verifier", start.pkce.verifier)
    table.add_row("Challenge Method", start.pkce.method.value)
    console.print(table)


@app.command()
def exchange(
    code: str = typer.Argument(..., help="Authorization code from the redirect"),
    verifier: str = typer.Option(..., "--verifier", help="PKCE code verifier from authorize-url"),
    redirect_uri: str = typer.Option(None, "--redirect-uri", help="Override the redirect URI"),
) -> None:
    """Exchange an authorization code for tokens.

    Example:
        oauth2-twitter oauth exchange CODE --verifier VERIFIER
    """
    console = Console()

    try:
        settings = Settings.load()
        with _open_flow(settings) as flow:
            token = flow.exchange_code(code, redirect_uri or settings.redirect_uri, verifier)
    except (ConfigError, OAuthError) as e:
        _error_panel(console, "Token Exchange Error", e)
        raise typer.Exit(1) from None

    console.print(_token_table(token))


@app.command()
def refresh(
    refresh_token: str = typer.Argument(..., help="Refresh token from a previous exchange"),
) -> None:
    """Exchange a refresh token for new tokens."""
    console = Console()

    try:
        settings = Settings.load()
        with _open_flow(settings) as flow:
            token = flow.refresh(refresh_token)
    except (ConfigError, OAuthError) as e:
        _error_panel(console, "Token Refresh Error", e)
        raise typer.Exit(1) from None

    console.print(_token_table(token))


@app.command()
def whoami(
    access_token: str = typer.Argument(..., help="Access token"),
) -> None:
    """Show the resource owner for an access token."""
    console = Console()

    try:
        settings = Settings.load()
        with _open_flow(settings) as flow:
            owner = flow.fetch_resource_owner(TokenModel(access_token=access_token))
    except (ConfigError, OAuthError) as e:
        _error_panel(console, "Resource Owner Error", e)
        raise typer.Exit(1) from None

    table = Table(title="Resource Owner")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("ID", owner.id)
    table.add_row("Name", owner.name or "-")
    table.add_row("Username", owner.username or "-")
    table.add_row("Profile Image", owner.profile_image_url or "-")
    console.print(table)
