"""Main CLI entry point for oauth2-twitter."""

import os

import typer
from rich.console import Console

from oauth2_twitter.cli.commands import config, oauth
from oauth2_twitter.core.config import ConfigSchema
from oauth2_twitter.core.logging import configure_root_logging

app = typer.Typer(
    name="oauth2-twitter",
    help="Twitter/X OAuth 2.0 (authorization code + PKCE) helper",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.add_typer(oauth.app, name="oauth", help="Authorization, token exchange and whoami")
app.add_typer(config.app, name="config", help="Configuration management")


@app.command()
def version() -> None:
    """Show version information."""
    from oauth2_twitter import __version__

    console = Console()
    console.print(f"[bold cyan]oauth2-twitter[/bold cyan] version [green]{__version__}[/green]")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """oauth2-twitter CLI."""
    if verbose:
        configure_root_logging("DEBUG")
    else:
        # normalize_log_level falls back to INFO; `config validate` reports bad values
        configure_root_logging(os.environ.get(ConfigSchema.LOG_LEVEL.name))


if __name__ == "__main__":
    app()
