"""Configuration commands for the oauth2-twitter CLI."""

import typer
from rich.console import Console
from rich.markdown import Markdown
from rich.table import Table

from oauth2_twitter.core.config import ConfigSchema, load_env_var, validate_all
from oauth2_twitter.core.config.validation import ConfigError

app = typer.Typer(help="Configuration management")


@app.command()
def show() -> None:
    """Show the effective configuration (secrets masked)."""
    console = Console()

    table = Table(title="Configuration")
    table.add_column("Variable", style="cyan")
    table.add_column("Value", style="green")

    for _name, spec in sorted(ConfigSchema.all_specs().items()):
        try:
            value = load_env_var(spec)
        except ConfigError as e:
            table.add_row(spec.name, f"[red]{e.message}[/red]")
            continue
        if spec.secret and value:
            shown = "***"
        elif isinstance(value, tuple):
            shown = ", ".join(value) or "(provider defaults)"
        else:
            shown = "-" if value is None else str(value)
        table.add_row(spec.name, shown)

    console.print(table)


@app.command()
def validate() -> None:
    """Validate all environment variables."""
    console = Console()

    errors = validate_all()
    if errors:
        for error in errors:
            console.print(f"[red]❌ {error}[/red]")
        raise typer.Exit(1)

    console.print("[green]✅ Configuration is valid[/green]")


@app.command()
def docs() -> None:
    """Print documentation for all environment variables."""
    Console().print(Markdown(ConfigSchema.generate_markdown_docs()))
