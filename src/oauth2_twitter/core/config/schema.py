"""Declarative schema for environment variable configuration.

This module provides a single source of truth for all environment variables,
including automatic type coercion, validation, and documentation generation.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class EnvVarSpec:
    """Specification for a single environment variable.

    Attributes:
        name: Environment variable name (e.g., "TWITTER_CLIENT_ID")
        default: Default value if env var not set
        type_hint: Type for validation (str, float, tuple)
        description: Human-readable description for docs
        validator: Optional custom validation function
        secret: Value must never be echoed in errors or docs
    """

    name: str
    default: Any
    type_hint: type
    description: str
    validator: Callable[[Any], bool] | None = None
    secret: bool = False


class ConfigSchema:
    """Registry of all configuration environment variables."""

    # === Provider Credentials ===

    TWITTER_CLIENT_ID = EnvVarSpec(
        name="TWITTER_CLIENT_ID",
        default=None,
        type_hint=str,
        description="OAuth 2.0 client ID from the Twitter developer portal",
    )

    TWITTER_CLIENT_SECRET = EnvVarSpec(
        name="TWITTER_CLIENT_SECRET",
        default=None,
        type_hint=str,
        description="OAuth 2.0 client secret (confidential clients only)",
        secret=True,
    )

    # === Flow Settings ===

    TWITTER_REDIRECT_URI = EnvVarSpec(
        name="TWITTER_REDIRECT_URI",
        default="http://127.0.0.1:8765/callback",
        type_hint=str,
        description="Redirect URI registered for the app",
        validator=lambda x: x.startswith(("http://", "https://")),
    )

    TWITTER_SCOPES = EnvVarSpec(
        name="TWITTER_SCOPES",
        default=(),
        type_hint=tuple,
        description="Comma-separated scopes (empty = provider defaults)",
    )

    # === HTTP Settings ===

    OAUTH_HTTP_TIMEOUT = EnvVarSpec(
        name="OAUTH_HTTP_TIMEOUT",
        default=30.0,
        type_hint=float,
        description="Timeout in seconds for token and resource owner requests",
        validator=lambda x: x > 0,
    )

    # === Logging ===

    LOG_LEVEL = EnvVarSpec(
        name="LOG_LEVEL",
        default="INFO",
        type_hint=str,
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        validator=lambda x: x.split()[0].upper()
        in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
    )

    @classmethod
    def all_specs(cls) -> dict[str, EnvVarSpec]:
        """Get all environment variable specifications.

        Returns:
            Dictionary mapping spec names to EnvVarSpec objects
        """
        return {
            name: getattr(cls, name)
            for name in dir(cls)
            if isinstance(getattr(cls, name), EnvVarSpec)
        }

    @classmethod
    def get_spec(cls, name: str) -> EnvVarSpec | None:
        """Get specification for a specific env var by name."""
        for spec in cls.all_specs().values():
            if spec.name == name:
                return spec
        return None

    @classmethod
    def generate_markdown_docs(cls) -> str:
        """Generate Markdown documentation for all environment variables."""
        lines = ["# Configuration Options\n\n"]
        lines.extend(
            [
                "This document is auto-generated from `ConfigSchema`.\n\n",
                "## Environment Variables\n\n",
            ]
        )

        for _name, spec in sorted(cls.all_specs().items()):
            default_repr = f"`{spec.default}`" if spec.default not in (None, ()) else "None"
            lines.extend(
                [
                    f"### `{spec.name}`\n\n",
                    f"- **Type**: `{spec.type_hint.__name__}`\n",
                    f"- **Default**: {default_repr}\n",
                    f"- **Description**: {spec.description}\n\n",
                ]
            )

        return "\n".join(lines)
