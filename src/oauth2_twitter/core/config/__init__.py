"""Environment-driven configuration."""

from oauth2_twitter.core.config.schema import ConfigSchema, EnvVarSpec
from oauth2_twitter.core.config.settings import Settings
from oauth2_twitter.core.config.validation import ConfigError, load_env_var, validate_all

__all__ = [
    "ConfigSchema",
    "EnvVarSpec",
    "ConfigError",
    "Settings",
    "load_env_var",
    "validate_all",
]
