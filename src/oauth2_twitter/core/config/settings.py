"""Runtime settings loaded from the environment.

Settings.load() reads every ConfigSchema entry once; provider_config()
turns the credentials into the Twitter ProviderConfig.
"""

from dataclasses import dataclass, field

from oauth2_twitter.core.config.schema import ConfigSchema
from oauth2_twitter.core.config.validation import ConfigError, load_env_var
from oauth2_twitter.core.oauth.provider import ProviderConfig, twitter_config


@dataclass(frozen=True)
class Settings:
    """Flat view of the environment configuration."""

    client_id: str | None
    client_secret: str | None = field(repr=False)
    redirect_uri: str
    scopes: tuple[str, ...]
    http_timeout: float
    log_level: str

    @classmethod
    def load(cls) -> "Settings":
        """Load settings from environment variables.

        Raises:
            ConfigError: If any variable fails coercion or validation
        """
        return cls(
            client_id=load_env_var(ConfigSchema.TWITTER_CLIENT_ID),
            client_secret=load_env_var(ConfigSchema.TWITTER_CLIENT_SECRET),
            redirect_uri=load_env_var(ConfigSchema.TWITTER_REDIRECT_URI),
            scopes=load_env_var(ConfigSchema.TWITTER_SCOPES),
            http_timeout=load_env_var(ConfigSchema.OAUTH_HTTP_TIMEOUT),
            log_level=load_env_var(ConfigSchema.LOG_LEVEL).split()[0].upper(),
        )

    def provider_config(self) -> ProviderConfig:
        """Build the Twitter ProviderConfig from the loaded credentials.

        Raises:
            ConfigError: If the client ID is not set
            InvalidConfigError: If the resulting config is invalid
        """
        if not self.client_id:
            raise ConfigError(
                ConfigSchema.TWITTER_CLIENT_ID.name, "", "Client ID is required"
            )

        overrides = {"default_scopes": self.scopes} if self.scopes else {}
        return twitter_config(self.client_id, self.client_secret or "", **overrides)
