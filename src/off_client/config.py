"""Client configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from off_client.domain.params import ApiVersion, Locale

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

DEFAULT_USER_AGENT = "off-client - Python - https://world.openfoodfacts.org"


class Settings(BaseSettings):
    """Client settings loaded from ``OFF_*`` environment variables."""

    api_version: ApiVersion = ApiVersion.V2
    locale: str = "world"
    user_agent: str = DEFAULT_USER_AGENT
    base_domain: str = "openfoodfacts.org"
    timeout_seconds: float = 15
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_prefix="OFF_",
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    def default_locale(self) -> Locale:
        """Parse the configured locale string."""
        return Locale.parse(self.locale)
