"""Store configuration.

Values come from ``BUNDLESYNC_*`` environment variables or a ``.env``
file. The object is built once by the composition root and handed to the
sale triggers explicitly; nothing in the core reads the environment.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from bundlesync.domain.exceptions import ConfigurationError


class StoreConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="BUNDLESYNC_",
        env_file=".env",
        extra="ignore",
    )

    # Storefront identity
    store_hash: str = ""
    access_token: str = ""

    # Local adapters
    data_dir: Path = Path("data")

    log_level: str = "INFO"

    def require_credentials(self) -> None:
        """Raise ConfigurationError unless store identity and credential are set."""
        missing = [
            name
            for name, value in (("store_hash", self.store_hash), ("access_token", self.access_token))
            if not value
        ]
        if missing:
            raise ConfigurationError(
                f"Missing store configuration: {', '.join(missing)}"
            )


@lru_cache()
def get_config() -> StoreConfig:
    return StoreConfig()
