from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class WebStorageSettings(BaseSettings):
    """Configuration for the web storage size manager"""

    data_path: str = "."
    app_cache_path: str | None = Field(None, description="Directory holding ApplicationCache.db, defaults to data_path")
    # Debug-only replacement for the computed global limit
    global_limit_override: int | None = Field(None, ge=0)
    settings_url: str = "/settings/storage"
    log_level: str = "INFO"
    decision_log_level: str | None = Field(None, description="Level of the quota decision logs, defaults to log_level")
    event_log_level: str | None = Field(None, description="Level of the structured event stream")

    model_config = SettingsConfigDict(
        env_prefix="WEBSTORAGE_",
        env_file=".env",
        extra="ignore",
    )

    @property
    def resolved_app_cache_path(self) -> str:
        return self.app_cache_path or self.data_path


@lru_cache(maxsize=1)
def get_settings() -> WebStorageSettings:
    """Get cached web storage settings."""
    return WebStorageSettings()
