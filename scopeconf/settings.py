"""Process-level settings powered by Pydantic BaseSettings."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ScopeconfSettings(BaseSettings):
    """Defaults read from SCOPECONF_* environment variables or `.env`."""

    model_config = SettingsConfigDict(
        env_prefix="SCOPECONF_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    env: str = Field(default="development", min_length=1)
    config_dir: Path = Path("config")
    log_level: str = "INFO"
    log_json: bool = True


def get_settings() -> ScopeconfSettings:
    """Get a settings instance."""
    return ScopeconfSettings()
