"""Application settings using pydantic-settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CYCLING_PORTAL_",
        case_sensitive=False,
    )

    # Stage rules
    min_stage_length_km: float = Field(default=5.0, gt=0)

    # Finishers whose consecutive gap is below this share the group's time
    group_gap_seconds: float = Field(default=1.0, ge=0)

    # Application paths
    state_path: str = "data/portal.json"

    # Logging
    log_level: str = "INFO"
    debug: bool = False

    @property
    def state_file(self) -> Path:
        """Get saved state path as Path object."""
        return Path(self.state_path)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
