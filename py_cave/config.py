"""Configuration management."""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings pulled from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PY_CAVE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="json", description="Logging format (plain or json)")

    # Seeding
    default_seed: Optional[str] = Field(
        default=None, description="Seed used when neither the call nor the preset provides one"
    )
    require_seed: bool = Field(
        default=False, description="Reject unseeded generation instead of falling back to the clock"
    )

    # Generation limits
    max_cave_width: int = Field(default=1024, description="Maximum cave width in tiles")
    max_cave_height: int = Field(default=1024, description="Maximum cave height in tiles")
    max_map_cells: int = Field(default=256, description="Maximum number of cells in a cave map")
    default_preset: str = Field(default="default", description="Preset used when none is named")


settings = Settings()
