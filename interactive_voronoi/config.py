"""Configuration management."""

from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigError

DEFAULT_WINDOW_WIDTH = 1280
DEFAULT_WINDOW_HEIGHT = 720
DEFAULT_RANDOM_COUNT = 50


class Settings(BaseSettings):
    """Demo settings pulled from CLI flags, environment variables and .env."""

    model_config = SettingsConfigDict(
        env_prefix="INTERACTIVE_VORONOI_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Window
    width: int = Field(default=DEFAULT_WINDOW_WIDTH, gt=0, description="Drawing area width in pixels")
    height: int = Field(default=DEFAULT_WINDOW_HEIGHT, gt=0, description="Drawing area height in pixels")

    # Diagram
    lines_only: bool = Field(default=False, description="Start in wireframe mode")
    random_count: int = Field(
        default=DEFAULT_RANDOM_COUNT, ge=0, description="Points placed by the R key"
    )
    json_path: Optional[Path] = Field(default=None, description="JSON file with the initial points")
    seed: Optional[int] = Field(default=None, description="Seed for random points and colors")

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING", description="Logging level"
    )
    log_format: Literal["console", "json"] = Field(
        default="console", description="Logging format"
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value


def load_settings(**overrides) -> Settings:
    """Build settings, letting explicit non-None overrides beat the environment.

    Raises:
        ConfigError: if any value fails validation
    """
    values = {key: value for key, value in overrides.items() if value is not None}
    try:
        return Settings(**values)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
