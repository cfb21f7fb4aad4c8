"""Application configuration and settings management."""

from pathlib import Path
from typing import Any

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="FLEET_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Fleet Route Planner API"
    api_prefix: str = "/api"
    log_level: str = "INFO"
    sites_file: Path = Field(
        default=Path("data/sites.json"),
        description="Site records with coordinates and pending transport tasks.",
    )
    depot_latitude: float = Field(default=-37.7950, description="Latitude of the main depot.")
    depot_longitude: float = Field(default=144.9631, description="Longitude of the main depot.")
    default_vehicle_count: int = Field(default=4, ge=1)
    weekly_priority_capacity: int = Field(
        default=43,
        ge=0,
        description="Maximum number of sites routed in one optimization cycle.",
    )
    generations: int = Field(default=10, ge=1)
    population_size: int = Field(default=8, ge=1)
    member_randomness_step: float = Field(
        default=0.3,
        ge=0.0,
        description="Extra randomness per population member index (1 + index * step).",
    )
    progress_delay_ms: int = Field(
        default=500,
        ge=0,
        description="Pause between generations so a consuming UI can render each snapshot.",
    )
    two_opt_epsilon_km: float = Field(default=0.01, ge=0.0)
    alternative_population_size: int = Field(default=8, ge=1)
    alternative_two_opt_budget: int = Field(default=100, ge=0)
    alternative_randomness: float = Field(default=0.3, ge=0.0, le=1.0)
    max_alternatives: int = Field(default=3, ge=0)
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    @field_validator("sites_file", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Path:
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()

    @property
    def progress_delay_seconds(self) -> float:
        return self.progress_delay_ms / 1000.0


settings = Settings()
