"""Application configuration and settings management."""

from typing import Any, Literal, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="SEATRACK_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "SeaTrack Vessel Tracking API"
    api_prefix: str = "/api"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    sea_route_base_url: Optional[str] = Field(
        default=None,
        description="Base URL of a maritime routing service returning GeoJSON LineStrings.",
    )
    sea_route_timeout_seconds: float = Field(default=20.0, gt=0.0)
    sea_route_max_retries: int = Field(default=2, ge=0)
    sea_route_backoff_seconds: float = Field(default=1.0, ge=0.0)
    route_max_points: int = Field(
        default=80,
        ge=2,
        description="Point budget a provider polyline is downsampled to.",
    )
    route_cache_ttl_seconds: float = Field(default=6 * 60 * 60, gt=0.0)
    route_cache_max_entries: int = Field(default=512, ge=1)
    route_cache_precision: int = Field(
        default=2,
        ge=0,
        description="Decimal places used when rounding endpoints into a route cache key.",
    )

    marine_weather_base_url: str = Field(
        default="https://marine-api.open-meteo.com/v1/marine",
        description="Open-Meteo marine endpoint used for wind and wave conditions.",
    )
    weather_timeout_seconds: float = Field(default=10.0, gt=0.0)
    weather_cache_ttl_seconds: float = Field(default=30 * 60, gt=0.0)
    weather_cache_max_entries: int = Field(default=256, ge=1)
    weather_max_parallel_requests: int = Field(default=8, ge=1)
    weather_adjusted_eta: bool = Field(
        default=True,
        description="Fetch marine conditions at the vessel position when estimating arrival.",
    )

    default_speed_knots: float = Field(default=12.0, gt=0.0)
    max_ais_subscriptions: int = Field(default=50, ge=1)

    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

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

    @field_validator("sea_route_base_url", mode="before")
    @classmethod
    def _strip_trailing_slash(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        text = str(value).strip().rstrip("/")
        return text or None


settings = Settings()
