"""Application configuration and settings management."""

from pathlib import Path
from typing import Any, Literal, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="EVP_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "EV Trip Planner API"
    api_prefix: str = "/api"
    data_root: Path = Field(default=Path("data"), description="Root directory for static data files.")
    station_file: Path = Field(
        default=Path("data/charging_stations.csv"),
        description="Station snapshot used when the station directory database is unavailable.",
    )

    # Planner constants
    search_radius_km: float = Field(default=50.0, gt=0.0)
    safety_buffer_pct: float = Field(default=20.0, ge=0.0, le=100.0)
    max_departure_soc_pct: float = Field(default=90.0, gt=0.0, le=100.0)
    min_charging_minutes: float = Field(default=15.0, ge=0.0)
    average_speed_kmh: float = Field(default=80.0, gt=0.0)
    max_planning_iterations: int = Field(default=50, ge=1)
    default_strategy: Literal["nearest", "cheapest", "fastest", "availability"] = Field(
        default="nearest",
        description="Candidate scoring rule used when a request does not name one.",
    )

    # Vehicle defaults applied to fields a request leaves out
    default_battery_capacity_kwh: float = Field(default=75.0, gt=0.0)
    default_max_range_km: float = Field(default=400.0, gt=0.0)
    default_efficiency_km_per_kwh: float = Field(default=5.3, gt=0.0)
    default_max_charging_power_kw: float = Field(default=150.0, gt=0.0)
    default_current_soc_pct: float = Field(default=80.0, ge=0.0, le=100.0)
    default_target_soc_pct: float = Field(default=20.0, ge=0.0, le=100.0)

    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:8080",
            "http://127.0.0.1:8080",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    # Supabase configuration
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL (e.g., https://xxx.supabase.co).",
    )
    supabase_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key for backend operations.",
    )
    stations_table: str = Field(default="charging_stations")

    @field_validator("data_root", "station_file", mode="before")
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


settings = Settings()
