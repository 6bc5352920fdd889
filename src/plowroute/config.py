"""Application configuration and settings management."""

from pathlib import Path
from typing import Any, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="PLOWROUTE_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Plow Route & ETA API"
    api_prefix: str = "/api"
    data_root: Path = Field(default=Path("data"), description="Root directory for static data files.")
    fleet_snapshot_file: Path = Field(
        default=Path("data/fleet_snapshot.json"),
        description="JSON snapshot of operators, jobs, pricing tiers and property profiles.",
    )
    demo_seed: int = Field(
        default=20250105,
        description="Seed for the demo fleet generator used when no snapshot file exists.",
    )
    average_speed_mph: float = Field(
        default=20.0,
        gt=0.0,
        description="Average residential road speed used to turn miles into minutes.",
    )
    default_service_minutes: float = Field(default=15.0, ge=0.0)
    eta_minutes_per_job_ahead: float = Field(default=15.0, ge=0.0)
    default_priority_weight_fraction: float = Field(default=0.3, ge=0.0, le=1.0)
    distance_horizon_miles: float = Field(
        default=5.0,
        gt=0.0,
        description="Distance beyond which a stop earns no proximity score.",
    )
    dispatch_threshold_inches: float = Field(default=3.0, ge=0.0)
    dispatch_projection_horizon_hours: float = Field(default=24.0, gt=0.0)
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    @field_validator("data_root", "fleet_snapshot_file", mode="before")
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
