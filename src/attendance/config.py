"""Application configuration and settings management."""

from typing import Any, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="ATT_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Attendance Tracker API"
    api_prefix: str = "/api"
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
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

    # Location attendance
    geofence_max_meters: float = Field(
        default=2000.0,
        gt=0.0,
        description="Maximum distance between a reported position and the branch.",
    )
    position_timeout_seconds: float = Field(
        default=15.0,
        gt=0.0,
        description="How long the client may wait for a position fix.",
    )
    short_link_hosts: tuple[str, ...] = Field(
        default=("maps.app.goo.gl", "goo.gl"),
        description="Hosts treated as shortened map links that need resolving.",
    )
    short_link_proxy_url: Optional[str] = Field(
        default=None,
        description="Optional redirect-resolving proxy, called as GET <proxy>?url=<short link>.",
    )
    short_link_timeout_seconds: float = Field(default=10.0, gt=0.0)

    timezone: Optional[str] = Field(
        default=None,
        description="IANA timezone used for calendar dates (e.g., Africa/Cairo). Defaults to server local time.",
    )

    @field_validator("frontend_allowed_origins", "short_link_hosts", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            # Try JSON first
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
