"""Configuration management for the clinic dispatch service."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field


def _load_env_file() -> None:
    """Load .env from root directory if present."""
    env_path = Path(__file__).parent.parent / ".env"
    if not env_path.is_file():
        return
    for line in env_path.read_text(encoding="utf-8").splitlines():
        stripped = line.strip()
        if stripped and not stripped.startswith("#") and "=" in stripped:
            key, value = stripped.split("=", 1)
            key, value = key.strip(), value.strip().strip("'\"")
            if key and value and key not in os.environ:
                os.environ[key] = value


_load_env_file()


DEFAULT_APP_NAME = "Clinic Dispatch - notification and maintenance triggers"
DEFAULT_APP_VERSION = "0.1.0"


def _env(name: str, fallback: Optional[str] = None):
    return lambda: os.getenv(name, fallback)


def _env_int(name: str, fallback: int):
    def _read() -> int:
        try:
            return int(os.getenv(name, str(fallback)))
        except (TypeError, ValueError):
            return fallback

    return _read


def _env_float(name: str, fallback: float):
    def _read() -> float:
        try:
            return float(os.getenv(name, str(fallback)))
        except (TypeError, ValueError):
            return fallback

    return _read


class Settings(BaseModel):
    """Application settings read from environment variables.

    Values are read when the model is instantiated, so `get_settings.cache_clear()`
    picks up a changed environment.
    """

    # App metadata
    app_name: str = Field(default=DEFAULT_APP_NAME)
    app_version: str = Field(default=DEFAULT_APP_VERSION)

    # Server runtime
    server_host: str = Field(default_factory=_env("CLINIC_HOST", "0.0.0.0"))
    server_port: int = Field(default_factory=_env_int("CLINIC_PORT", 8000))

    # Environment
    env: str = Field(default_factory=_env("ENV", "dev"))
    log_level: str = Field(default_factory=_env("LOG_LEVEL", "INFO"))

    # HTTP behaviour
    cors_allow_origins_raw: str = Field(default_factory=_env("CORS_ORIGINS", "*"))
    enable_docs: bool = Field(default_factory=lambda: os.getenv("CLINIC_ENABLE_DOCS", "1") != "0")
    docs_url: Optional[str] = Field(default_factory=_env("DOCS_URL", "/docs"))

    # Supabase configuration (service role, server side only)
    supabase_url: Optional[str] = Field(default_factory=_env("SUPABASE_URL"))
    supabase_service_role_key: Optional[str] = Field(default_factory=_env("SUPABASE_SERVICE_ROLE_KEY"))

    # Maintenance trigger
    cron_secret: Optional[str] = Field(default_factory=_env("CRON_SECRET"))
    admin_roles_raw: str = Field(default_factory=_env("ADMIN_ROLES", "admin"))
    maintenance_procedure: str = Field(default_factory=_env("MAINTENANCE_PROCEDURE", "run_daily_maintenance"))
    maintenance_trigger_url: Optional[str] = Field(default_factory=_env("MAINTENANCE_TRIGGER_URL"))

    # LINE Messaging API
    line_api_base_url: str = Field(default_factory=_env("LINE_API_BASE_URL", "https://api.line.me"))
    line_channel_access_token: Optional[str] = Field(default_factory=_env("LINE_CHANNEL_ACCESS_TOKEN"))
    line_timeout_seconds: float = Field(default_factory=_env_float("LINE_TIMEOUT_SECONDS", 15.0))

    # Broadcast behaviour
    broadcast_deadline_seconds: float = Field(default_factory=_env_float("BROADCAST_DEADLINE_SECONDS", 60.0))
    broadcast_zero_success_policy: str = Field(
        default_factory=_env("BROADCAST_ZERO_SUCCESS_POLICY", "report_success")
    )

    # Temporal configuration
    temporal_host: str = Field(default_factory=_env("TEMPORAL_HOST", "localhost:7233"))
    temporal_enabled: bool = Field(default_factory=lambda: os.getenv("TEMPORAL_ENABLED", "1") != "0")
    temporal_namespace: str = Field(default_factory=_env("TEMPORAL_NAMESPACE", "default"))

    @property
    def cors_allow_origins(self) -> List[str]:
        """Parse CORS origins from comma-separated string."""
        if self.cors_allow_origins_raw.strip() in {"", "*"}:
            return ["*"]
        return [origin.strip() for origin in self.cors_allow_origins_raw.split(",") if origin.strip()]

    @property
    def resolved_docs_url(self) -> Optional[str]:
        """Return documentation URL when docs are enabled."""
        return (self.docs_url or "/docs") if self.enable_docs else None

    @property
    def admin_roles(self) -> frozenset[str]:
        """Role names allowed to trigger maintenance manually."""
        return frozenset(role.strip() for role in self.admin_roles_raw.split(",") if role.strip())

    @property
    def resolved_maintenance_trigger_url(self) -> str:
        """URL the scheduled workflow calls to run maintenance."""
        if self.maintenance_trigger_url:
            return self.maintenance_trigger_url
        host = "127.0.0.1" if self.server_host in {"0.0.0.0", ""} else self.server_host
        return f"http://{host}:{self.server_port}/api/cron/daily-maintenance"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
