import os
from pathlib import Path
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv

# Prefer the backend/.env file so running from the repo root still picks up settings.
# __file__ is backend/app/core/config.py -> parents[2] is backend/
BACKEND_ENV = Path(__file__).resolve().parents[2] / ".env"
load_dotenv(BACKEND_ENV)


def _env_bool(name: str, default: bool = False) -> bool:
    """Parse a boolean from the environment with sensible defaults."""
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


def _env_list(name: str, default: List[str] | None = None) -> List[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default or []
    return [item.strip() for item in raw.split(",") if item.strip()]


def _log_level() -> str:
    raw = os.getenv("LOG_LEVEL")
    if raw:
        return raw.upper()
    return "DEBUG" if _env_bool("DEBUG", False) else "INFO"


@dataclass
class Settings:
    app_name: str = field(default_factory=lambda: os.getenv("APP_NAME", "Ginvitational API"))
    api_prefix: str = field(default_factory=lambda: os.getenv("API_PREFIX", "/api"))
    database_url: str = field(default_factory=lambda: os.getenv("DATABASE_URL", "sqlite:///ginvitational_dev.db"))
    debug: bool = field(default_factory=lambda: _env_bool("DEBUG", False))
    log_level: str = field(default_factory=_log_level)
    cors_origins: List[str] = field(default_factory=lambda: _env_list("CORS_ORIGINS", ["*"]))
    # When set, the CLI talks to a running API instead of the database directly.
    api_url: Optional[str] = field(default_factory=lambda: os.getenv("API_URL") or None)
    store_timeout_seconds: int = field(default_factory=lambda: _env_int("STORE_TIMEOUT_SECONDS", 10))
    tee_start: str = field(default_factory=lambda: os.getenv("TEE_START", "08:00"))
    tee_interval_minutes: int = field(default_factory=lambda: _env_int("TEE_INTERVAL_MINUTES", 8))


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached settings instance sourced from environment variables."""
    return Settings()
