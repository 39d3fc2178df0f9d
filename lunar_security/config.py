"""Library settings loaded from the environment."""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Optional

from dotenv import load_dotenv

from .exceptions import ConfigurationError

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Defaults a host can pass to library objects."""
    rate_limit_max_requests: int
    rate_limit_window_seconds: float
    rate_limit_evict_after_windows: int
    log_level: str


def _env_int(name: str, default: str) -> int:
    raw = os.getenv(name, default).strip()
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}")


def _env_float(name: str, default: str) -> float:
    raw = os.getenv(name, default).strip()
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}")


def get_settings() -> Settings:
    """Load settings from environment variables."""
    max_requests = _env_int("LUNAR_RATE_LIMIT_MAX_REQUESTS", "100")
    if max_requests < 1:
        raise ConfigurationError("LUNAR_RATE_LIMIT_MAX_REQUESTS must be >= 1.")
    window = _env_float("LUNAR_RATE_LIMIT_WINDOW_SECONDS", "60")
    if window <= 0:
        raise ConfigurationError("LUNAR_RATE_LIMIT_WINDOW_SECONDS must be > 0.")
    evict_after = _env_int("LUNAR_RATE_LIMIT_EVICT_AFTER_WINDOWS", "4")
    if evict_after < 1:
        raise ConfigurationError("LUNAR_RATE_LIMIT_EVICT_AFTER_WINDOWS must be >= 1.")

    return Settings(
        rate_limit_max_requests=max_requests,
        rate_limit_window_seconds=window,
        rate_limit_evict_after_windows=evict_after,
        log_level=os.getenv("LUNAR_LOG_LEVEL", "WARNING").strip().upper(),
    )


# Singleton for caching settings
_settings_cache: Optional[Settings] = None


def get_cached_settings() -> Settings:
    """Get cached settings (loads once)."""
    global _settings_cache
    if _settings_cache is None:
        _settings_cache = get_settings()
    return _settings_cache


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing)."""
    global _settings_cache
    _settings_cache = None
