"""Centralized configuration, loaded from environment variables.

A ``.env`` file next to the working directory is honoured for local runs.
"""

import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",
]


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e


@dataclass
class Settings:
    """Application settings."""

    weather_api_key: Optional[str] = None
    geoapify_api_key: Optional[str] = None
    ors_api_key: Optional[str] = None

    cors_origins: list[str] = field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))
    environment: str = "local"
    log_level: str = "INFO"

    # Cache lifetimes in seconds
    weather_cache_ttl: int = 10 * 60
    places_cache_ttl: int = 30 * 60
    route_cache_ttl: int = 60 * 60
    cache_max_entries: int = 1000

    rate_limit_window_seconds: int = 15 * 60
    rate_limit_max_requests: int = 100

    @classmethod
    def from_env(cls) -> "Settings":
        origins = os.getenv("CORS_ORIGINS")
        return cls(
            weather_api_key=os.getenv("WEATHER_API_KEY") or None,
            geoapify_api_key=os.getenv("GEOAPIFY_API_KEY") or None,
            ors_api_key=os.getenv("ORS_API_KEY") or None,
            cors_origins=(
                [o.strip() for o in origins.split(",") if o.strip()]
                if origins
                else list(DEFAULT_CORS_ORIGINS)
            ),
            environment=os.getenv("ENVIRONMENT", "local"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            weather_cache_ttl=_env_int("WEATHER_CACHE_TTL", 10 * 60),
            places_cache_ttl=_env_int("PLACES_CACHE_TTL", 30 * 60),
            route_cache_ttl=_env_int("ROUTE_CACHE_TTL", 60 * 60),
            cache_max_entries=_env_int("CACHE_MAX_ENTRIES", 1000),
            rate_limit_window_seconds=_env_int("RATE_LIMIT_WINDOW_SECONDS", 15 * 60),
            rate_limit_max_requests=_env_int("RATE_LIMIT_MAX_REQUESTS", 100),
        )

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def missing_api_keys(self) -> list[str]:
        """Return the names of unset upstream API keys."""
        keys = {
            "WEATHER_API_KEY": self.weather_api_key,
            "GEOAPIFY_API_KEY": self.geoapify_api_key,
            "ORS_API_KEY": self.ors_api_key,
        }
        return [name for name, value in keys.items() if not value]
