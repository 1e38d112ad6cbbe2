"""Application configuration helpers."""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    nominatim_url: str = "https://nominatim.openstreetmap.org/search"
    overpass_url: str = "https://overpass-api.de/api/interpreter"
    geocode_country: str = "USA"
    user_agent: str = "FoodBridge/1.0"
    geocode_timeout: float = 10.0
    overpass_timeout: float = 30.0
    overpass_query_timeout: int = 25
    default_radius_miles: float = 10.0
    port: int = 8080


def _get_number(name: str, default, cast):
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw.strip())
    except ValueError:
        logger.warning("%s=%r is not a valid number; using default %s", name, raw, default)
        return default


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from environment variables with sensible defaults."""
    load_dotenv()

    defaults = Settings()
    return Settings(
        nominatim_url=os.getenv("NOMINATIM_URL") or defaults.nominatim_url,
        overpass_url=os.getenv("OVERPASS_URL") or defaults.overpass_url,
        geocode_country=os.getenv("GEOCODE_COUNTRY") or defaults.geocode_country,
        user_agent=os.getenv("USER_AGENT") or defaults.user_agent,
        geocode_timeout=_get_number("GEOCODE_TIMEOUT_SECONDS", defaults.geocode_timeout, float),
        overpass_timeout=_get_number("OVERPASS_TIMEOUT_SECONDS", defaults.overpass_timeout, float),
        overpass_query_timeout=_get_number("OVERPASS_QUERY_TIMEOUT", defaults.overpass_query_timeout, int),
        default_radius_miles=_get_number("DEFAULT_RADIUS_MILES", defaults.default_radius_miles, float),
        port=_get_number("PORT", defaults.port, int),
    )
