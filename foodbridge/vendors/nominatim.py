"""Postal-code geocoding against the OpenStreetMap Nominatim search API."""

import logging

import requests

from foodbridge.core.config import get_settings
from foodbridge.core.errors import GeocodeNotFound, InvalidRequest
from foodbridge.models import Coordinate

logger = logging.getLogger(__name__)
_SESSION = requests.Session()


def resolve(postal_code: str) -> Coordinate:
    """Return the first Nominatim match for ``postal_code``.

    Multiple matches are not disambiguated. Results are not cached, so a
    repeated lookup hits the provider again.
    """
    if not postal_code or not postal_code.strip():
        raise InvalidRequest("A ZIP code is required for geocoding")

    settings = get_settings()
    params = {"postalcode": postal_code.strip(), "country": settings.geocode_country, "format": "json"}
    try:
        response = _SESSION.get(
            settings.nominatim_url,
            params=params,
            headers={"User-Agent": settings.user_agent},
            timeout=settings.geocode_timeout,
        )
        response.raise_for_status()
        matches = response.json()
    except (requests.RequestException, ValueError) as exc:
        logger.error("Geocoding request failed for postal_code=%s: %s", postal_code, exc)
        raise GeocodeNotFound(f"Could not resolve location for ZIP code {postal_code}") from exc

    if not isinstance(matches, list) or not matches:
        logger.info("No geocoding match for postal_code=%s", postal_code)
        raise GeocodeNotFound(f"Could not resolve location for ZIP code {postal_code}")

    first = matches[0]
    try:
        coordinate = Coordinate(lat=float(first["lat"]), lon=float(first["lon"]))
    except (KeyError, TypeError, ValueError) as exc:
        logger.error("Unusable geocoding match for postal_code=%s: %s", postal_code, first)
        raise GeocodeNotFound(f"Could not resolve location for ZIP code {postal_code}") from exc

    logger.info("Resolved postal_code=%s to %s,%s", postal_code, coordinate.lat, coordinate.lon)
    return coordinate
