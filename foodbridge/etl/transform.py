"""Utilities for transforming raw Overpass elements into Location records."""

import logging
from typing import Any, Dict, Optional

from foodbridge.etl.geo import distance
from foodbridge.models import ADDRESS_NOT_AVAILABLE, Coordinate, Domain, Location

logger = logging.getLogger(__name__)

ADDRESS_KEYS = ("addr:housenumber", "addr:street", "addr:city", "addr:state", "addr:postcode")


def element_key(raw: Dict[str, Any]) -> Optional[str]:
    """Stable identity of an element, e.g. ``way/1234``; None when the element has no id."""
    element_id = raw.get("id")
    if element_id is None:
        return None
    return f"{raw.get('type', 'node')}/{element_id}"


def element_tags(raw: Dict[str, Any]) -> Dict[str, Any]:
    tags = raw.get("tags")
    return tags if isinstance(tags, dict) else {}


def resolve_coordinate(raw: Dict[str, Any]) -> Optional[Coordinate]:
    lat, lon = raw.get("lat"), raw.get("lon")
    if lat is None or lon is None:
        center = raw.get("center")
        if not isinstance(center, dict):
            center = {}
        lat, lon = center.get("lat"), center.get("lon")
    if lat is None or lon is None:
        return None
    try:
        return Coordinate(lat=float(lat), lon=float(lon))
    except (TypeError, ValueError):
        return None


def resolve_name(tags: Dict[str, str], domain: Domain) -> str:
    name = _strip_or_none(tags.get("name"))
    if name:
        return name
    if domain is Domain.GROCERY:
        brand = _strip_or_none(tags.get("brand"))
        if brand:
            return brand
    operator = _strip_or_none(tags.get("operator"))
    if operator:
        return operator

    if tags.get("amenity") == "place_of_worship":
        return f"{_strip_or_none(tags.get('denomination')) or 'Community'} Church"
    if tags.get("shop") == "charity":
        return "Charity Organization"
    return domain.fallback_name


def compose_address(tags: Dict[str, str]) -> str:
    parts = [_strip_or_none(tags.get(key)) for key in ADDRESS_KEYS]
    parts = [part for part in parts if part]
    if not parts:
        return ADDRESS_NOT_AVAILABLE
    return ", ".join(parts)


def normalize(raw: Dict[str, Any], center: Coordinate, domain: Domain) -> Optional[Location]:
    """Map one Overpass element to a Location, or None when it has no usable geometry."""
    coordinate = resolve_coordinate(raw)
    if coordinate is None:
        logger.debug("Dropping element without coordinates: %s", element_key(raw))
        return None

    tags = element_tags(raw)
    return Location(
        name=resolve_name(tags, domain),
        address=compose_address(tags),
        distance_miles=distance(center, coordinate),
        coordinate=coordinate,
        phone=_strip_or_none(tags.get("phone")) or _strip_or_none(tags.get("contact:phone")),
        hours=_strip_or_none(tags.get("opening_hours")),
        osm_key=element_key(raw),
    )


def _strip_or_none(value: Any) -> Optional[str]:
    if value is None:
        return None
    value_str = str(value).strip()
    return value_str or None
