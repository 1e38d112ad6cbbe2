"""Core data models shared by the location search pipeline."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from foodbridge.core.errors import InvalidRequest, SearchStatus

ADDRESS_NOT_AVAILABLE = "Address not available"


class Domain(str, Enum):
    """Search context deciding query categories, result limit and classification rules."""

    GROCERY = "grocery"
    FOOD_BANK = "food_bank"

    @property
    def limit(self) -> int:
        return 50 if self is Domain.GROCERY else 20

    @property
    def fallback_name(self) -> str:
        return "Grocery Store" if self is Domain.GROCERY else "Food Assistance Location"


@dataclass(frozen=True)
class Coordinate:
    lat: float
    lon: float

    def __post_init__(self) -> None:
        if not (-90.0 <= self.lat <= 90.0):
            raise ValueError(f"latitude {self.lat} is outside [-90, 90]")
        if not (-180.0 <= self.lon <= 180.0):
            raise ValueError(f"longitude {self.lon} is outside [-180, 180]")


@dataclass(frozen=True)
class SearchRequest:
    postal_code: Optional[str] = None
    center: Optional[Coordinate] = None
    radius_miles: float = 10.0

    def __post_init__(self) -> None:
        if self.center is None and not self.postal_code:
            raise InvalidRequest("Either a ZIP code or lat/lon coordinates are required")
        if not math.isfinite(self.radius_miles) or self.radius_miles <= 0:
            raise InvalidRequest("radius must be a positive number of miles")

    @classmethod
    def from_payload(cls, payload: Dict[str, Any], default_radius: float = 10.0) -> "SearchRequest":
        """Build a request from the JSON body accepted by the find-* endpoints.

        Coordinates are only used when both ``lat`` and ``lon`` are present; a
        lone coordinate is ignored when a ZIP code is supplied and rejected
        otherwise.
        """
        postal_code = _strip_or_none(payload.get("zipCode"))
        lat = _number_or_none(payload.get("lat"), "lat")
        lon = _number_or_none(payload.get("lon"), "lon")

        center = None
        if lat is not None and lon is not None:
            try:
                center = Coordinate(lat=lat, lon=lon)
            except ValueError as exc:
                raise InvalidRequest(str(exc)) from exc
        elif (lat is None) != (lon is None) and not postal_code:
            raise InvalidRequest("lat and lon must be supplied together")

        radius = _number_or_none(payload.get("radius"), "radius")
        if radius is None:
            radius = default_radius

        return cls(postal_code=postal_code, center=center, radius_miles=radius)


@dataclass(slots=True)
class Location:
    """Normalized, classified point of interest ready to be rendered."""

    name: str
    address: str
    distance_miles: float
    coordinate: Coordinate
    phone: Optional[str] = None
    hours: Optional[str] = None
    accepts_ebt: Optional[bool] = None
    well_stocked: Optional[bool] = None
    osm_key: Optional[str] = field(default=None, repr=False, compare=False)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the wire shape; unknown optional fields are left out."""
        data: Dict[str, Any] = {
            "name": self.name,
            "address": self.address,
            "distance": self.distance_miles,
            "lat": self.coordinate.lat,
            "lon": self.coordinate.lon,
        }
        if self.phone is not None:
            data["phone"] = self.phone
        if self.hours is not None:
            data["hours"] = self.hours
        if self.accepts_ebt is not None:
            data["acceptsEBT"] = self.accepts_ebt
        if self.well_stocked is not None:
            data["wellStocked"] = self.well_stocked
        return data


@dataclass(slots=True)
class SearchResult:
    status: SearchStatus
    results: List[Location] = field(default_factory=list)
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "status": self.status.value,
            "results": [location.to_dict() for location in self.results],
        }
        if self.error:
            data["error"] = self.error
        return data


def _strip_or_none(value: Any) -> Optional[str]:
    if value is None:
        return None
    value_str = str(value).strip()
    return value_str or None


def _number_or_none(value: Any, field_name: str) -> Optional[float]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if isinstance(value, bool):
        raise InvalidRequest(f"{field_name} must be numeric")
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidRequest(f"{field_name} must be numeric") from exc
    if not math.isfinite(number):
        raise InvalidRequest(f"{field_name} must be a finite number")
    return number
