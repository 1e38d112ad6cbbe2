"""Overpass QL builder for the grocery and food-assistance searches.

Categories live in ``CATEGORY_TABLE`` so they can be audited or tuned without
touching the query assembly. OpenStreetMap has no canonical "food assistance"
tag, so the food bank domain also pulls in Christian places of worship with a
denomination and charity shops as probable providers. Expect false positives
from those two rows: a listed church does not necessarily run a pantry.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Tuple

from foodbridge.core.config import get_settings
from foodbridge.etl.geo import miles_to_meters
from foodbridge.models import Coordinate, Domain

GEOMETRIES = ("node", "way")

# Tag filters are (key, operator, value); "=" is an exact match, "~" a regex match.
TagFilter = Tuple[str, str, str]


@dataclass(frozen=True)
class Category:
    name: str
    domain: Domain
    filters: Tuple[TagFilter, ...]

    def selector(self) -> str:
        return "".join(f'["{key}"{op}"{value}"]' for key, op, value in self.filters)


CATEGORY_TABLE: Tuple[Category, ...] = (
    Category("supermarket", Domain.GROCERY, (("shop", "=", "supermarket"),)),
    Category("grocery", Domain.GROCERY, (("shop", "=", "grocery"),)),
    Category("convenience", Domain.GROCERY, (("shop", "=", "convenience"),)),
    Category("food_bank", Domain.FOOD_BANK, (("amenity", "=", "food_bank"),)),
    Category(
        "social_facility",
        Domain.FOOD_BANK,
        (("amenity", "=", "social_facility"), ("social_facility", "=", "food_bank")),
    ),
    Category(
        "community_centre",
        Domain.FOOD_BANK,
        (("amenity", "=", "community_centre"), ("community_centre:for", "~", "food")),
    ),
    Category(
        "place_of_worship",
        Domain.FOOD_BANK,
        (("amenity", "=", "place_of_worship"), ("religion", "=", "christian"), ("denomination", "~", ".")),
    ),
    Category("charity", Domain.FOOD_BANK, (("shop", "=", "charity"),)),
)


def categories_for(domain: Domain) -> Tuple[Category, ...]:
    return tuple(category for category in CATEGORY_TABLE if category.domain is domain)


@dataclass(frozen=True)
class QuerySpec:
    """A bounded "around" query over a set of categories."""

    center: Coordinate
    radius_meters: float
    categories: Tuple[Category, ...]
    timeout: int

    def statements(self) -> Iterable[str]:
        around = f"(around:{round(self.radius_meters, 2)},{self.center.lat},{self.center.lon})"
        for category in self.categories:
            for geometry in GEOMETRIES:
                yield f"{geometry}{category.selector()}{around};"

    def to_overpass_ql(self) -> str:
        body = "\n".join(f"  {statement}" for statement in self.statements())
        return f"[out:json][timeout:{self.timeout}];\n(\n{body}\n);\nout center;\n"

    def as_payload(self) -> Dict[str, str]:
        return {"data": self.to_overpass_ql()}


def build(center: Coordinate, radius_miles: float, domain: Domain, timeout: Optional[int] = None) -> QuerySpec:
    """Build the query; ``timeout`` defaults to the configured server-side Overpass timeout."""
    if radius_miles <= 0:
        raise ValueError("radius_miles must be positive")
    if timeout is None:
        timeout = get_settings().overpass_query_timeout
    return QuerySpec(
        center=center,
        radius_meters=miles_to_meters(radius_miles),
        categories=categories_for(domain),
        timeout=timeout,
    )
