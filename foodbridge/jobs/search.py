"""Search pipeline: resolve the center, query Overpass, normalize, classify and rank."""

import argparse
import json
import logging
from typing import Any, Dict, Iterable, List

from foodbridge.core.config import get_settings
from foodbridge.core.errors import InvalidRequest, SearchError, SearchStatus
from foodbridge.etl import query as query_builder
from foodbridge.etl.classify import classify
from foodbridge.etl.rank import rank
from foodbridge.etl.transform import element_tags, normalize
from foodbridge.models import Coordinate, Domain, Location, SearchRequest, SearchResult
from foodbridge.vendors import nominatim, overpass

logger = logging.getLogger(__name__)


def resolve_center(request: SearchRequest) -> Coordinate:
    if request.center is not None:
        return request.center
    if not request.postal_code:
        raise InvalidRequest("Either a ZIP code or lat/lon coordinates are required")
    return nominatim.resolve(request.postal_code)


def process_candidates(elements: Iterable[Dict[str, Any]], center: Coordinate, domain: Domain) -> List[Location]:
    """Normalize and classify every element; malformed elements, elements without geometry and repeats are skipped."""
    locations: List[Location] = []
    seen = set()
    malformed = 0
    dropped = 0
    for raw in elements:
        if not isinstance(raw, dict):
            malformed += 1
            continue

        location = normalize(raw, center, domain)
        if location is None:
            dropped += 1
            continue
        if location.osm_key is not None:
            if location.osm_key in seen:
                continue
            seen.add(location.osm_key)

        classification = classify(element_tags(raw), domain, location.name)
        location.accepts_ebt = classification.accepts_ebt
        location.well_stocked = classification.well_stocked
        locations.append(location)

    if dropped:
        logger.info("Dropped %d candidates without usable coordinates", dropped)
    if malformed:
        logger.warning("Skipped %d malformed candidates that are not JSON objects", malformed)
    return locations


def search(request: SearchRequest, domain: Domain) -> SearchResult:
    """Run one search. Geocoding and upstream failures propagate as SearchError."""
    logger.info(
        "Finding %s for postal_code=%s center=%s radius=%s",
        domain.value,
        request.postal_code,
        request.center,
        request.radius_miles,
    )
    center = resolve_center(request)
    logger.info("Searching near %s,%s", center.lat, center.lon)

    spec = query_builder.build(center, request.radius_miles, domain)
    elements = overpass.execute(spec)
    logger.info("Overpass returned %d elements", len(elements))

    locations = process_candidates(elements, center, domain)
    results = rank(locations, domain.limit)
    logger.info("Found %d %s locations", len(results), domain.value)
    return SearchResult(status=SearchStatus.OK, results=results)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Find food banks or grocery stores near a location")
    parser.add_argument(
        "--domain",
        choices=[domain.value for domain in Domain],
        default=Domain.FOOD_BANK.value,
        help="What to search for",
    )
    parser.add_argument("--zip", dest="postal_code", help="US ZIP code to search around")
    parser.add_argument("--lat", type=float, help="Latitude of the search center")
    parser.add_argument("--lon", type=float, help="Longitude of the search center")
    parser.add_argument(
        "--radius",
        type=float,
        default=get_settings().default_radius_miles,
        help="Search radius in miles",
    )
    return parser


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s - %(message)s")
    parser = build_parser()
    args = parser.parse_args()

    payload = {"zipCode": args.postal_code, "lat": args.lat, "lon": args.lon, "radius": args.radius}
    try:
        request = SearchRequest.from_payload(payload)
        result = search(request, Domain(args.domain))
    except SearchError as exc:
        logger.error("Search failed: %s", exc)
        result = SearchResult(status=exc.status, error=str(exc))
        print(json.dumps(result.to_dict(), indent=2))
        raise SystemExit(1) from exc

    print(json.dumps(result.to_dict(), indent=2))


if __name__ == "__main__":
    main()
