"""Distance ordering and truncation of search results."""

from typing import Iterable, List

from foodbridge.models import Location


def rank(locations: Iterable[Location], limit: int) -> List[Location]:
    """Sort by ascending distance, then keep the closest ``limit`` entries.

    ``sorted`` is stable, so equal distances keep their input order.
    """
    if limit <= 0:
        return []
    return sorted(locations, key=lambda location: location.distance_miles)[:limit]
