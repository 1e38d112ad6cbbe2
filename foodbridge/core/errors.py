"""Error taxonomy for location searches."""

from __future__ import annotations

from enum import Enum


class SearchStatus(str, Enum):
    OK = "ok"
    INVALID_REQUEST = "invalid_request"
    GEOCODE_NOT_FOUND = "geocode_not_found"
    UPSTREAM_UNAVAILABLE = "upstream_unavailable"


class SearchError(RuntimeError):
    """Base class for failures that abort a whole search."""

    status = SearchStatus.UPSTREAM_UNAVAILABLE
    http_status = 500


class InvalidRequest(SearchError):
    """Raised when the caller supplied no usable location or a bad radius."""

    status = SearchStatus.INVALID_REQUEST
    http_status = 400


class GeocodeNotFound(SearchError):
    """Raised when the geocoding provider has no match for a postal code."""

    status = SearchStatus.GEOCODE_NOT_FOUND
    http_status = 404


class UpstreamUnavailable(SearchError):
    """Raised when the spatial query provider fails or returns a non-2xx status."""

    status = SearchStatus.UPSTREAM_UNAVAILABLE
    http_status = 500
