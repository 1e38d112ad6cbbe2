"""Client for the OpenStreetMap Overpass interpreter."""

import logging
from typing import Any, Dict, List

import requests

from foodbridge.core.config import get_settings
from foodbridge.core.errors import UpstreamUnavailable
from foodbridge.etl.query import QuerySpec

logger = logging.getLogger(__name__)
_SESSION = requests.Session()


def execute(query: QuerySpec) -> List[Dict[str, Any]]:
    """POST ``query`` to the interpreter and return its raw elements.

    Any transport failure, non-2xx status or unparsable body is reported as
    UpstreamUnavailable. There is no retry.
    """
    settings = get_settings()
    try:
        response = _SESSION.post(
            settings.overpass_url,
            data=query.as_payload(),
            headers={"User-Agent": settings.user_agent},
            timeout=settings.overpass_timeout,
        )
    except requests.RequestException as exc:
        logger.error("Overpass request failed: %s", exc)
        raise UpstreamUnavailable(f"Overpass API request failed: {exc}") from exc

    if not (200 <= response.status_code < 300):
        logger.error("Overpass API error: status=%s body=%s", response.status_code, response.text[:200])
        raise UpstreamUnavailable(f"Overpass API error: {response.status_code}")

    try:
        payload = response.json()
    except ValueError as exc:
        logger.error("Overpass API returned a non-JSON body: %s", response.text[:200])
        raise UpstreamUnavailable("Overpass API returned an unreadable response") from exc

    elements = payload.get("elements") if isinstance(payload, dict) else None
    if not isinstance(elements, list):
        logger.error("Overpass response missing elements list: %s", str(payload)[:200])
        raise UpstreamUnavailable("Overpass API returned an unexpected payload")
    return elements
