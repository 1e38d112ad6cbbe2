"""HTTP entrypoint exposing the food bank and grocery store lookups."""

from __future__ import annotations

import logging
from typing import Any, Dict

from flask import Flask, jsonify, request

from foodbridge.core.config import get_settings
from foodbridge.core.errors import InvalidRequest, SearchError, SearchStatus
from foodbridge.jobs.search import search
from foodbridge.models import Domain, SearchRequest, SearchResult

# ---------- Logging ----------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}

app = Flask(__name__)


@app.after_request
def add_cors_headers(response):
    response.headers.update(CORS_HEADERS)
    return response


# ---------- Routes ----------


@app.get("/healthz")
def healthcheck() -> Any:
    return jsonify({"status": "ok"}), 200


@app.route("/find-food-banks", methods=["POST", "OPTIONS"])
def find_food_banks() -> Any:
    """Food banks, pantries and other probable food assistance near a ZIP code or lat/lon."""
    return _handle_search(Domain.FOOD_BANK)


@app.route("/find-grocery-stores", methods=["POST", "OPTIONS"])
def find_grocery_stores() -> Any:
    """Grocery stores near a ZIP code or lat/lon, with an EBT acceptance estimate."""
    return _handle_search(Domain.GROCERY)


# ---------- Internals ----------


def _handle_search(domain: Domain) -> Any:
    if request.method == "OPTIONS":
        return "", 200

    try:
        payload = _read_json_body()
        search_request = SearchRequest.from_payload(payload, default_radius=get_settings().default_radius_miles)
        result = search(search_request, domain)
    except SearchError as exc:
        logger.warning("Search for %s failed (%s): %s", domain.value, exc.status.value, exc)
        return _failure(exc.status, str(exc), exc.http_status)
    except Exception as exc:  # noqa: BLE001
        logger.exception("Unexpected error while searching for %s: %s", domain.value, exc)
        return _failure(SearchStatus.UPSTREAM_UNAVAILABLE, "Search failed", 500)

    return jsonify(result.to_dict()), 200


def _read_json_body() -> Dict[str, Any]:
    if not request.is_json:
        raise InvalidRequest("Content-Type must be application/json")
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise InvalidRequest("Request body must be a JSON object")
    return payload


def _failure(status: SearchStatus, message: str, http_status: int) -> Any:
    return jsonify(SearchResult(status=status, error=message).to_dict()), http_status


def main() -> None:
    port = get_settings().port
    logger.info("[BOOT] Binding on 0.0.0.0:%d", port)
    app.run(host="0.0.0.0", port=port)


if __name__ == "__main__":
    main()
