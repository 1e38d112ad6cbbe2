import pytest

from foodbridge.core.errors import GeocodeNotFound, UpstreamUnavailable
from foodbridge.jobs import search as search_job
from foodbridge.jobs import server
from foodbridge.models import Coordinate

CENTER = Coordinate(40.7506, -73.9972)


@pytest.fixture
def client():
    return server.app.test_client()


@pytest.fixture
def upstream(monkeypatch):
    state = {"elements": [], "error": None}

    def fake_execute(spec):
        if state["error"] is not None:
            raise state["error"]
        return state["elements"]

    def fake_resolve(postal_code):
        if postal_code == "10001":
            return CENTER
        raise GeocodeNotFound(f"Could not resolve location for ZIP code {postal_code}")

    monkeypatch.setattr(search_job.overpass, "execute", fake_execute)
    monkeypatch.setattr(search_job.nominatim, "resolve", fake_resolve)
    return state


def test_health_endpoint(client):
    response = client.get("/healthz")
    assert response.status_code == 200
    assert response.get_json()["status"] == "ok"


@pytest.mark.parametrize("path", ["/find-food-banks", "/find-grocery-stores"])
def test_preflight_allows_any_origin(client, path):
    response = client.open(path, method="OPTIONS")
    assert response.status_code == 200
    assert response.data == b""
    assert response.headers["Access-Control-Allow-Origin"] == "*"
    assert "content-type" in response.headers["Access-Control-Allow-Headers"]


def test_grocery_search_returns_results(client, upstream):
    upstream["elements"] = [
        {"type": "node", "id": 1, "lat": 40.7510, "lon": -73.9972, "tags": {"shop": "supermarket", "name": "Big Market", "opening_hours": "24/7"}},
        {"type": "node", "id": 2, "lat": 40.7600, "lon": -73.9972, "tags": {"shop": "convenience"}},
    ]

    response = client.post("/find-grocery-stores", json={"zipCode": "10001"})

    assert response.status_code == 200
    assert response.headers["Access-Control-Allow-Origin"] == "*"
    body = response.get_json()
    assert body["status"] == "ok"
    first, second = body["results"]
    assert first["name"] == "Big Market"
    assert first["acceptsEBT"] is True
    assert first["wellStocked"] is True
    assert first["hours"] == "24/7"
    assert second["name"] == "Grocery Store"
    assert second["acceptsEBT"] is False
    assert "wellStocked" not in second
    assert second["address"] == "Address not available"
    assert "error" not in body


def test_food_bank_search_with_coordinates(client, upstream):
    upstream["elements"] = [
        {"type": "way", "id": 3, "center": {"lat": 40.7506, "lon": -73.99}, "tags": {"shop": "charity"}},
    ]

    response = client.post("/find-food-banks", json={"lat": 40.7506, "lon": -73.9972, "radius": 2})

    assert response.status_code == 200
    (result,) = response.get_json()["results"]
    assert result["name"] == "Charity Organization"
    assert "acceptsEBT" not in result
    assert set(result) >= {"name", "address", "distance", "lat", "lon"}


def test_missing_location_is_invalid_request(client, upstream):
    response = client.post("/find-food-banks", json={"radius": 5})
    assert response.status_code == 400
    assert response.headers["Access-Control-Allow-Origin"] == "*"
    body = response.get_json()
    assert body["status"] == "invalid_request"
    assert body["results"] == []
    assert body["error"]


def test_non_json_body_is_rejected(client, upstream):
    response = client.post("/find-food-banks", data="zipCode=10001", content_type="text/plain")
    assert response.status_code == 400
    assert response.get_json()["status"] == "invalid_request"


def test_unknown_zip_reports_geocode_not_found(client, upstream):
    response = client.post("/find-grocery-stores", json={"zipCode": "00000"})
    assert response.status_code == 404
    body = response.get_json()
    assert body["status"] == "geocode_not_found"
    assert body["results"] == []
    assert "Could not resolve location" in body["error"]


def test_upstream_failure_reports_500(client, upstream):
    upstream["error"] = UpstreamUnavailable("Overpass API error: 504")
    response = client.post("/find-food-banks", json={"zipCode": "10001"})
    assert response.status_code == 500
    assert response.headers["Access-Control-Allow-Origin"] == "*"
    body = response.get_json()
    assert body == {"status": "upstream_unavailable", "results": [], "error": "Overpass API error: 504"}


def test_unexpected_error_keeps_response_shape(client, upstream):
    upstream["error"] = KeyError("boom")
    response = client.post("/find-food-banks", json={"zipCode": "10001"})
    assert response.status_code == 500
    assert response.get_json()["results"] == []
