from foodbridge.core import config


def test_get_settings_defaults(monkeypatch):
    for name in ("NOMINATIM_URL", "OVERPASS_URL", "GEOCODE_COUNTRY", "OVERPASS_QUERY_TIMEOUT", "PORT"):
        monkeypatch.delenv(name, raising=False)

    settings = config.get_settings()

    assert settings.nominatim_url == "https://nominatim.openstreetmap.org/search"
    assert settings.overpass_url == "https://overpass-api.de/api/interpreter"
    assert settings.geocode_country == "USA"
    assert settings.overpass_query_timeout == 25
    assert settings.port == 8080


def test_get_settings_reads_env(monkeypatch):
    monkeypatch.setenv("OVERPASS_URL", "http://localhost:12345/api/interpreter")
    monkeypatch.setenv("USER_AGENT", "FoodBridgeTest/0.1")
    monkeypatch.setenv("DEFAULT_RADIUS_MILES", "5")
    monkeypatch.setenv("PORT", "9100")

    settings = config.get_settings()

    assert settings.overpass_url == "http://localhost:12345/api/interpreter"
    assert settings.user_agent == "FoodBridgeTest/0.1"
    assert settings.default_radius_miles == 5.0
    assert settings.port == 9100


def test_get_settings_warns_on_bad_number(monkeypatch, caplog):
    monkeypatch.setenv("OVERPASS_TIMEOUT_SECONDS", "soon")

    with caplog.at_level("WARNING"):
        settings = config.get_settings()

    assert settings.overpass_timeout == 30.0
    assert "OVERPASS_TIMEOUT_SECONDS" in " ".join(caplog.messages)
