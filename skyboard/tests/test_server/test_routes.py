"""Tests for the proxy endpoints."""

from unittest.mock import MagicMock

import httpx
import pytest
from fastapi.testclient import TestClient

from skyboard.config.schema import AppConfig, CityConfig
from skyboard.ingest.adapter import WeatherAdapter
from skyboard.models.common import Units
from skyboard.models.errors import InvalidRequest
from skyboard.server.app import create_app
from skyboard.server.routes import parse_units, resolve_city, split_favorites
from skyboard.tests.conftest import load_fixture


class TestWeather:
    def test_city_report_imperial_by_default(self, app_client: TestClient):
        resp = app_client.get("/api/weather", params={"city": "Paris"})
        assert resp.status_code == 200
        body = resp.json()
        assert body["current"]["name"] == "Paris"
        assert body["current"]["main"]["temp"] == 59.0
        assert body["current"]["weather"][0]["main"] == "Clouds"
        assert body["timezone"] == "Europe/Paris"
        assert body["timezone_offset"] == 7200
        assert len(body["daily"]) == 3
        assert len(body["hourly"]) == 24

    def test_metric(self, app_client: TestClient):
        resp = app_client.get("/api/weather", params={"city": "Paris", "units": "metric"})
        assert resp.json()["current"]["main"]["temp"] == 15.0

    def test_coordinates(self, app_client: TestClient, fake_client: MagicMock):
        resp = app_client.get("/api/weather", params={"lat": 48.87, "lon": 2.33})
        assert resp.status_code == 200
        fake_client.get_forecast.assert_awaited_once_with("48.87,2.33", days=7)

    def test_missing_location(self, app_client: TestClient, fake_client: MagicMock):
        resp = app_client.get("/api/weather")
        assert resp.status_code == 400
        assert resp.json() == {"message": "Either city or lat/lon parameters are required"}
        fake_client.get_forecast.assert_not_awaited()

    def test_city_and_coordinates(self, app_client: TestClient):
        resp = app_client.get("/api/weather", params={"city": "Paris", "lat": 1, "lon": 2})
        assert resp.status_code == 400

    def test_non_numeric_coordinates(self, app_client: TestClient):
        resp = app_client.get("/api/weather", params={"lat": "north", "lon": 2})
        assert resp.status_code == 400
        assert resp.json()["message"].startswith("Invalid request")

    def test_invalid_units(self, app_client: TestClient):
        resp = app_client.get("/api/weather", params={"city": "Paris", "units": "kelvin"})
        assert resp.status_code == 400
        assert "units" in resp.json()["message"]

    def test_not_found(self, app_client: TestClient, fake_client: MagicMock):
        request = httpx.Request("GET", "https://api.weatherapi.com/v1/forecast.json")
        response = httpx.Response(400, json=load_fixture("error_1006.json"), request=request)
        fake_client.get_forecast.side_effect = httpx.HTTPStatusError(
            "400", request=request, response=response
        )
        resp = app_client.get("/api/weather", params={"city": "Atlantis"})
        assert resp.status_code == 404
        assert resp.json() == {"message": "No matching location found."}

    def test_upstream_failure(self, app_client: TestClient, fake_client: MagicMock):
        fake_client.get_forecast.side_effect = httpx.ConnectError("refused")
        resp = app_client.get("/api/weather", params={"city": "Paris"})
        assert resp.status_code == 500
        assert "unreachable" in resp.json()["message"]


class TestOtherCities:
    def test_all_cities(self, app_client: TestClient, fake_client: MagicMock):
        resp = app_client.get("/api/other-cities")
        assert resp.status_code == 200
        body = resp.json()
        assert [c["name"] for c in body] == ["San Francisco", "Tokyo", "London", "Sydney", "Toronto"]
        assert all(c["temp"] == 68.0 for c in body)
        assert all(c["mock"] is False for c in body)
        assert fake_client.get_current.await_count == 5

    def test_failed_city_becomes_placeholder(self, app_client: TestClient, fake_client: MagicMock):
        tokyo = load_fixture("current_tokyo.json")

        async def current(query: str):
            if query.startswith("London"):
                raise httpx.ConnectError("refused")
            return tokyo

        fake_client.get_current.side_effect = current
        body = app_client.get("/api/other-cities", params={"units": "imperial"}).json()
        assert len(body) == 5
        london = body[2]
        assert london["name"] == "London"
        assert london["country"] == "GB"
        assert london["temp"] == 0
        assert london["weather"][0] == {
            "id": 800,
            "main": "Clear",
            "description": "unknown",
            "icon": "",
        }
        assert london["mock"] is True
        assert sum(c["mock"] for c in body) == 1


class TestFavoriteCities:
    def test_empty(self, app_client: TestClient, fake_client: MagicMock):
        resp = app_client.get("/api/favorite-cities", params={"favorites": ""})
        assert resp.json() == []
        fake_client.get_current.assert_not_awaited()

    def test_missing_param(self, app_client: TestClient):
        assert app_client.get("/api/favorite-cities").json() == []

    def test_one_entry_per_distinct_name(self, app_client: TestClient):
        body = app_client.get(
            "/api/favorite-cities", params={"favorites": "Paris, paris ,Tokyo,,"}
        ).json()
        assert [c["name"] for c in body] == ["Paris", "Tokyo"]

    def test_known_cities_queried_with_country(
        self, app_client: TestClient, fake_client: MagicMock
    ):
        app_client.get("/api/favorite-cities", params={"favorites": "paris,Osaka"})
        queries = sorted(call.args[0] for call in fake_client.get_current.await_args_list)
        assert queries == ["Osaka", "Paris,FR"]

    def test_failed_favorite_is_mock(self, app_client: TestClient, fake_client: MagicMock):
        tokyo = load_fixture("current_tokyo.json")

        async def current(query: str):
            if query == "Atlantis":
                raise httpx.ConnectError("refused")
            return tokyo

        fake_client.get_current.side_effect = current
        body = app_client.get(
            "/api/favorite-cities", params={"favorites": "Paris,Atlantis,Tokyo"}
        ).json()
        assert len(body) == 3
        mocks = [c for c in body if c["mock"]]
        assert len(mocks) == 1
        assert mocks[0]["name"] == "Atlantis"
        assert mocks[0]["weather"][0]["description"] == "clear sky (mock)"
        assert mocks[0]["weather"][0]["icon"] == "01d"
        assert 40 <= mocks[0]["temp"] <= 80

    def test_mock_temperature_is_stable(self, app_client: TestClient, fake_client: MagicMock):
        fake_client.get_current.side_effect = httpx.ConnectError("refused")
        first = app_client.get("/api/favorite-cities", params={"favorites": "Atlantis"}).json()
        second = app_client.get("/api/favorite-cities", params={"favorites": "atlantis"}).json()
        assert first[0]["temp"] == second[0]["temp"]

    def test_no_api_key_all_mock(self, default_config: AppConfig, fake_client: MagicMock):
        fake_client.has_api_key = False
        client = TestClient(create_app(default_config, adapter=WeatherAdapter(fake_client)))
        body = client.get(
            "/api/favorite-cities", params={"favorites": "Paris,Tokyo", "units": "metric"}
        ).json()
        assert len(body) == 2
        assert all(c["mock"] for c in body)
        assert all(4 <= c["temp"] <= 27 for c in body)
        fake_client.get_current.assert_not_awaited()


class TestGeocode:
    def test_found(self, app_client: TestClient):
        resp = app_client.get("/api/geocode", params={"city": "Paris"})
        assert resp.status_code == 200
        assert resp.json() == {
            "name": "Paris",
            "region": "Ile-de-France",
            "country": "France",
            "lat": 48.87,
            "lon": 2.33,
        }

    def test_missing_city(self, app_client: TestClient):
        resp = app_client.get("/api/geocode")
        assert resp.status_code == 400
        assert resp.json() == {"message": "City parameter is required"}

    def test_not_found(self, app_client: TestClient, fake_client: MagicMock):
        fake_client.search.return_value = []
        resp = app_client.get("/api/geocode", params={"city": "Atlantis"})
        assert resp.status_code == 404
        assert resp.json() == {"message": "City not found"}

    def test_reverse(self, app_client: TestClient, fake_client: MagicMock):
        resp = app_client.get("/api/geocode/reverse", params={"lat": 48.87, "lon": 2.33})
        assert resp.json()["name"] == "Paris"
        fake_client.search.assert_awaited_once_with("48.87,2.33")

    def test_reverse_missing_coordinate(self, app_client: TestClient):
        resp = app_client.get("/api/geocode/reverse", params={"lat": 48.87})
        assert resp.status_code == 400


class TestHelpers:
    def test_parse_units_default(self):
        assert parse_units(None, Units.IMPERIAL) == Units.IMPERIAL
        assert parse_units("", Units.METRIC) == Units.METRIC

    def test_parse_units_case_insensitive(self):
        assert parse_units("Metric", Units.IMPERIAL) == Units.METRIC

    def test_parse_units_invalid(self):
        with pytest.raises(InvalidRequest):
            parse_units("standard", Units.IMPERIAL)

    def test_split_favorites(self):
        assert split_favorites(" London,london, ,Rome ") == ["London", "Rome"]

    def test_split_favorites_empty(self):
        assert split_favorites(None) == []

    def test_resolve_known(self):
        known = [CityConfig(name="Hong Kong", country="HK")]
        assert resolve_city("hong kong", known) == known[0]

    def test_resolve_adhoc(self):
        assert resolve_city("new delhi", []) == CityConfig(name="New Delhi", country="")
