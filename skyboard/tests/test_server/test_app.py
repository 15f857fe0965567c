"""Tests for the application factory: health, headers, error envelope, static files."""

from pathlib import Path
from unittest.mock import MagicMock

from fastapi.testclient import TestClient

from skyboard.config.schema import AppConfig, Environment
from skyboard.ingest.adapter import WeatherAdapter
from skyboard.server.app import create_app
from skyboard.server.middleware import BASE_HEADERS, PRODUCTION_HEADERS, security_headers


def _production(config: AppConfig, static_dir: Path) -> AppConfig:
    return config.model_copy(
        update={
            "server": config.server.model_copy(
                update={"environment": Environment.PRODUCTION, "static_dir": str(static_dir)}
            )
        }
    )


class TestHealth:
    def test_health(self, app_client: TestClient):
        resp = app_client.get("/health")
        assert resp.status_code == 200
        body = resp.json()
        assert body["message"] == "OK"
        assert body["environment"] == "development"
        assert body["uptime"] >= 0
        assert body["timestamp"] > 1_700_000_000_000


class TestSecurityHeaders:
    def test_base_headers_on_success(self, app_client: TestClient):
        resp = app_client.get("/health")
        for name, value in BASE_HEADERS.items():
            assert resp.headers[name] == value
        assert "strict-transport-security" not in resp.headers

    def test_headers_on_error(self, app_client: TestClient):
        resp = app_client.get("/api/weather")
        assert resp.status_code == 400
        assert resp.headers["x-frame-options"] == "DENY"

    def test_production_headers(
        self, default_config: AppConfig, fake_client: MagicMock, tmp_path: Path
    ):
        config = _production(default_config, tmp_path)
        client = TestClient(create_app(config, adapter=WeatherAdapter(fake_client)))
        resp = client.get("/health")
        assert resp.json()["environment"] == "production"
        assert resp.headers["strict-transport-security"].startswith("max-age=")
        assert "cdn.weatherapi.com" in resp.headers["content-security-policy"]

    def test_header_sets(self):
        assert set(security_headers(False)) == set(BASE_HEADERS)
        assert set(security_headers(True)) == set(BASE_HEADERS) | set(PRODUCTION_HEADERS)


class TestErrorEnvelope:
    def test_unknown_route(self, app_client: TestClient):
        resp = app_client.get("/api/nope")
        assert resp.status_code == 404
        assert resp.json() == {"message": "Not Found"}

    def test_unexpected_error(
        self, default_config: AppConfig, fake_client: MagicMock
    ):
        fake_client.get_forecast.side_effect = RuntimeError("bug")
        app = create_app(default_config, adapter=WeatherAdapter(fake_client))
        client = TestClient(app, raise_server_exceptions=False)
        resp = client.get("/api/weather", params={"city": "Paris"})
        assert resp.status_code == 500
        assert resp.json() == {"message": "Internal server error"}


class TestStaticFiles:
    def test_serves_built_client_in_production(
        self, default_config: AppConfig, fake_client: MagicMock, tmp_path: Path
    ):
        (tmp_path / "index.html").write_text("<html>skyboard</html>")
        client = TestClient(
            create_app(_production(default_config, tmp_path), adapter=WeatherAdapter(fake_client))
        )
        resp = client.get("/")
        assert resp.status_code == 200
        assert "skyboard" in resp.text
        assert client.get("/api/weather", params={"city": "Paris"}).status_code == 200

    def test_no_static_in_development(self, app_client: TestClient):
        assert app_client.get("/").status_code == 404

    def test_cors_in_development(self, app_client: TestClient):
        resp = app_client.get("/health", headers={"Origin": "http://localhost:5173"})
        assert resp.headers["access-control-allow-origin"] == "http://localhost:5173"
