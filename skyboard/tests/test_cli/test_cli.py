"""Tests for CLI commands."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from skyboard.cli import main
from skyboard.config.loader import load_config
from skyboard.ingest.adapter import WeatherAdapter


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("WEATHERAPI_KEY", "SKYBOARD_ENV", "NODE_ENV"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    path = tmp_path / "test.yaml"
    path.write_text("")
    return path


class TestCLI:
    def test_no_command_returns_1(self, capsys):
        assert main([]) == 1

    def test_config_show(self, config_path: Path, capsys):
        result = main(["--config", str(config_path), "config", "show"])
        assert result == 0
        out = capsys.readouterr().out
        assert "weatherapi.com" in out
        assert "San Francisco" in out

    def test_config_show_masks_key(self, config_path: Path, capsys, monkeypatch):
        monkeypatch.setenv("WEATHERAPI_KEY", "super-secret")
        main(["--config", str(config_path), "config", "show"])
        assert "super-secret" not in capsys.readouterr().out

    def test_config_set(self, config_path: Path, capsys):
        result = main(["--config", str(config_path), "config", "set", "server.port=8081"])
        assert result == 0
        assert "8081" in capsys.readouterr().out
        assert load_config(config_path, env={}).server.port == 8081

    def test_config_set_keeps_other_values(self, config_path: Path, capsys):
        config_path.write_text("server:\n  host: 127.0.0.1\n")
        assert main(["--config", str(config_path), "config", "set", "server.port=9000"]) == 0
        config = load_config(config_path, env={})
        assert config.server.host == "127.0.0.1"
        assert config.server.port == 9000

    def test_config_set_bad_format(self, config_path: Path, capsys):
        assert main(["--config", str(config_path), "config", "set", "server.port"]) == 1

    def test_config_set_unknown_key(self, config_path: Path, capsys):
        assert main(["--config", str(config_path), "config", "set", "server.nope=1"]) == 1

    def test_favorites_round_trip(self, config_path: Path, tmp_path: Path, capsys):
        db = str(tmp_path / "state.db")
        base = ["--config", str(config_path), "--db", db, "favorites"]

        assert main([*base, "add", "Paris"]) == 0
        assert main([*base, "add", "paris"]) == 0
        assert main([*base, "add", "Lima"]) == 0
        capsys.readouterr()

        assert main([*base, "list"]) == 0
        assert capsys.readouterr().out.splitlines() == ["Paris", "Lima"]

        assert main([*base, "remove", "PARIS"]) == 0
        assert main([*base, "remove", "Paris"]) == 1
        capsys.readouterr()
        main([*base, "list"])
        assert capsys.readouterr().out.splitlines() == ["Lima"]

    def test_favorites_empty(self, config_path: Path, tmp_path: Path, capsys):
        main(["--config", str(config_path), "--db", str(tmp_path / "s.db"), "favorites", "list"])
        assert "No favorite cities" in capsys.readouterr().out

    def test_weather(self, config_path: Path, fake_client: MagicMock, capsys):
        with patch(
            "skyboard.server.app.build_adapter", return_value=WeatherAdapter(fake_client)
        ):
            result = main(["--config", str(config_path), "weather", "Paris", "--units", "metric"])
        assert result == 0
        out = capsys.readouterr().out
        assert "Paris, France" in out
        assert "15.0°C" in out
        assert "SW" in out

    def test_weather_error(self, config_path: Path, capsys):
        # No API key in the environment, so the adapter refuses before any request.
        result = main(["--config", str(config_path), "weather", "Paris"])
        assert result == 1
        assert "not configured" in capsys.readouterr().out

    def test_health(self, config_path: Path, tmp_path: Path, capsys):
        with patch(
            "skyboard.reporting.health_checker.HealthChecker._check_upstream",
            return_value=True,
        ):
            result = main(
                ["--config", str(config_path), "--db", str(tmp_path / "h.db"), "health"]
            )
        assert result == 0
        out = capsys.readouterr().out
        assert "API key: MISSING" in out
        assert "State DB: OK" in out
        assert "Other cities: 5 | Known cities: 15" in out
