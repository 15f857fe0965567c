"""Shared test fixtures."""

import json
import sqlite3
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
import yaml

from skyboard.config.defaults import DEFAULT_KNOWN_CITIES, DEFAULT_OTHER_CITIES
from skyboard.config.schema import AppConfig
from skyboard.ingest.weatherapi_client import WeatherApiClient
from skyboard.storage.database import connect, run_migrations

FIXTURE_DIR = Path(__file__).parent / "fixtures"


def load_fixture(name: str):
    with open(FIXTURE_DIR / name) as f:
        return json.load(f)


@pytest.fixture
def tmp_db(tmp_path: Path) -> sqlite3.Connection:
    """A migrated client state database in a temporary directory."""
    conn = connect(tmp_path / "test.db")
    run_migrations(conn)
    yield conn
    conn.close()


@pytest.fixture
def default_config() -> AppConfig:
    """Default AppConfig with the default city tables and a provider key."""
    return AppConfig(
        provider={"api_key": "test-key"},
        other_cities=DEFAULT_OTHER_CITIES,
        known_cities=DEFAULT_KNOWN_CITIES,
    )


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "provider": {"timeout_seconds": 5.0, "max_retries": 1},
        "server": {"port": 8080, "default_units": "metric"},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return FIXTURE_DIR


@pytest.fixture
def fake_client() -> MagicMock:
    """A WeatherApiClient stand-in returning fixture payloads."""
    client = MagicMock(spec=WeatherApiClient)
    client.has_api_key = True
    client.get_forecast = AsyncMock(return_value=load_fixture("forecast_paris.json"))
    client.get_current = AsyncMock(return_value=load_fixture("current_tokyo.json"))
    client.search = AsyncMock(return_value=load_fixture("search_paris.json"))
    return client
