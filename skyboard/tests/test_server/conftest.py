"""Fixtures for endpoint tests: the app runs against a fake provider client."""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from skyboard.config.schema import AppConfig
from skyboard.ingest.adapter import WeatherAdapter
from skyboard.server.app import create_app


@pytest.fixture
def app_client(default_config: AppConfig, fake_client: MagicMock) -> TestClient:
    app = create_app(default_config, adapter=WeatherAdapter(fake_client))
    return TestClient(app)
