"""Health checker: API key, provider reachability, local state DB."""

import sqlite3

import httpx

from skyboard.config.schema import AppConfig
from skyboard.models.reporting import HealthStatus


class HealthChecker:
    def __init__(self, config: AppConfig, conn: sqlite3.Connection | None = None):
        self.config = config
        self.conn = conn

    def check(self) -> HealthStatus:
        return HealthStatus(
            api_key_configured=self.config.provider.has_api_key,
            upstream_reachable=self._check_upstream(),
            state_db_connected=self._check_db(),
            environment=self.config.server.environment.value,
            other_cities=len(self.config.other_cities),
            known_cities=len(self.config.all_known_cities()),
        )

    def _check_db(self) -> bool:
        if self.conn is None:
            return False
        try:
            self.conn.execute("SELECT 1")
            return True
        except sqlite3.Error:
            return False

    def _check_upstream(self) -> bool:
        # Any HTTP answer below 500 means the provider is up; 401/403 just
        # reflect a missing or rejected key.
        provider = self.config.provider
        try:
            resp = httpx.get(
                f"{provider.base_url.rstrip('/')}/search.json",
                params={"key": provider.api_key.get_secret_value(), "q": "London"},
                headers={"User-Agent": "skyboard-health/0.1.0"},
                timeout=provider.timeout_seconds,
            )
            return resp.status_code < 500
        except httpx.HTTPError:
            return False
