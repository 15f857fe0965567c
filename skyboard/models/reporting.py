"""Operational health models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class HealthStatus:
    api_key_configured: bool
    upstream_reachable: bool
    state_db_connected: bool
    environment: str
    other_cities: int
    known_cities: int
