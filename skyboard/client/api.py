"""Async client for the proxy endpoints."""

import logging
from typing import Any

import httpx

from skyboard.models.common import Units
from skyboard.models.payloads import city_weather_from_payload
from skyboard.models.weather import CityWeather

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:5000"


class ApiError(Exception):
    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class DashboardApiClient:
    def __init__(self, base_url: str = DEFAULT_BASE_URL, timeout: float = 15.0):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    async def get_weather(
        self,
        units: Units,
        city: str | None = None,
        lat: float | None = None,
        lon: float | None = None,
    ) -> dict[str, Any]:
        """Combined current/daily/hourly payload for a city or a coordinate pair."""
        params: dict[str, Any] = {"units": units.value}
        if lat is not None and lon is not None:
            params.update(lat=lat, lon=lon)
        else:
            params["city"] = city or ""
        return await self._get("/api/weather", params)

    async def get_other_cities(self, units: Units) -> list[CityWeather]:
        data = await self._get("/api/other-cities", {"units": units.value})
        return [city_weather_from_payload(item) for item in data]

    async def get_favorite_cities(
        self, favorites: list[str], units: Units
    ) -> list[CityWeather]:
        data = await self._get(
            "/api/favorite-cities",
            {"units": units.value, "favorites": ",".join(favorites)},
        )
        return [city_weather_from_payload(item) for item in data]

    async def geocode(self, city: str) -> dict[str, Any]:
        return await self._get("/api/geocode", {"city": city})

    async def reverse_geocode(self, lat: float, lon: float) -> dict[str, Any]:
        return await self._get("/api/geocode/reverse", {"lat": lat, "lon": lon})

    async def _get(self, path: str, params: dict[str, Any]) -> Any:
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url, timeout=self.timeout
            ) as client:
                resp = await client.get(path, params=params)
        except httpx.RequestError as e:
            logger.error("Dashboard API request failed for %s: %s", path, e)
            raise ApiError(0, f"Network error: {e}") from e

        if resp.is_success:
            try:
                return resp.json()
            except ValueError as e:
                logger.error("Dashboard API returned a non-JSON body for %s", path)
                raise ApiError(resp.status_code, "Invalid JSON from proxy") from e
        raise ApiError(resp.status_code, _error_message(resp))


def _error_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text or resp.reason_phrase
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return resp.reason_phrase
