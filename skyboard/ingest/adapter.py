"""Provider adapter: fetches from WeatherAPI.com and returns canonical models.

Every failure leaves this module as a `WeatherError` subclass; raw httpx and
validation exceptions never reach the request handlers.
"""

import logging
from collections.abc import Awaitable, Callable
from typing import Any

import httpx

from skyboard.config.schema import CityConfig
from skyboard.ingest.mapping import map_city_current, map_location, map_report
from skyboard.ingest.upstream_schema import (
    CurrentPayload,
    ForecastPayload,
    parse_payload,
    parse_search_results,
)
from skyboard.ingest.weatherapi_client import WeatherApiClient
from skyboard.models.common import Units
from skyboard.models.errors import (
    InvalidRequest,
    MalformedUpstreamData,
    NotFound,
    UpstreamFailure,
)
from skyboard.models.weather import CityWeather, Location, WeatherReport

logger = logging.getLogger(__name__)

# WeatherAPI error code for "No matching location found."
NO_MATCHING_LOCATION = 1006


class WeatherAdapter:
    def __init__(
        self,
        client: WeatherApiClient,
        forecast_days: int = 7,
        hourly_window: int = 24,
    ):
        self.client = client
        self.forecast_days = forecast_days
        self.hourly_window = hourly_window

    @property
    def has_api_key(self) -> bool:
        return self.client.has_api_key

    async def get_report(
        self,
        units: Units,
        city: str | None = None,
        lat: float | None = None,
        lon: float | None = None,
    ) -> WeatherReport:
        """Current conditions plus daily (and hourly) forecast for a city or point."""
        query = location_query(city, lat, lon)
        raw = await self._call(self.client.get_forecast, query, days=self.forecast_days)
        payload = parse_payload(ForecastPayload, raw)
        return map_report(payload, units, self.forecast_days, self.hourly_window)

    async def get_city_weather(self, city: CityConfig, units: Units) -> CityWeather:
        query = f"{city.name},{city.country}" if city.country else city.name
        raw = await self._call(self.client.get_current, query)
        payload = parse_payload(CurrentPayload, raw)
        return map_city_current(payload, units, city.name, city.country)

    async def geocode(self, city: str | None) -> Location:
        if not city or not city.strip():
            raise InvalidRequest("City parameter is required")
        results = parse_search_results(await self._call(self.client.search, city.strip()))
        if not results:
            raise NotFound("City not found")
        return map_location(results[0])

    async def reverse_geocode(self, lat: float | None, lon: float | None) -> Location:
        if lat is None or lon is None:
            raise InvalidRequest("Latitude and longitude are required")
        query = location_query(None, lat, lon)
        results = parse_search_results(await self._call(self.client.search, query))
        if not results:
            raise NotFound("No location found for these coordinates")
        return map_location(results[0])

    async def _call(
        self, request: Callable[..., Awaitable[Any]], *args: Any, **kwargs: Any
    ) -> Any:
        if not self.client.has_api_key:
            raise UpstreamFailure("Weather provider API key is not configured")
        try:
            return await request(*args, **kwargs)
        except httpx.HTTPStatusError as e:
            raise _status_error(e.response) from e
        except httpx.RequestError as e:
            logger.error("Weather provider request failed: %s", e)
            raise UpstreamFailure(f"Weather provider unreachable: {e}") from e
        except ValueError as e:
            raise MalformedUpstreamData("Weather provider returned a non-JSON body") from e


def location_query(
    city: str | None, lat: float | None, lon: float | None
) -> str:
    """Exactly one of city or a full lat/lon pair selects the location."""
    name = city.strip() if city else ""
    has_coords = lat is not None or lon is not None
    if name and has_coords:
        raise InvalidRequest("Provide either city or lat/lon parameters, not both")
    if name:
        return name
    if lat is None or lon is None:
        raise InvalidRequest("Either city or lat/lon parameters are required")
    if not -90 <= lat <= 90 or not -180 <= lon <= 180:
        raise InvalidRequest("Latitude or longitude out of range")
    return f"{lat},{lon}"


def _status_error(response: httpx.Response) -> UpstreamFailure | NotFound:
    code: int | None = None
    message = ""
    try:
        body = response.json()
        error = body.get("error", {}) if isinstance(body, dict) else {}
        code = error.get("code")
        message = error.get("message", "")
    except ValueError:
        pass

    if code == NO_MATCHING_LOCATION or response.status_code == 404:
        return NotFound(message or "City or weather data not found")
    logger.error(
        "Weather provider returned %d (code=%s): %s", response.status_code, code, message
    )
    return UpstreamFailure(
        message or f"Weather provider returned {response.status_code}",
        status_code=response.status_code,
    )
