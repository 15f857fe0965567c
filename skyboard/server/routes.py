"""Proxy endpoints: the client never talks to the weather provider directly."""

import asyncio
import logging

from fastapi import APIRouter, Depends

from skyboard.config.schema import AppConfig, CityConfig
from skyboard.ingest.adapter import WeatherAdapter
from skyboard.models.common import Units, title_case
from skyboard.models.errors import InvalidRequest, WeatherError
from skyboard.models.payloads import (
    city_weather_payload,
    location_payload,
    report_payload,
)
from skyboard.models.weather import CityWeather
from skyboard.server.deps import get_adapter, get_config
from skyboard.server.placeholders import mock_city, unknown_city

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["weather"])


@router.get("/weather")
async def get_weather(
    city: str | None = None,
    lat: float | None = None,
    lon: float | None = None,
    units: str | None = None,
    adapter: WeatherAdapter = Depends(get_adapter),
    config: AppConfig = Depends(get_config),
):
    """Current weather with daily (and hourly) forecast for a city or a point."""
    report = await adapter.get_report(
        parse_units(units, config.server.default_units), city=city, lat=lat, lon=lon
    )
    return report_payload(report)


@router.get("/other-cities")
async def get_other_cities(
    units: str | None = None,
    adapter: WeatherAdapter = Depends(get_adapter),
    config: AppConfig = Depends(get_config),
):
    """Current weather for the configured city list; failures become placeholders."""
    unit_system = parse_units(units, config.server.default_units)

    async def fetch(city: CityConfig) -> CityWeather:
        try:
            return await adapter.get_city_weather(city, unit_system)
        except WeatherError as e:
            logger.warning("Other-cities fetch failed for %s: %s", city.name, e.message)
            return unknown_city(city)

    results = await asyncio.gather(*(fetch(c) for c in config.other_cities))
    return [city_weather_payload(r) for r in results]


@router.get("/favorite-cities")
async def get_favorite_cities(
    units: str | None = None,
    favorites: str | None = None,
    adapter: WeatherAdapter = Depends(get_adapter),
    config: AppConfig = Depends(get_config),
):
    """Current weather for the requested names, one entry per distinct name."""
    unit_system = parse_units(units, config.server.default_units)
    names = split_favorites(favorites)
    logger.info("Favorite cities request: units=%s favorites=%s", unit_system, names)
    if not names:
        return []

    cities = [resolve_city(name, config.all_known_cities()) for name in names]
    if not adapter.has_api_key:
        logger.warning("No weather provider API key, returning mock favorite cities")
        return [city_weather_payload(mock_city(c, unit_system)) for c in cities]

    async def fetch(city: CityConfig) -> CityWeather:
        try:
            return await adapter.get_city_weather(city, unit_system)
        except WeatherError as e:
            logger.warning("Favorite-cities fetch failed for %s: %s", city.name, e.message)
            return mock_city(city, unit_system)

    results = await asyncio.gather(*(fetch(c) for c in cities))
    return [city_weather_payload(r) for r in results]


@router.get("/geocode")
async def geocode(
    city: str | None = None, adapter: WeatherAdapter = Depends(get_adapter)
):
    """First location matching a city name."""
    return location_payload(await adapter.geocode(city))


@router.get("/geocode/reverse")
async def reverse_geocode(
    lat: float | None = None,
    lon: float | None = None,
    adapter: WeatherAdapter = Depends(get_adapter),
):
    """Nearest named location for a coordinate pair."""
    return location_payload(await adapter.reverse_geocode(lat, lon))


def parse_units(value: str | None, default: Units) -> Units:
    if value is None or value == "":
        return default
    try:
        return Units(value.lower())
    except ValueError:
        raise InvalidRequest("units must be 'metric' or 'imperial'") from None


def split_favorites(raw: str | None) -> list[str]:
    """Comma-separated names, trimmed, blanks dropped, de-duplicated case-insensitively."""
    if not raw:
        return []
    seen: set[str] = set()
    names: list[str] = []
    for part in raw.split(","):
        name = part.strip()
        if name and name.casefold() not in seen:
            seen.add(name.casefold())
            names.append(name)
    return names


def resolve_city(name: str, known: list[CityConfig]) -> CityConfig:
    """Known-city table first, otherwise an ad-hoc city queried by name alone."""
    for city in known:
        if city.name.casefold() == name.casefold():
            return city
    return CityConfig(name=title_case(name), country="")
