"""Synthetic city rows substituted when a real upstream fetch fails."""

import random

from skyboard.config.schema import CityConfig
from skyboard.ingest.units import convert_temperature, fahrenheit_to_celsius
from skyboard.models.common import Units
from skyboard.models.weather import CityWeather, WeatherCondition

MOCK_MARKER = "(mock)"
UNKNOWN_DESCRIPTION = "unknown"
MOCK_TEMP_RANGE_F = (40, 80)


def unknown_city(city: CityConfig) -> CityWeather:
    """Other-cities placeholder: zero temperature, clear-sky bucket, 'unknown'."""
    return CityWeather(
        name=city.name,
        country=city.country,
        temp=0,
        condition=WeatherCondition(
            code=800, main="Clear", description=UNKNOWN_DESCRIPTION, icon=""
        ),
        mock=True,
    )


def mock_city(city: CityConfig, units: Units) -> CityWeather:
    """Favorite-cities placeholder with a stable per-city temperature."""
    rng = random.Random(city.name.lower())
    temp_f = rng.randint(*MOCK_TEMP_RANGE_F)
    return CityWeather(
        name=city.name,
        country=city.country,
        temp=convert_temperature(fahrenheit_to_celsius(temp_f), units),
        condition=WeatherCondition(
            code=800, main="Clear", description=f"clear sky {MOCK_MARKER}", icon="01d"
        ),
        mock=True,
    )
