"""Demo weather shown while the live proxy is failing."""

import math
from datetime import datetime

from skyboard.ingest.units import (
    convert_speed,
    convert_temperature,
    fahrenheit_to_celsius,
    mph_to_kph,
)
from skyboard.models.common import Units, title_case, utc_now
from skyboard.models.weather import (
    CityWeather,
    DailyFeelsLike,
    DailyForecastEntry,
    DailyTemperatures,
    HourlyForecastEntry,
    WeatherCondition,
    WeatherReport,
    WeatherSnapshot,
)

CLEAR = WeatherCondition(800, "Clear", "clear sky", "01d")
CLOUDS = WeatherCondition(802, "Clouds", "scattered clouds", "03d")
RAIN = WeatherCondition(500, "Rain", "light rain", "10d")

DEMO_CITIES = [
    CityWeather("Seattle", "US", 37, RAIN, mock=True),
    CityWeather("Munich", "DE", 23, WeatherCondition(804, "Clouds", "overcast clouds", "04d"), mock=True),
    CityWeather("Paris", "FR", 24, WeatherCondition(701, "Mist", "mist", "50d"), mock=True),
    CityWeather("Istanbul", "TR", 58, WeatherCondition(800, "Clear", "clear sky", "01n"), mock=True),
    CityWeather("Dubai", "AE", 71, CLOUDS, mock=True),
]


def _f(fahrenheit: float, units: Units) -> float:
    return convert_temperature(fahrenheit_to_celsius(fahrenheit), units)


def _mph(mph: float, units: Units) -> float:
    return convert_speed(mph_to_kph(mph), units)


def demo_report(city: str, units: Units, now: datetime | None = None) -> WeatherReport:
    """A plausible week of weather for any city name."""
    now = now or utc_now()
    base = int(now.timestamp())
    hour_start = base - base % 3600
    day_start = base - base % 86400

    current = WeatherSnapshot(
        city_name=title_case(city),
        country_code="US",
        observed_at=base,
        temperature=_f(39, units),
        feels_like=_f(31, units),
        temp_min=_f(37, units),
        temp_max=_f(41, units),
        humidity_pct=50,
        pressure=1015,
        wind_speed=_mph(16, units),
        wind_degrees=350,
        cloudiness_pct=0,
        visibility_meters=10000,
        condition=CLEAR,
        sunrise=day_start + 6 * 3600,
        sunset=day_start + 19 * 3600,
    )

    daily = []
    for i in range(7):
        condition = CLEAR if i % 2 == 0 else (RAIN if i % 3 == 0 else CLOUDS)
        daily.append(
            DailyForecastEntry(
                date=day_start + i * 86400,
                temp=DailyTemperatures(
                    day=_f(39 + i * 3, units),
                    min=_f(37 - i % 2, units),
                    max=_f(41 + i % 3 + i * 3, units),
                    night=_f(31 + i % 4, units),
                    eve=_f(38 + i % 3, units),
                    morn=_f(35 + i % 2, units),
                ),
                feels_like=DailyFeelsLike(
                    day=_f(35 + i * 2, units),
                    night=_f(28 + i % 3, units),
                    eve=_f(33 + i % 2, units),
                    morn=_f(30 + i % 2, units),
                ),
                humidity_pct=50 + i % 20,
                wind_speed=_mph(16 - i % 5, units),
                condition=condition,
                precipitation_probability=0.2,
                uv_index=6.7,
                sunrise=day_start + i * 86400 + 6 * 3600,
                sunset=day_start + i * 86400 + 19 * 3600,
            )
        )

    hourly = []
    for i in range(24):
        condition = CLEAR if i % 3 == 0 else (RAIN if i % 5 == 0 else CLOUDS)
        hourly.append(
            HourlyForecastEntry(
                time=hour_start + i * 3600,
                temperature=_f(40 + math.sin(i / 6) * 8, units),
                feels_like=_f(38 + math.sin(i / 6) * 10, units),
                humidity_pct=round(45 + math.cos(i / 8) * 20),
                wind_speed=_mph(8 + math.sin(i / 4) * 4, units),
                condition=condition,
                precipitation_probability=0.4 if i % 5 == 0 else (0.2 if i % 7 == 0 else 0.0),
            )
        )

    return WeatherReport(
        current=current,
        daily=tuple(daily),
        hourly=tuple(hourly),
        lat=40.71,
        lon=-74.01,
        timezone="America/New_York",
        timezone_offset=-14400,
    )


def demo_cities(favorites: list[str], current_city: str, units: Units) -> list[CityWeather]:
    """Demo rows for the favorites and current city, or all of them if none match."""
    wanted = {name.casefold() for name in favorites} | {current_city.casefold()}
    matches = [c for c in DEMO_CITIES if c.name.casefold() in wanted]
    rows = matches or DEMO_CITIES
    return [
        CityWeather(c.name, c.country, _f(c.temp, units), c.condition, mock=True)
        for c in rows
    ]
