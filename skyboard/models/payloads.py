"""JSON shapes exchanged between the proxy and its clients."""

from dataclasses import asdict
from typing import Any

from skyboard.models.weather import (
    CityWeather,
    DailyForecastEntry,
    HourlyForecastEntry,
    Location,
    WeatherCondition,
    WeatherReport,
    WeatherSnapshot,
)


def condition_payload(condition: WeatherCondition) -> dict[str, Any]:
    return {
        "id": condition.code,
        "main": condition.main,
        "description": condition.description,
        "icon": condition.icon,
    }


def snapshot_payload(snapshot: WeatherSnapshot, timezone_offset: int = 0) -> dict[str, Any]:
    return {
        "coord": {"lon": snapshot.lon, "lat": snapshot.lat},
        "weather": [condition_payload(snapshot.condition)],
        "main": {
            "temp": snapshot.temperature,
            "feels_like": snapshot.feels_like,
            "temp_min": snapshot.temp_min,
            "temp_max": snapshot.temp_max,
            "pressure": snapshot.pressure,
            "humidity": snapshot.humidity_pct,
        },
        "visibility": snapshot.visibility_meters,
        "wind": {"speed": snapshot.wind_speed, "deg": snapshot.wind_degrees},
        "clouds": {"all": snapshot.cloudiness_pct},
        "dt": snapshot.observed_at,
        "sys": {
            "country": snapshot.country_code,
            "sunrise": snapshot.sunrise,
            "sunset": snapshot.sunset,
        },
        "timezone": timezone_offset,
        "name": snapshot.city_name,
    }


def daily_payload(entry: DailyForecastEntry) -> dict[str, Any]:
    return {
        "dt": entry.date,
        "sunrise": entry.sunrise,
        "sunset": entry.sunset,
        "temp": asdict(entry.temp),
        "feels_like": asdict(entry.feels_like),
        "humidity": entry.humidity_pct,
        "wind_speed": entry.wind_speed,
        "weather": [condition_payload(entry.condition)],
        "pop": entry.precipitation_probability,
        "uvi": entry.uv_index,
    }


def hourly_payload(entry: HourlyForecastEntry) -> dict[str, Any]:
    return {
        "time": entry.time,
        "temp": entry.temperature,
        "feels_like": entry.feels_like,
        "humidity": entry.humidity_pct,
        "wind_speed": entry.wind_speed,
        "weather": [condition_payload(entry.condition)],
        "chance_of_rain": entry.precipitation_probability,
    }


def report_payload(report: WeatherReport) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "lat": report.lat,
        "lon": report.lon,
        "timezone": report.timezone,
        "timezone_offset": report.timezone_offset,
        "current": snapshot_payload(report.current, report.timezone_offset),
        "daily": [daily_payload(d) for d in report.daily],
    }
    if report.hourly is not None:
        payload["hourly"] = [hourly_payload(h) for h in report.hourly]
    return payload


def city_weather_payload(city: CityWeather) -> dict[str, Any]:
    return {
        "name": city.name,
        "country": city.country,
        "temp": city.temp,
        "weather": [condition_payload(city.condition)],
        "mock": city.mock,
    }


def city_weather_from_payload(data: dict[str, Any]) -> CityWeather:
    """Parse one batch row; rows without a weather list get the clear-sky bucket."""
    weather = data.get("weather") or [{}]
    first = weather[0] if isinstance(weather[0], dict) else {}
    return CityWeather(
        name=str(data.get("name", "")),
        country=str(data.get("country", "")),
        temp=float(data.get("temp", 0) or 0),
        condition=WeatherCondition(
            code=int(first.get("id", 800)),
            main=str(first.get("main", "Clear")),
            description=str(first.get("description", "")),
            icon=str(first.get("icon", "")),
        ),
        mock=bool(data.get("mock", False)),
    )


def location_payload(location: Location) -> dict[str, Any]:
    return asdict(location)
