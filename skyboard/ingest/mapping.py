"""Pure mapping from validated provider payloads to the canonical models."""

import logging
from datetime import datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from skyboard.ingest.conditions import map_condition
from skyboard.ingest.units import convert_speed, convert_temperature
from skyboard.ingest.upstream_schema import (
    CurrentPayload,
    ForecastPayload,
    SearchResult,
    UpstreamCondition,
    UpstreamForecastDay,
)
from skyboard.models.common import Units, title_case
from skyboard.models.weather import (
    CityWeather,
    DailyFeelsLike,
    DailyForecastEntry,
    DailyTemperatures,
    HourlyForecastEntry,
    Location,
    WeatherCondition,
    WeatherReport,
    WeatherSnapshot,
)

logger = logging.getLogger(__name__)

MAX_DAILY_ENTRIES = 7
MORNING_HOUR, EVENING_HOUR, NIGHT_HOUR = 6, 18, 23
# Offsets below the daily average (Celsius) when no hourly reading is available.
TEMP_OFFSETS_C = {"morn": 1.0, "eve": 2.0, "night": 5.0}
FEELS_LIKE_OFFSETS_C = {"morn": 2.0, "eve": 3.0, "night": 6.0}


def map_report(
    payload: ForecastPayload,
    units: Units,
    days: int = MAX_DAILY_ENTRIES,
    hourly_window: int = 24,
) -> WeatherReport:
    location = payload.location
    tz = _zone(location.tz_id)
    forecast_days = sorted(payload.forecast.forecastday, key=lambda d: d.date_epoch)
    forecast_days = forecast_days[: min(days, MAX_DAILY_ENTRIES)]
    observed_at = payload.current.last_updated_epoch

    return WeatherReport(
        current=_map_snapshot(payload, units, forecast_days, tz),
        daily=tuple(_map_day(day, units, tz) for day in forecast_days),
        hourly=_map_hourly(forecast_days, units, observed_at, hourly_window),
        lat=location.lat,
        lon=location.lon,
        timezone=location.tz_id,
        timezone_offset=_utc_offset(observed_at, tz),
    )


def map_city_current(
    payload: CurrentPayload, units: Units, name: str, country: str = ""
) -> CityWeather:
    return CityWeather(
        name=name,
        country=country or payload.location.country,
        temp=convert_temperature(payload.current.temp_c, units),
        condition=_condition(payload.current.condition),
        mock=False,
    )


def map_location(result: SearchResult) -> Location:
    return Location(
        name=result.name,
        region=result.region,
        country=result.country,
        lat=result.lat,
        lon=result.lon,
    )


def _map_snapshot(
    payload: ForecastPayload,
    units: Units,
    forecast_days: list[UpstreamForecastDay],
    tz: ZoneInfo,
) -> WeatherSnapshot:
    current = payload.current
    today = forecast_days[0] if forecast_days else None
    temp_min_c = today.day.mintemp_c if today else current.temp_c
    temp_max_c = today.day.maxtemp_c if today else current.temp_c

    return WeatherSnapshot(
        city_name=title_case(payload.location.name),
        country_code=payload.location.country,
        observed_at=current.last_updated_epoch,
        temperature=convert_temperature(current.temp_c, units),
        feels_like=convert_temperature(current.feelslike_c, units),
        temp_min=convert_temperature(temp_min_c, units),
        temp_max=convert_temperature(temp_max_c, units),
        humidity_pct=current.humidity,
        pressure=current.pressure_mb,
        wind_speed=convert_speed(current.wind_kph, units),
        wind_degrees=current.wind_degree,
        cloudiness_pct=current.cloud,
        visibility_meters=round(current.vis_km * 1000),
        condition=_condition(current.condition),
        sunrise=_astro_epoch(today.date, today.astro.sunrise, tz) if today else None,
        sunset=_astro_epoch(today.date, today.astro.sunset, tz) if today else None,
        lat=payload.location.lat,
        lon=payload.location.lon,
    )


def _map_day(day: UpstreamForecastDay, units: Units, tz: ZoneInfo) -> DailyForecastEntry:
    stats = day.day
    avg = stats.avgtemp_c

    def at_hour(hour: int, offset: float, field: str = "temp_c") -> float:
        for h in day.hour:
            if datetime.fromtimestamp(h.time_epoch, tz).hour == hour:
                return getattr(h, field)
        return avg - offset

    def t(celsius: float) -> float:
        return convert_temperature(celsius, units)

    return DailyForecastEntry(
        date=day.date_epoch,
        temp=DailyTemperatures(
            day=t(avg),
            min=t(stats.mintemp_c),
            max=t(stats.maxtemp_c),
            night=t(at_hour(NIGHT_HOUR, TEMP_OFFSETS_C["night"])),
            eve=t(at_hour(EVENING_HOUR, TEMP_OFFSETS_C["eve"])),
            morn=t(at_hour(MORNING_HOUR, TEMP_OFFSETS_C["morn"])),
        ),
        feels_like=DailyFeelsLike(
            day=t(avg),
            night=t(at_hour(NIGHT_HOUR, FEELS_LIKE_OFFSETS_C["night"], "feelslike_c")),
            eve=t(at_hour(EVENING_HOUR, FEELS_LIKE_OFFSETS_C["eve"], "feelslike_c")),
            morn=t(at_hour(MORNING_HOUR, FEELS_LIKE_OFFSETS_C["morn"], "feelslike_c")),
        ),
        humidity_pct=stats.avghumidity,
        wind_speed=convert_speed(stats.maxwind_kph, units),
        condition=_condition(stats.condition),
        precipitation_probability=round(stats.daily_chance_of_rain / 100, 2),
        uv_index=stats.uv,
        sunrise=_astro_epoch(day.date, day.astro.sunrise, tz),
        sunset=_astro_epoch(day.date, day.astro.sunset, tz),
    )


def _map_hourly(
    forecast_days: list[UpstreamForecastDay],
    units: Units,
    observed_at: int,
    window: int,
) -> tuple[HourlyForecastEntry, ...] | None:
    hours = sorted(
        (h for day in forecast_days for h in day.hour), key=lambda h: h.time_epoch
    )
    if not hours:
        return None
    start = observed_at - observed_at % 3600
    upcoming = [h for h in hours if h.time_epoch >= start][:window]
    return tuple(
        HourlyForecastEntry(
            time=h.time_epoch,
            temperature=convert_temperature(h.temp_c, units),
            feels_like=convert_temperature(h.feelslike_c, units),
            humidity_pct=h.humidity,
            wind_speed=convert_speed(h.wind_kph, units),
            condition=_condition(h.condition),
            precipitation_probability=round(h.chance_of_rain / 100, 2),
        )
        for h in upcoming
    )


def _condition(condition: UpstreamCondition) -> WeatherCondition:
    return map_condition(condition.code, condition.text, condition.icon)


def _zone(tz_id: str) -> ZoneInfo:
    try:
        return ZoneInfo(tz_id)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown time zone %r from provider, using UTC", tz_id)
        return ZoneInfo("UTC")


def _utc_offset(epoch: int, tz: ZoneInfo) -> int:
    offset = datetime.fromtimestamp(epoch, tz).utcoffset()
    return int(offset.total_seconds()) if offset is not None else 0


def _astro_epoch(date: str, clock: str, tz: ZoneInfo) -> int | None:
    """Combine a forecast date with a provider "06:45 AM" clock time."""
    try:
        local = datetime.strptime(f"{date} {clock.strip()}", "%Y-%m-%d %I:%M %p")
    except ValueError:
        return None
    return int(local.replace(tzinfo=tz).timestamp())
