"""Pydantic models for the WeatherAPI.com payloads we consume.

Only the fields the mapping reads are declared; everything else the provider
sends is ignored. Fields the provider sometimes omits carry defaults.
"""

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from skyboard.models.errors import MalformedUpstreamData


class UpstreamModel(BaseModel):
    model_config = {"extra": "ignore"}


class UpstreamCondition(UpstreamModel):
    code: int
    text: str = ""
    icon: str = ""


class UpstreamLocation(UpstreamModel):
    name: str
    region: str = ""
    country: str = ""
    lat: float
    lon: float
    tz_id: str = "UTC"
    localtime_epoch: int | None = None


class UpstreamCurrent(UpstreamModel):
    last_updated_epoch: int
    temp_c: float
    feelslike_c: float
    humidity: float
    pressure_mb: float = 0.0
    wind_kph: float = 0.0
    wind_degree: float = 0.0
    cloud: float = 0.0
    vis_km: float = 0.0
    condition: UpstreamCondition


class UpstreamDay(UpstreamModel):
    maxtemp_c: float
    mintemp_c: float
    avgtemp_c: float
    maxwind_kph: float = 0.0
    avghumidity: float = 0.0
    daily_chance_of_rain: float = 0.0
    uv: float = 0.0
    condition: UpstreamCondition


class UpstreamAstro(UpstreamModel):
    sunrise: str = ""
    sunset: str = ""


class UpstreamHour(UpstreamModel):
    time_epoch: int
    time: str = ""
    temp_c: float
    feelslike_c: float
    humidity: float = 0.0
    wind_kph: float = 0.0
    chance_of_rain: float = 0.0
    condition: UpstreamCondition


class UpstreamForecastDay(UpstreamModel):
    date: str
    date_epoch: int
    day: UpstreamDay
    astro: UpstreamAstro = UpstreamAstro()
    hour: list[UpstreamHour] = []


class UpstreamForecast(UpstreamModel):
    forecastday: list[UpstreamForecastDay]


class ForecastPayload(UpstreamModel):
    location: UpstreamLocation
    current: UpstreamCurrent
    forecast: UpstreamForecast


class CurrentPayload(UpstreamModel):
    location: UpstreamLocation
    current: UpstreamCurrent


class SearchResult(UpstreamModel):
    name: str
    region: str = ""
    country: str = ""
    lat: float
    lon: float


M = TypeVar("M", bound=BaseModel)


def parse_payload(model: type[M], data: Any) -> M:
    """Validate a decoded upstream body, failing fast on any shape mismatch."""
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise MalformedUpstreamData(
            f"Unexpected weather provider response: {e.error_count()} invalid field(s)"
        ) from e


def parse_search_results(data: Any) -> list[SearchResult]:
    if not isinstance(data, list):
        raise MalformedUpstreamData("Unexpected weather provider response: expected a list")
    return [parse_payload(SearchResult, item) for item in data]
