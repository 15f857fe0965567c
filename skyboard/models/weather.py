"""Canonical weather models, independent of any provider's format.

Values are already expressed in the unit system that was requested when the
record was built; the unit system itself is not stored.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class WeatherCondition:
    code: int
    main: str
    description: str
    icon: str = ""


@dataclass(frozen=True)
class WeatherSnapshot:
    city_name: str
    country_code: str
    observed_at: int  # epoch seconds
    temperature: float
    feels_like: float
    temp_min: float
    temp_max: float
    humidity_pct: float
    pressure: float  # hPa
    wind_speed: float
    wind_degrees: float
    cloudiness_pct: float
    visibility_meters: float
    condition: WeatherCondition
    sunrise: int | None
    sunset: int | None
    lat: float = 0.0
    lon: float = 0.0

    @property
    def condition_code(self) -> int:
        return self.condition.code

    @property
    def condition_main(self) -> str:
        return self.condition.main

    @property
    def condition_description(self) -> str:
        return self.condition.description


@dataclass(frozen=True)
class DailyTemperatures:
    day: float
    min: float
    max: float
    night: float
    eve: float
    morn: float


@dataclass(frozen=True)
class DailyFeelsLike:
    day: float
    night: float
    eve: float
    morn: float


@dataclass(frozen=True)
class DailyForecastEntry:
    date: int  # epoch seconds, forecast date at 00:00 UTC
    temp: DailyTemperatures
    feels_like: DailyFeelsLike
    humidity_pct: float
    wind_speed: float
    condition: WeatherCondition
    precipitation_probability: float  # 0..1
    uv_index: float
    sunrise: int | None
    sunset: int | None


@dataclass(frozen=True)
class HourlyForecastEntry:
    time: int  # epoch seconds
    temperature: float
    feels_like: float
    humidity_pct: float
    wind_speed: float
    condition: WeatherCondition
    precipitation_probability: float  # 0..1


@dataclass(frozen=True)
class WeatherReport:
    current: WeatherSnapshot
    daily: tuple[DailyForecastEntry, ...]
    hourly: tuple[HourlyForecastEntry, ...] | None
    lat: float
    lon: float
    timezone: str
    timezone_offset: int


@dataclass(frozen=True)
class CityWeather:
    """One row of the other-cities / favorite-cities batches."""

    name: str
    country: str
    temp: float
    condition: WeatherCondition
    mock: bool = False


@dataclass(frozen=True)
class Location:
    name: str
    region: str
    country: str
    lat: float
    lon: float
