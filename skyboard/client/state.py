"""Shared dashboard state.

One object holds the selected city, units, optional coordinates and the
favorites, and notifies subscribers after every change. Views read from it
instead of listening for ad-hoc events.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from skyboard.client.api import ApiError, DashboardApiClient
from skyboard.client.demo_data import demo_cities, demo_report
from skyboard.client.favorites import FavoritesStore
from skyboard.client.storage import KeyValueStorage
from skyboard.client.weather_cache import CityWeatherCache, QueryResult
from skyboard.config.schema import AppConfig
from skyboard.models.common import Units
from skyboard.models.payloads import report_payload
from skyboard.models.weather import CityWeather

logger = logging.getLogger(__name__)

DEFAULT_CITY = "New York"
CURRENT_LOCATION = "Current Location"

Listener = Callable[["DashboardState"], None]


@dataclass(frozen=True)
class FavoriteRow:
    name: str
    weather: CityWeather | None


def extract_city_name(query: str) -> str:
    """'Paris, France' -> 'Paris'."""
    return query.split(",", 1)[0].strip()


class DashboardState:
    def __init__(
        self,
        api: DashboardApiClient,
        favorites: FavoritesStore,
        cache: CityWeatherCache | None = None,
        city: str = DEFAULT_CITY,
        units: Units = Units.IMPERIAL,
    ):
        self.api = api
        self.favorites = favorites
        self.cache = cache or CityWeatherCache(api)
        self.city = city
        self.units = units
        self.coordinates: tuple[float, float] | None = None
        self.weather: dict[str, Any] | None = None
        self.other_cities: list[CityWeather] = []
        self.using_demo_data = False
        self.last_error: ApiError | None = None
        self._listeners: list[Listener] = []

    @classmethod
    def from_config(cls, config: AppConfig, storage: KeyValueStorage) -> "DashboardState":
        """Wire the API client, favorites store and cache from the client settings."""
        settings = config.client
        api = DashboardApiClient(settings.api_base_url, timeout=settings.timeout_seconds)
        return cls(
            api,
            FavoritesStore.create(storage, key=settings.favorites_key),
            cache=CityWeatherCache(api, freshness_seconds=settings.cache_freshness_seconds),
            city=settings.default_city,
            units=config.server.default_units,
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def select_city(self, name: str) -> None:
        name = name.strip()
        if not name:
            return
        self.city = name
        self.coordinates = None
        self._notify()

    async def search(self, query: str) -> bool:
        """Select the city behind a search query if the proxy can locate it."""
        name = extract_city_name(query)
        if not name:
            return False
        try:
            await self.api.geocode(name)
        except ApiError as e:
            logger.info("Search for %r rejected: %s", name, e.message)
            self.last_error = e
            self._notify()
            return False
        self.last_error = None
        self.select_city(name)
        return True

    async def use_location(self, lat: float, lon: float) -> None:
        """Switch to coordinates, naming them via reverse geocoding when possible."""
        try:
            location = await self.api.reverse_geocode(lat, lon)
            name = location.get("name") or CURRENT_LOCATION
        except ApiError as e:
            logger.warning("Reverse geocoding failed for %s,%s: %s", lat, lon, e.message)
            name = CURRENT_LOCATION
        self.city = name
        self.coordinates = (lat, lon)
        self._notify()

    def set_units(self, units: Units) -> None:
        if units == self.units:
            return
        self.units = units
        self._notify()

    def toggle_units(self) -> Units:
        self.set_units(Units.METRIC if self.units == Units.IMPERIAL else Units.IMPERIAL)
        return self.units

    def add_favorite(self, name: str) -> bool:
        """Add a favorite and make it the selected city."""
        added = self.favorites.add(name)
        if added:
            self.cache.invalidate()
        self.select_city(name)
        return added

    def remove_favorite(self, name: str) -> bool:
        removed = self.favorites.remove(name)
        if removed:
            self.cache.invalidate()
            self._notify()
        return removed

    async def load_weather(self) -> dict[str, Any]:
        """Fetch the selected city's report, falling back to demo data on failure."""
        try:
            if self.coordinates is not None:
                lat, lon = self.coordinates
                self.weather = await self.api.get_weather(self.units, lat=lat, lon=lon)
            else:
                self.weather = await self.api.get_weather(self.units, city=self.city)
            self.using_demo_data = False
            self.last_error = None
        except ApiError as e:
            logger.warning("Weather for %s unavailable, showing demo data: %s", self.city, e)
            self.weather = report_payload(demo_report(self.city, self.units))
            self.using_demo_data = True
            self.last_error = e
        self._notify()
        return self.weather

    async def load_other_cities(self) -> list[CityWeather]:
        try:
            self.other_cities = await self.api.get_other_cities(self.units)
        except ApiError as e:
            logger.warning("Other cities unavailable, showing demo data: %s", e)
            self.other_cities = demo_cities([], self.city, self.units)
            self.using_demo_data = True
        self._notify()
        return self.other_cities

    async def load_favorites(self) -> tuple[list[FavoriteRow], QueryResult]:
        """Every favorite name paired with its weather entry, or None if missing."""
        names = self.favorites.list()
        result = await self.cache.fetch(names, self.units)
        by_name = {c.name.casefold(): c for c in result.data}
        rows = [FavoriteRow(name, by_name.get(name.casefold())) for name in names]
        return rows, result

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)
