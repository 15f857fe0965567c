"""Query cache for favorite-city weather, keyed by (favorite names, units)."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime

from skyboard.client.api import ApiError, DashboardApiClient
from skyboard.client.staleness import is_stale
from skyboard.models.common import Units, utc_now
from skyboard.models.weather import CityWeather

logger = logging.getLogger(__name__)

CacheKey = tuple[tuple[str, ...], Units]


@dataclass(frozen=True)
class QueryResult:
    status: str  # "success" or "error"
    data: list[CityWeather]
    error: ApiError | None = None
    is_stale: bool = False

    @property
    def is_error(self) -> bool:
        return self.status == "error"


@dataclass
class CacheEntry:
    data: list[CityWeather] | None = None
    fetched_at: datetime | None = None
    error: ApiError | None = None
    inflight: asyncio.Task | None = field(default=None, repr=False)


def cache_key(favorites: list[str], units: Units) -> CacheKey:
    return tuple(sorted(name.casefold() for name in favorites)), units


class CityWeatherCache:
    def __init__(
        self,
        api: DashboardApiClient,
        freshness_seconds: float = 300,
        clock: Callable[[], datetime] | None = None,
    ):
        self.api = api
        self.freshness_seconds = freshness_seconds
        self.clock = clock or utc_now
        self._entries: dict[CacheKey, CacheEntry] = {}

    async def fetch(self, favorites: list[str], units: Units) -> QueryResult:
        """Cached result for the key, refreshing it when stale.

        Concurrent calls for the same key share one request. A failed refresh
        keeps the last good data visible and reports the error alongside it.
        """
        if not favorites:
            return QueryResult(status="success", data=[])

        key = cache_key(favorites, units)
        entry = self._entries.setdefault(key, CacheEntry())
        if (
            entry.data is not None
            and entry.error is None
            and not is_stale(entry.fetched_at, self.freshness_seconds, self.clock())
        ):
            return QueryResult(status="success", data=list(entry.data))

        if entry.inflight is None:
            entry.inflight = asyncio.create_task(self._refresh(key, entry, favorites, units))
        return await asyncio.shield(entry.inflight)

    def peek(self, favorites: list[str], units: Units) -> QueryResult | None:
        """Current state for the key without touching the network."""
        entry = self._entries.get(cache_key(favorites, units))
        if entry is None or (entry.data is None and entry.error is None):
            return None
        return self._result(entry)

    def invalidate(self) -> None:
        self._entries.clear()

    async def _refresh(
        self, key: CacheKey, entry: CacheEntry, favorites: list[str], units: Units
    ) -> QueryResult:
        try:
            data = await self.api.get_favorite_cities(list(favorites), units)
        except ApiError as e:
            logger.warning(
                "Favorite cities refresh failed for %s (%s): %s", list(key[0]), units, e
            )
            entry.error = e
        else:
            entry.data = data
            entry.error = None
            entry.fetched_at = self.clock()
        finally:
            entry.inflight = None
        return self._result(entry)

    def _result(self, entry: CacheEntry) -> QueryResult:
        data = list(entry.data) if entry.data is not None else []
        if entry.error is not None:
            return QueryResult(
                status="error", data=data, error=entry.error, is_stale=entry.data is not None
            )
        return QueryResult(
            status="success",
            data=data,
            is_stale=is_stale(entry.fetched_at, self.freshness_seconds, self.clock()),
        )
