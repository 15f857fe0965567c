"""WeatherAPI.com client with retry and rate limit handling."""

import asyncio
import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)

WEATHERAPI_BASE_URL = "https://api.weatherapi.com/v1"
DEFAULT_USER_AGENT = "skyboard/0.1.0"
RETRY_STATUSES = (503, 429)


class WeatherApiClient:
    def __init__(
        self,
        api_key: str,
        base_url: str = WEATHERAPI_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 10.0,
        max_retries: int = 2,
        retry_base_delay: float = 1.0,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_base_delay = retry_base_delay

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)

    async def get_forecast(self, query: str, days: int = 7) -> Any:
        """Location, current conditions and `days` of daily/hourly forecast."""
        return await self._get(
            "forecast.json",
            {"q": query, "days": days, "aqi": "yes", "alerts": "no"},
        )

    async def get_current(self, query: str) -> Any:
        return await self._get("current.json", {"q": query})

    async def search(self, query: str) -> Any:
        """Location search; accepts a name or a "lat,lon" pair."""
        return await self._get("search.json", {"q": query})

    async def _get(self, path: str, params: dict[str, Any]) -> Any:
        """GET with retries on 503/429 and transport errors, exponential backoff."""
        url = f"{self.base_url}/{path}"
        params = {"key": self.api_key, **params}
        headers = {"User-Agent": self.user_agent, "Accept": "application/json"}

        last_error: Exception | None = None
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            for attempt in range(self.max_retries + 1):
                try:
                    resp = await client.get(url, params=params, headers=headers)
                    if resp.status_code in RETRY_STATUSES and attempt < self.max_retries:
                        delay = self.retry_base_delay * (2**attempt)
                        logger.warning(
                            "WeatherAPI %s returned %d, retrying in %.1fs (attempt %d/%d)",
                            path, resp.status_code, delay, attempt + 1, self.max_retries,
                        )
                        await asyncio.sleep(delay)
                        continue
                    resp.raise_for_status()
                    return resp.json()
                except httpx.RequestError as e:
                    last_error = e
                    if attempt < self.max_retries:
                        delay = self.retry_base_delay * (2**attempt)
                        logger.warning(
                            "WeatherAPI request error, retrying in %.1fs: %s", delay, e
                        )
                        await asyncio.sleep(delay)
                        continue
                    raise

        assert last_error is not None
        raise last_error
