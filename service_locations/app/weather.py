"""
Cache-aside weather lookups for locations.
"""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, Optional, Set, Tuple

from shared.errors import CoordinatesUnavailableError
from shared.logging import get_logger

from .adapters.weather_client import WeatherProviderClient
from .keys import location_key, weather_key
from .store import RedisDocumentStore

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from shared.metrics import MetricsCollector


DEFAULT_WEATHER_TTL = 60 * 60
COORDINATES_FIELD = "location"


@dataclass(frozen=True)
class WeatherResult:
    """Weather payload plus whether it was served from the cache."""

    payload: Any
    cached: bool


class WeatherCacheAside:
    """
    Serve weather from Redis, calling the provider only on a cache miss.

    Expiry is left to Redis: snapshots are written with SETEX and simply
    disappear once the TTL lapses. Concurrent misses for the same location
    are not coalesced; each one calls the provider and the last write wins.
    """

    def __init__(
        self,
        store: RedisDocumentStore,
        provider: WeatherProviderClient,
        *,
        ttl_seconds: int = DEFAULT_WEATHER_TTL,
        metrics: Optional["MetricsCollector"] = None,
    ) -> None:
        self.store = store
        self.provider = provider
        self.ttl_seconds = ttl_seconds
        self.metrics = metrics
        self.logger = get_logger("locations.weather")
        self._pending_writes: Set[asyncio.Task] = set()

    async def get_weather(self, location_id: int) -> WeatherResult:
        """Return the weather for a location, from cache when still fresh."""
        cached = await self._check(location_id)
        if cached is not None:
            self._record("hit")
            self.logger.debug("Cache hit for location weather", location_id=location_id)
            return WeatherResult(payload=cached, cached=True)

        self._record("miss")
        self.logger.debug("Cache miss for location weather", location_id=location_id)
        payload = await self._fetch_and_store(location_id)
        return WeatherResult(payload=payload, cached=False)

    async def drain(self) -> None:
        """Wait for outstanding cache writes to settle."""
        if self._pending_writes:
            await asyncio.gather(*list(self._pending_writes), return_exceptions=True)

    async def _check(self, location_id: int) -> Optional[Any]:
        value = await self.store.get_string(weather_key(location_id))
        if not value:
            return None

        try:
            return json.loads(value)
        except json.JSONDecodeError:
            self.logger.warning("Discarding malformed weather snapshot", location_id=location_id)
            return None

    async def _fetch_and_store(self, location_id: int) -> Dict[str, Any]:
        longitude, latitude = await self._resolve_coordinates(location_id)
        payload = await self.provider.get_current_weather(latitude, longitude)
        self._schedule_write(location_id, payload)
        return payload

    async def _resolve_coordinates(self, location_id: int) -> Tuple[str, str]:
        """Read the ``"lng,lat"`` pair from the location overview."""
        overview = await self.store.get_flat_map(location_key(location_id))
        coordinates = overview.get(COORDINATES_FIELD)
        if not coordinates:
            raise CoordinatesUnavailableError(location_id, "Location has no coordinates")

        parts = coordinates.split(",")
        if len(parts) != 2 or not all(part.strip() for part in parts):
            raise CoordinatesUnavailableError(
                location_id,
                "Location coordinates are malformed",
                details={"location": coordinates},
            )

        longitude, latitude = (part.strip() for part in parts)
        return longitude, latitude

    def _schedule_write(self, location_id: int, payload: Dict[str, Any]) -> None:
        # The response does not wait on this write
        task = asyncio.create_task(
            self.store.set_string_with_expiry(weather_key(location_id), json.dumps(payload), self.ttl_seconds)
        )
        self._pending_writes.add(task)
        task.add_done_callback(lambda done: self._write_finished(location_id, done))

    def _write_finished(self, location_id: int, task: asyncio.Task) -> None:
        self._pending_writes.discard(task)
        if task.cancelled():
            self.logger.warning("Weather cache write cancelled", location_id=location_id)
            return

        exc = task.exception()
        if exc is not None:
            self.logger.error("Weather cache write failed", location_id=location_id, error=str(exc))
        else:
            self.logger.debug("Weather cached", location_id=location_id, ttl=self.ttl_seconds)

    def _record(self, result: str) -> None:
        if self.metrics:
            self.metrics.increment_counter("weather_cache_requests_total", result=result)
