"""
Test helpers shared by the Locations service test suites.
"""

import json
import time
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from service_locations.app.store import ROOT_PATH, DocumentRead, FlatMapRead


class FakeClock:
    """Manually advanced clock for TTL tests."""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class InMemoryDocumentStore:
    """
    In-memory stand-in for ``RedisDocumentStore``.

    Mirrors the Redis semantics the service relies on: absent hashes read as
    ``{}``, absent documents and strings as ``None``, and strings written with
    an expiry vanish once the clock passes it. Every call is recorded in
    ``calls`` so tests can assert on store access.
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None):
        self.clock = clock or time.time
        self.hashes: Dict[str, Dict[str, str]] = {}
        self.documents: Dict[str, Any] = {}
        self.strings: Dict[str, Tuple[str, Optional[float]]] = {}
        self.calls: List[Tuple[Any, ...]] = []
        self.closed = False

    async def batch_read(self, ops: Sequence[Any]) -> List[Any]:
        self.calls.append(("batch_read", tuple(ops)))
        results: List[Any] = []
        for op in ops:
            if isinstance(op, FlatMapRead):
                results.append(dict(self.hashes.get(op.key, {})))
            elif isinstance(op, DocumentRead):
                results.append(self._read_document(op.key, op.paths))
            else:
                raise TypeError(f"Unsupported read operation: {op!r}")
        return results

    async def get_document(self, key: str, paths: Sequence[str] = (ROOT_PATH,)) -> Any:
        result, = await self.batch_read([DocumentRead(key, tuple(paths))])
        return result

    async def get_flat_map(self, key: str) -> Dict[str, str]:
        self.calls.append(("get_flat_map", key))
        return dict(self.hashes.get(key, {}))

    async def get_string(self, key: str) -> Optional[str]:
        self.calls.append(("get_string", key))
        entry = self.strings.get(key)
        if entry is None:
            return None

        value, expires_at = entry
        if expires_at is not None and self.clock() >= expires_at:
            del self.strings[key]
            return None
        return value

    async def set_string_with_expiry(self, key: str, value: str, ttl_seconds: int) -> bool:
        self.calls.append(("set_string_with_expiry", key, ttl_seconds))
        self.strings[key] = (value, self.clock() + ttl_seconds)
        return True

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        self.closed = True

    def _read_document(self, key: str, paths: Sequence[str]) -> Any:
        # Round-trip through JSON like a real JSON.GET would
        document = self.documents.get(key)
        if document is None:
            return None

        if list(paths) == [ROOT_PATH]:
            return json.loads(json.dumps(document))
        if len(paths) == 1:
            return json.loads(json.dumps(document[paths[0]]))
        return json.loads(json.dumps({path: document[path] for path in paths}))


class LocationDataFactory:
    """Factory for creating test data."""

    @staticmethod
    def create_location_overview(location_id: int = 42) -> Dict[str, str]:
        """Flat overview hash as written by the ingestion job."""
        return {
            "id": str(location_id),
            "name": "Katz's Delicatessen",
            "category": "eating",
            "location": "-73.98736,40.72229",
            "numCheckins": "9523",
            "numReviews": "1214",
            "averageStars": "4",
        }

    @staticmethod
    def create_location_details(location_id: int = 42) -> Dict[str, Any]:
        """Nested details document as stored with RedisJSON."""
        return {
            "id": location_id,
            "socials": [
                {"instagram": "katzsdeli", "facebook": "katzsdeli", "twitter": "katzsdeli"}
            ],
            "website": "katzsdelicatessen.com",
            "description": "Katz's Delicatessen, also known as Katz's of New York City.",
            "phone": "(212) 254-2246",
            "hours": [
                {"day": "Monday", "hours": "8am-10.45pm"},
                {"day": "Tuesday", "hours": "8am-10.45pm"},
            ],
        }

    @staticmethod
    def create_weather_payload() -> Dict[str, Any]:
        """Current-weather payload shaped like the OpenWeatherMap response."""
        return {
            "coord": {"lon": -73.9874, "lat": 40.7223},
            "weather": [{"id": 800, "main": "Clear", "description": "clear sky", "icon": "01d"}],
            "main": {"temp": 58.6, "feels_like": 56.1, "pressure": 1021, "humidity": 49},
            "name": "New York",
            "cod": 200,
        }

