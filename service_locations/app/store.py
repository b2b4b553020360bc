"""
Redis-backed store for location overviews, details documents and cached strings.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence, Tuple, Union

import redis.asyncio as redis
from redis.exceptions import RedisError

from shared.errors import StoreUnavailableError
from shared.logging import get_logger

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from shared.metrics import MetricsCollector


ROOT_PATH = "."


@dataclass(frozen=True)
class FlatMapRead:
    """Read every field of the hash stored at ``key``."""

    key: str


@dataclass(frozen=True)
class DocumentRead:
    """Read a RedisJSON document, whole or projected onto ``paths``."""

    key: str
    paths: Tuple[str, ...] = field(default=(ROOT_PATH,))

    def __post_init__(self) -> None:
        # Accept any sequence but keep the dataclass hashable
        object.__setattr__(self, "paths", tuple(self.paths) or (ROOT_PATH,))


ReadOp = Union[FlatMapRead, DocumentRead]


class RedisDocumentStore:
    """Thin async client over Redis hashes, RedisJSON documents and strings.

    Every call maps Redis failures to ``StoreUnavailableError``; nothing is
    retried locally. Missing keys are never errors: hashes read back as ``{}``
    and documents or strings as ``None``.
    """

    def __init__(
        self,
        redis_url: str,
        *,
        socket_timeout: float = 5.0,
        metrics: Optional["MetricsCollector"] = None,
        client: Optional[redis.Redis] = None,
    ) -> None:
        self.redis_url = redis_url
        self.metrics = metrics
        self.logger = get_logger("locations.store")
        self._redis = client or redis.from_url(
            redis_url,
            encoding="utf-8",
            decode_responses=True,
            socket_connect_timeout=socket_timeout,
            socket_timeout=socket_timeout,
        )

    async def close(self) -> None:
        """Close Redis connections."""
        await self._redis.aclose()

    async def ping(self) -> bool:
        """Return True when Redis responds to a ping."""
        try:
            return bool(await self._redis.ping())
        except RedisError as exc:
            self.logger.error("Redis health check failed", error=str(exc))
            return False

    async def batch_read(self, ops: Sequence[ReadOp]) -> List[Any]:
        """Execute ``ops`` in one pipelined round trip.

        Results come back in request order: a dict for each ``FlatMapRead``
        and the decoded JSON value (or None) for each ``DocumentRead``.
        """
        if not ops:
            return []

        try:
            async with self._redis.pipeline(transaction=False) as pipe:
                for op in ops:
                    if isinstance(op, FlatMapRead):
                        pipe.hgetall(op.key)
                    elif isinstance(op, DocumentRead):
                        pipe.execute_command("JSON.GET", op.key, *op.paths)
                    else:
                        raise TypeError(f"Unsupported read operation: {op!r}")
                raw_results = await pipe.execute()
        except RedisError as exc:
            self._record("batch_read", "error")
            self.logger.error("Redis pipeline failed", ops=len(ops), error=str(exc))
            raise StoreUnavailableError(str(exc), details={"operation": "batch_read"}) from exc

        self._record("batch_read", "ok")
        return [self._decode(op, raw) for op, raw in zip(ops, raw_results)]

    async def get_document(self, key: str, paths: Sequence[str] = (ROOT_PATH,)) -> Any:
        """Read one document, whole or projected onto ``paths``."""
        result, = await self.batch_read([DocumentRead(key, tuple(paths))])
        return result

    async def get_flat_map(self, key: str) -> Dict[str, str]:
        """Read every field of a hash; an absent key reads as ``{}``."""
        try:
            value = await self._redis.hgetall(key)
        except RedisError as exc:
            self._record("get_flat_map", "error")
            self.logger.error("Redis hash read failed", key=key, error=str(exc))
            raise StoreUnavailableError(str(exc), details={"operation": "get_flat_map", "key": key}) from exc

        self._record("get_flat_map", "ok")
        return value or {}

    async def get_string(self, key: str) -> Optional[str]:
        try:
            value = await self._redis.get(key)
        except RedisError as exc:
            self._record("get_string", "error")
            self.logger.error("Redis read failed", key=key, error=str(exc))
            raise StoreUnavailableError(str(exc), details={"operation": "get_string", "key": key}) from exc

        self._record("get_string", "ok")
        return value

    async def set_string_with_expiry(self, key: str, value: str, ttl_seconds: int) -> bool:
        """Overwrite ``key`` with ``value`` and reset its TTL."""
        try:
            result = await self._redis.setex(key, ttl_seconds, value)
        except RedisError as exc:
            self._record("set_string_with_expiry", "error")
            self.logger.error("Redis write failed", key=key, error=str(exc))
            raise StoreUnavailableError(
                str(exc), details={"operation": "set_string_with_expiry", "key": key}
            ) from exc

        self._record("set_string_with_expiry", "ok")
        return bool(result)

    def _decode(self, op: ReadOp, raw: Any) -> Any:
        if isinstance(op, FlatMapRead):
            return raw or {}
        if raw is None:
            return None
        return json.loads(raw)

    def _record(self, operation: str, status: str) -> None:
        if self.metrics:
            self.metrics.increment_counter("store_operations_total", operation=operation, status=status)
