"""Redis cache backend implementing ICacheBackend."""

from __future__ import annotations

import json
import logging
from typing import Any

import redis

from clearhouse.core.exceptions import CacheError

logger = logging.getLogger(__name__)


class RedisCacheBackend:
    """Production ICacheBackend backed by Redis.

    Holds the active holiday list as a JSON array under one key. A value that
    no longer decodes is dropped and reported as a miss so the caller rescans.
    """

    def __init__(self, host: str = "localhost", port: int = 6379, db: int = 0) -> None:
        self._client = redis.Redis(host=host, port=port, db=db, decode_responses=True)

    def get(self, key: str) -> str | None:
        try:
            return self._client.get(key)
        except (redis.RedisError, AttributeError) as exc:
            raise CacheError(f"Redis GET failed for key={key!r}: {exc}") from exc

    def setex(self, key: str, ttl: int, value: str) -> None:
        try:
            self._client.setex(key, ttl, value)
        except (redis.RedisError, AttributeError) as exc:
            raise CacheError(f"Redis SETEX failed for key={key!r}: {exc}") from exc

    def delete(self, key: str) -> None:
        try:
            self._client.delete(key)
        except (redis.RedisError, AttributeError) as exc:
            raise CacheError(f"Redis DELETE failed for key={key!r}: {exc}") from exc

    # ---- holiday rows ----

    def get_rows(self, key: str) -> list[dict[str, Any]] | None:
        raw = self.get(key)
        if raw is None:
            return None
        try:
            rows = json.loads(raw)
        except ValueError:
            rows = None
        if not isinstance(rows, list):
            logger.warning("Dropping undecodable holiday cache entry %s", key)
            self.delete(key)
            return None
        return rows

    def set_rows(self, key: str, ttl: int, rows: list[dict[str, Any]]) -> None:
        self.setex(key, ttl, json.dumps(rows, separators=(",", ":")))
