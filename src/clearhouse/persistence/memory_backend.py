"""In-memory backends for unit tests: dict-backed fakes."""

from __future__ import annotations

import json
from typing import Any

from clearhouse.core.exceptions import HolidayStoreError


class MemoryHolidayProvider:
    """List-backed IHolidayProvider; ``fail=True`` simulates an outage."""

    def __init__(self, rows: list[dict[str, Any]] | None = None, fail: bool = False) -> None:
        self.rows: list[dict[str, Any]] = list(rows or [])
        self.fail = fail
        self.calls = 0

    def get_holidays(self) -> list[dict[str, Any]]:
        self.calls += 1
        if self.fail:
            raise HolidayStoreError("holiday provider unavailable")
        return list(self.rows)


class MemoryCacheBackend:
    """Dict-backed ICacheBackend for unit tests."""

    def __init__(self) -> None:
        self._store: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._store.get(key)

    def setex(self, key: str, ttl: int, value: str) -> None:
        self._store[key] = value

    def delete(self, key: str) -> None:
        self._store.pop(key, None)

    def get_rows(self, key: str) -> list[dict[str, Any]] | None:
        raw = self._store.get(key)
        return None if raw is None else json.loads(raw)

    def set_rows(self, key: str, ttl: int, rows: list[dict[str, Any]]) -> None:
        self._store[key] = json.dumps(rows, separators=(",", ":"))


class MemoryFileStore:
    """Dict-backed IFileStore for unit tests."""

    def __init__(self) -> None:
        self._files: dict[str, bytes] = {}

    def read(self, path: str) -> bytes:
        return self._files[path]

    def write(self, path: str, data: bytes, content_type: str = "application/octet-stream") -> str:
        self._files[path] = data
        return path

    def list_files(self, prefix: str) -> list[str]:
        return [k for k in self._files if k.startswith(prefix)]
