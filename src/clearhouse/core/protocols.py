"""Protocol interfaces for the collaborators around the NACHA engine.

The engine itself never calls these; application services and adapters do.
Structural typing, no inheritance required, easy to test with isinstance().
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


# ---------------------------------------------------------------------------
# Holiday Provider
# ---------------------------------------------------------------------------

@runtime_checkable
class IHolidayProvider(Protocol):
    """Source of holiday rows: ``{"date": "YYYY-MM-DD", "recurring": bool, "name": str}``."""

    def get_holidays(self) -> list[dict[str, Any]]: ...


# ---------------------------------------------------------------------------
# Persistence: Cache Backend
# ---------------------------------------------------------------------------

@runtime_checkable
class ICacheBackend(Protocol):
    """Redis-compatible cache interface."""

    def get(self, key: str) -> str | None: ...

    def setex(self, key: str, ttl: int, value: str) -> None: ...

    def delete(self, key: str) -> None: ...

    def get_rows(self, key: str) -> list[dict[str, Any]] | None: ...

    def set_rows(self, key: str, ttl: int, rows: list[dict[str, Any]]) -> None: ...


# ---------------------------------------------------------------------------
# Persistence: File Store
# ---------------------------------------------------------------------------

@runtime_checkable
class IFileStore(Protocol):
    """S3-compatible file storage interface."""

    def read(self, path: str) -> bytes: ...

    def write(self, path: str, data: bytes, content_type: str = "application/octet-stream") -> str: ...

    def list_files(self, prefix: str) -> list[str]: ...
