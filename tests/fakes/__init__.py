"""Shared test doubles: re-export memory backends."""

from __future__ import annotations

from clearhouse.persistence.memory_backend import (
    MemoryCacheBackend,
    MemoryFileStore,
    MemoryHolidayProvider,
)

__all__ = ["MemoryCacheBackend", "MemoryFileStore", "MemoryHolidayProvider"]
