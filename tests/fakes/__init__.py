"""Shared test doubles: re-export memory backends."""

from __future__ import annotations

from fieldcast.persistence.memory_backend import MemoryRecordSource

__all__ = ["MemoryRecordSource"]
