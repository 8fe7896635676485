"""In-memory record source for unit tests: a dict-backed fake."""

from __future__ import annotations

from typing import Any


class MemoryRecordSource:
    """Dict-backed IRecordSource for unit tests.

    Keys follow ``partition:id`` so :meth:`query` can select a partition.
    """

    def __init__(self, records: dict[str, dict[str, Any]] | None = None) -> None:
        self._records: dict[str, dict[str, Any]] = dict(records or {})

    def put(self, key: str, record: dict[str, Any]) -> None:
        self._records[key] = record

    def get(self, key: str) -> dict[str, Any] | None:
        record = self._records.get(key)
        return dict(record) if record is not None else None

    def query(self, partition: str) -> list[dict[str, Any]]:
        prefix = f"{partition}:"
        return [dict(v) for k, v in sorted(self._records.items()) if k.startswith(prefix)]
