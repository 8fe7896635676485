"""Redis hash record source implementing IRecordSource.

Redis hashes store every field as a string, which makes them the typical
input for the caster.
"""

from __future__ import annotations

from typing import Any

import redis

from fieldcast.core.exceptions import RecordSourceError


class RedisHashSource:
    """Production IRecordSource reading records stored as Redis hashes."""

    def __init__(self, host: str = "localhost", port: int = 6379, db: int = 0) -> None:
        self._host = host
        self._port = port
        self._db = db
        self._client = redis.Redis(
            host=host, port=port, db=db, decode_responses=True,
        )

    def get(self, key: str) -> dict[str, Any] | None:
        try:
            record = self._client.hgetall(key)
        except Exception as exc:
            raise RecordSourceError(f"Redis HGETALL failed for key={key!r}: {exc}") from exc
        return record or None

    def query(self, partition: str) -> list[dict[str, Any]]:
        """Return every hash whose key starts with ``partition:``, sorted by key."""
        try:
            keys = sorted(self._client.scan_iter(match=f"{partition}:*"))
            return [record for record in (self._client.hgetall(k) for k in keys) if record]
        except Exception as exc:
            raise RecordSourceError(f"Redis SCAN failed for partition={partition!r}: {exc}") from exc
