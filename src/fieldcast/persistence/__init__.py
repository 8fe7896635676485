"""Pluggable record sources behind the IRecordSource Protocol."""

from __future__ import annotations

from fieldcast.core.config import AppSettings, get_settings
from fieldcast.core.protocols import IRecordSource
from fieldcast.persistence.dynamodb_backend import DynamoDBRecordSource
from fieldcast.persistence.memory_backend import MemoryRecordSource
from fieldcast.persistence.redis_backend import RedisHashSource


def create_source(settings: AppSettings | None = None) -> IRecordSource:
    """Create the record source selected by application settings."""
    if settings is None:
        settings = get_settings()

    if settings.source == "redis":
        return RedisHashSource(
            host=settings.redis.host,
            port=settings.redis.port,
            db=settings.redis.db,
        )

    if settings.source == "dynamodb":
        return DynamoDBRecordSource(
            table=settings.dynamodb.table,
            region=settings.dynamodb.region,
            endpoint_url=settings.dynamodb.endpoint_url,
        )

    return MemoryRecordSource()
