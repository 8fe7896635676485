"""Application configuration using pydantic-settings with grouped env prefixes."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings


class CasterSettings(BaseSettings):
    """Defaults applied to caster options that leave tuning parameters unset."""

    model_config = {"env_prefix": "FIELDCAST_CASTER_"}

    number_max_chars: int = 8
    date_formats: tuple[str, ...] = ("%d-%m-%Y", "%d-%m-%y")


class RedisConfig(BaseSettings):
    """Redis hash record source configuration."""

    model_config = {"env_prefix": "FIELDCAST_REDIS_"}

    host: str = "localhost"
    port: int = 6379
    db: int = 0


class DynamoDBConfig(BaseSettings):
    """DynamoDB record source configuration."""

    model_config = {"env_prefix": "FIELDCAST_DYNAMO_"}

    table: str = "fieldcast-records"
    region: str = "us-east-1"
    endpoint_url: str | None = None  # LocalStack override


class AppSettings(BaseSettings):
    """Root application settings aggregating all sub-configs."""

    model_config = {"env_prefix": "FIELDCAST_"}

    environment: Literal["dev", "uat", "prod"] = "dev"
    log_level: str = "INFO"
    source: Literal["memory", "redis", "dynamodb"] = "memory"

    caster: CasterSettings = CasterSettings()
    redis: RedisConfig = RedisConfig()
    dynamodb: DynamoDBConfig = DynamoDBConfig()


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Process-wide settings, read from the environment once."""
    return AppSettings()
