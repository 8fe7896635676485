"""Tests for CastingLoader, MemoryRecordSource and the source factory."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from moto import mock_aws

from fieldcast.core.config import AppSettings
from fieldcast.core.exceptions import InvalidOptionsError, RecordNotFoundError
from fieldcast.core.protocols import IRecordSource
from fieldcast.persistence import create_source
from fieldcast.persistence.dynamodb_backend import DynamoDBRecordSource
from fieldcast.persistence.loader import CastingLoader
from fieldcast.persistence.redis_backend import RedisHashSource
from tests.fakes import MemoryRecordSource


@pytest.fixture
def source():
    return MemoryRecordSource({
        "product:1": {
            "id": "1",
            "name": "Lamp",
            "prices": [{"price": "123.45", "currency": "usd"}, {"price": "234.56", "currency": "eur"}],
        },
        "product:2": {"id": "2", "name": "Desk", "prices": []},
        "order:1": {"id": "9", "placed": "2024-03-01"},
    })


class TestMemoryRecordSource:
    def test_satisfies_protocol(self, source):
        assert isinstance(source, IRecordSource)

    def test_get_returns_copy(self, source):
        record = source.get("product:2")
        record["id"] = "changed"
        assert source.get("product:2")["id"] == "2"

    def test_query_by_partition(self, source):
        assert [r["id"] for r in source.query("product")] == ["1", "2"]


class TestCastingLoader:
    def test_post_load_casting_with_deep_casters(self, source):
        loader = CastingLoader(source, {
            "rewriteFields": True,
            "stringsToNumbers": True,
            "deepCasters": {"prices": {"rewriteFields": True, "stringsToNumbers": True}},
        })
        product = loader.load("product:1")
        assert product["id"] == 1
        assert product["name"] == "Lamp"
        assert [p["price"] for p in product["prices"]] == [123.45, 234.56]
        assert [p["currency"] for p in product["prices"]] == ["usd", "eur"]

    def test_source_records_are_not_modified(self, source):
        CastingLoader(source, {"stringsToNumbers": True}).load("product:1")
        assert source.get("product:1")["id"] == "1"

    def test_load_missing_returns_none(self, source):
        assert CastingLoader(source).load("product:404") is None

    def test_require_missing_raises(self, source):
        with pytest.raises(RecordNotFoundError, match="product:404"):
            CastingLoader(source).require("product:404")

    def test_load_many(self, source):
        loader = CastingLoader(source, {"stringsToDates": True})
        assert loader.load_many("order") == [
            {"id": "9", "placed": datetime(2024, 3, 1, tzinfo=timezone.utc)},
        ]

    def test_invalid_options_fail_at_construction(self, source):
        with pytest.raises(InvalidOptionsError):
            CastingLoader(source, {"schema": {"id": "int"}})


class TestCreateSource:
    def test_memory_by_default(self):
        assert isinstance(create_source(AppSettings()), MemoryRecordSource)

    def test_redis(self):
        assert isinstance(create_source(AppSettings(source="redis")), RedisHashSource)

    def test_dynamodb(self):
        with mock_aws():
            assert isinstance(create_source(AppSettings(source="dynamodb")), DynamoDBRecordSource)
