"""Unit tests for RedisHashSource using fakeredis."""

from __future__ import annotations

from unittest.mock import patch

import fakeredis
import pytest

from fieldcast.core.exceptions import RecordSourceError
from fieldcast.persistence.loader import CastingLoader
from fieldcast.persistence.redis_backend import RedisHashSource


@pytest.fixture
def fake_server():
    return fakeredis.FakeServer()


@pytest.fixture
def fake_client(fake_server):
    return fakeredis.FakeRedis(server=fake_server, decode_responses=True)


@pytest.fixture
def source(fake_client):
    with patch("redis.Redis", return_value=fake_client):
        return RedisHashSource(host="localhost", port=6379, db=0)


class TestGet:
    def test_returns_none_on_miss(self, source):
        assert source.get("product:404") is None

    def test_returns_string_fields(self, source, fake_client):
        fake_client.hset("product:1", mapping={"id": "1", "price": "9.99", "active": "true"})
        assert source.get("product:1") == {"id": "1", "price": "9.99", "active": "true"}


class TestQuery:
    def test_returns_partition_sorted_by_key(self, source, fake_client):
        fake_client.hset("product:2", mapping={"id": "2"})
        fake_client.hset("product:1", mapping={"id": "1"})
        fake_client.hset("order:1", mapping={"id": "9"})
        assert source.query("product") == [{"id": "1"}, {"id": "2"}]

    def test_empty_partition(self, source):
        assert source.query("nothing") == []


class TestCastingFromRedis:
    def test_loader_casts_hash_values(self, source, fake_client):
        fake_client.hset("product:1", mapping={
            "id": "1", "price": "9.99", "active": "true", "added": "2024-05-01", "sku": "A-100",
        })
        loader = CastingLoader(source, {"enableAll": True, "schema": {"sku": False}})
        product = loader.require("product:1")
        assert product["id"] == 1
        assert product["price"] == 9.99
        assert product["active"] is True
        assert product["added"].year == 2024
        assert product["sku"] == "A-100"


class TestErrorWrapping:
    def test_get_wraps_redis_error(self):
        s = RedisHashSource.__new__(RedisHashSource)
        s._client = None  # will cause AttributeError -> RecordSourceError
        with pytest.raises(RecordSourceError):
            s.get("k")

    def test_wrong_type_is_wrapped(self, source, fake_client):
        fake_client.set("plain", "value")
        with pytest.raises(RecordSourceError):
            source.get("plain")
