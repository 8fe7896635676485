"""Integration tests for casting DynamoDB records against LocalStack."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from fieldcast.persistence.dynamodb_backend import DynamoDBRecordSource
from fieldcast.persistence.loader import CastingLoader
from tests.integration.conftest import LOCALSTACK_URL, skip_no_localstack

PRODUCT_OPTIONS = {
    "enableAll": True,
    "schema": {"PK": False, "SK": False, "name": False},
    "deepCasters": {"prices": {"stringsToNumbers": True}},
}


@skip_no_localstack
class TestDynamoDBIntegration:
    @pytest.fixture
    def source(self, seeded_table):
        return DynamoDBRecordSource(
            table=seeded_table,
            region="us-east-1",
            endpoint_url=LOCALSTACK_URL,
        )

    def test_product_from_seed(self, source):
        product = CastingLoader(source, PRODUCT_OPTIONS).require("PRODUCT#1")
        assert product["id"] == 1
        assert product["price"] == 123.45
        assert product["released"] == datetime(2021, 1, 1, tzinfo=timezone.utc)
        assert product["is_active"] is True
        assert product["attributes"] == {"color": "black", "watts": 40}
        assert [p["price"] for p in product["prices"]] == [123.45, 114.9]

    def test_day_month_year_release(self, source):
        product = CastingLoader(source, PRODUCT_OPTIONS).require("PRODUCT#2")
        assert product["released"] == datetime(2022, 3, 15)
        assert product["is_active"] is False

    def test_order_lines(self, source):
        loader = CastingLoader(source, {"onlySchema": True, "schema": {"qty": "number", "placed": "date"}})
        lines = loader.load_many("ORDER#1")
        assert [line["qty"] for line in lines] == [2, 1]
        assert lines[0]["placed"] == datetime(2024, 3, 1, 9, 30, tzinfo=timezone.utc)
        assert lines[0]["sku"] == "PRODUCT#1"
