"""DynamoDB record source implementing IRecordSource."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

import boto3
from boto3.dynamodb.conditions import Key
from botocore.exceptions import ClientError

from fieldcast.core.exceptions import RecordSourceError

DEFAULT_SORT_KEY = "RECORD"


def _decode_decimal(value: Decimal) -> int | float:
    return int(value) if value == value.to_integral_value() else float(value)


def _decode_decimals(item: dict[str, Any]) -> dict[str, Any]:
    """Convert Decimal values in a DynamoDB item to int/float."""
    out: dict[str, Any] = {}
    for k, v in item.items():
        if isinstance(v, Decimal):
            out[k] = _decode_decimal(v)
        elif isinstance(v, dict):
            out[k] = _decode_decimals(v)
        elif isinstance(v, list):
            out[k] = [
                _decode_decimals(i) if isinstance(i, dict)
                else _decode_decimal(i) if isinstance(i, Decimal)
                else i
                for i in v
            ]
        else:
            out[k] = v
    return out


class DynamoDBRecordSource:
    """Production IRecordSource backed by a single PK/SK DynamoDB table."""

    def __init__(self, table: str, region: str = "us-east-1",
                 endpoint_url: str | None = None) -> None:
        self._table_name = table
        self._region = region
        self._endpoint_url = endpoint_url
        kwargs: dict = {"region_name": region}
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url
        self._table = boto3.resource("dynamodb", **kwargs).Table(table)

    def get(self, key: str, sort_key: str = DEFAULT_SORT_KEY) -> dict[str, Any] | None:
        """Get a single item by PK + SK. Returns None if not found."""
        try:
            resp = self._table.get_item(Key={"PK": key, "SK": sort_key})
        except ClientError as exc:
            raise RecordSourceError(f"DynamoDB get_item failed for PK={key!r}: {exc}") from exc
        item = resp.get("Item")
        return _decode_decimals(item) if item else None

    def query(self, partition: str) -> list[dict[str, Any]]:
        """Query all items with a given partition key, ordered by SK."""
        items: list[dict[str, Any]] = []
        kwargs: dict[str, Any] = {"KeyConditionExpression": Key("PK").eq(partition)}
        try:
            while True:
                resp = self._table.query(**kwargs)
                items.extend(_decode_decimals(item) for item in resp.get("Items", []))
                if "LastEvaluatedKey" not in resp:
                    break
                kwargs["ExclusiveStartKey"] = resp["LastEvaluatedKey"]
        except ClientError as exc:
            raise RecordSourceError(f"DynamoDB query failed for PK={partition!r}: {exc}") from exc
        return items
