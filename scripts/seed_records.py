"""Seed a DynamoDB table with sample string-valued records.

Items are written the way a CMS export or a CSV import leaves them: numbers,
dates, flags and JSON blobs all stored as strings, ready to be cast on load.

Usage:
    python scripts/seed_records.py --endpoint-url http://localhost:4566
    python scripts/seed_records.py --from-json products.json --table fieldcast-records-dev
"""

from __future__ import annotations

import argparse
import json
from decimal import Decimal
from pathlib import Path
from typing import Any

import boto3

DEFAULT_TABLE = "fieldcast-records"

SAMPLE_RECORDS: list[dict[str, Any]] = [
    {
        "PK": "PRODUCT#1", "SK": "RECORD",
        "id": "1", "name": "Desk lamp", "price": "123.45",
        "released": "2021-01-01", "is_active": "true",
        "attributes": '{"color": "black", "watts": 40}',
        "prices": [
            {"price": "123.45", "currency": "usd"},
            {"price": "114.90", "currency": "eur"},
        ],
    },
    {
        "PK": "PRODUCT#2", "SK": "RECORD",
        "id": "2", "name": "Standing desk", "price": "499.00",
        "released": "15-03-2022", "is_active": "false",
        "attributes": '{"width_cm": 140}',
        "prices": [{"price": "499.00", "currency": "usd"}],
    },
    {
        "PK": "ORDER#1", "SK": "LINE#001",
        "sku": "PRODUCT#1", "qty": "2", "placed": "2024-03-01T09:30:00Z",
    },
    {
        "PK": "ORDER#1", "SK": "LINE#002",
        "sku": "PRODUCT#2", "qty": "1", "placed": "2024-03-01T09:30:00Z",
    },
]


def create_table(ddb: Any, table: str = DEFAULT_TABLE) -> None:
    """Create the PK/SK records table. Skips if it already exists."""
    client = ddb.meta.client
    existing = client.list_tables().get("TableNames", [])

    if table in existing:
        print(f"  Table {table} already exists, skipping")
        return
    client.create_table(
        TableName=table,
        KeySchema=[
            {"AttributeName": "PK", "KeyType": "HASH"},
            {"AttributeName": "SK", "KeyType": "RANGE"},
        ],
        AttributeDefinitions=[
            {"AttributeName": "PK", "AttributeType": "S"},
            {"AttributeName": "SK", "AttributeType": "S"},
        ],
        BillingMode="PAY_PER_REQUEST",
    )
    print(f"  Created table {table}")


def _json_to_dynamodb(obj: Any) -> Any:
    """Convert JSON-parsed floats to Decimal for DynamoDB."""
    if isinstance(obj, float):
        return Decimal(str(obj))
    if isinstance(obj, dict):
        return {k: _json_to_dynamodb(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_json_to_dynamodb(i) for i in obj]
    return obj


def seed_records(ddb: Any, table: str = DEFAULT_TABLE, records: list[dict[str, Any]] | None = None) -> int:
    """Write ``records`` (or the built-in samples) and return how many were written."""
    items = SAMPLE_RECORDS if records is None else records
    tbl = ddb.Table(table)
    with tbl.batch_writer() as batch:
        for item in items:
            batch.put_item(Item=_json_to_dynamodb(item))
    print(f"  Seeded {len(items)} records into {table}")
    return len(items)


def load_json_records(path: Path) -> list[dict[str, Any]]:
    """Read a JSON array of items, each carrying its own PK and SK."""
    data = json.loads(path.read_text())
    if not isinstance(data, list):
        raise SystemExit(f"{path} must hold a JSON array of records")
    return data


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed a DynamoDB records table for fieldcast")
    parser.add_argument("--endpoint-url", default=None, help="DynamoDB endpoint (e.g. http://localhost:4566)")
    parser.add_argument("--table", default=DEFAULT_TABLE, help="Table name")
    parser.add_argument("--region", default="us-east-1", help="AWS region")
    parser.add_argument("--from-json", type=Path, default=None, help="JSON array of items to seed")
    args = parser.parse_args()

    kwargs: dict[str, Any] = {"region_name": args.region}
    if args.endpoint_url:
        kwargs["endpoint_url"] = args.endpoint_url

    ddb = boto3.resource("dynamodb", **kwargs)

    print("Creating table...")
    create_table(ddb, table=args.table)

    print("Seeding data...")
    records = load_json_records(args.from_json) if args.from_json else None
    seed_records(ddb, table=args.table, records=records)

    print("Done!")


if __name__ == "__main__":
    main()
