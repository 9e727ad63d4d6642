"""Seed the DynamoDB holiday table with the U.S. federal holiday schedule.

Usage:
    python scripts/seed_dynamodb.py --endpoint-url http://localhost:4566 --start-year 2024 --years 3
"""

from __future__ import annotations

import argparse
import datetime as dt
from typing import Any

import boto3

from clearhouse.calendar.holidays import federal_holidays
from clearhouse.persistence.dynamodb_backend import HOLIDAY_TABLE


def create_holiday_table(ddb: Any, suffix: str = "") -> str:
    """Create the holiday table. Skips if it already exists."""
    client = ddb.meta.client
    table_name = f"{HOLIDAY_TABLE}{suffix}"
    if table_name in client.list_tables().get("TableNames", []):
        print(f"  Table {table_name} already exists, skipping")
        return table_name
    client.create_table(
        TableName=table_name,
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
    print(f"  Created table {table_name}")
    return table_name


def seed_holidays(ddb: Any, start_year: int, years: int = 1, suffix: str = "") -> int:
    """Write the observed federal holidays for ``years`` years from ``start_year``."""
    tbl = ddb.Table(f"{HOLIDAY_TABLE}{suffix}")
    count = 0
    with tbl.batch_writer() as batch:
        for year in range(start_year, start_year + years):
            for holiday in federal_holidays(year):
                day = holiday.date.isoformat()
                batch.put_item(Item={
                    # keyed by observed year: Jan 1 of the next year can be observed Dec 31
                    "PK": f"YEAR#{day[:4]}",
                    "SK": f"DATE#{day}",
                    "date": day,
                    "name": holiday.name,
                    "recurring": holiday.recurring,
                    "is_active": True,
                })
                count += 1
    print(f"  Seeded {count} holidays for {start_year}-{start_year + years - 1}")
    return count


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed the Clearhouse holiday table")
    parser.add_argument("--endpoint-url", default=None, help="DynamoDB endpoint (e.g. http://localhost:4566)")
    parser.add_argument("--table-suffix", default="", help="Table name suffix (e.g. -dev)")
    parser.add_argument("--region", default="us-east-1", help="AWS region")
    parser.add_argument("--start-year", type=int, default=dt.date.today().year, help="First year to seed")
    parser.add_argument("--years", type=int, default=2, help="Number of years to seed")
    args = parser.parse_args()

    kwargs: dict[str, Any] = {"region_name": args.region}
    if args.endpoint_url:
        kwargs["endpoint_url"] = args.endpoint_url

    ddb = boto3.resource("dynamodb", **kwargs)

    print("Creating tables...")
    create_holiday_table(ddb, suffix=args.table_suffix)

    print("Seeding holidays...")
    seed_holidays(ddb, args.start_year, args.years, suffix=args.table_suffix)

    print("Done!")


if __name__ == "__main__":
    main()
