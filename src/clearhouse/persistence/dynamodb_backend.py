"""DynamoDB backend implementing IHolidayProvider with optional Redis caching."""

from __future__ import annotations

import logging
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from clearhouse.core.exceptions import HolidayStoreError
from clearhouse.core.protocols import ICacheBackend

logger = logging.getLogger(__name__)

HOLIDAY_TABLE = "clearhouse-federal-holidays"


def _to_row(item: dict[str, Any]) -> dict[str, Any]:
    """Project a table item onto the provider row shape."""
    return {
        "date": item["date"],
        "recurring": bool(item.get("recurring", False)),
        "name": item.get("name", ""),
    }


class DynamoDBHolidayProvider:
    """Production IHolidayProvider backed by DynamoDB + optional cache.

    Items live under PK=``YEAR#yyyy``, SK=``DATE#yyyy-mm-dd``; rows with
    ``is_active`` false are skipped.
    """

    CACHE_TTL = 3600  # 1 hour
    CACHE_KEY = "holidays:active"

    def __init__(self, table_suffix: str = "", region: str = "us-east-1",
                 endpoint_url: str | None = None,
                 cache: ICacheBackend | None = None) -> None:
        self._table_suffix = table_suffix
        self._region = region
        self._endpoint_url = endpoint_url
        self._cache = cache
        kwargs: dict = {"region_name": region}
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url
        self._ddb = boto3.resource("dynamodb", **kwargs)

    def _table(self):
        return self._ddb.Table(f"{HOLIDAY_TABLE}{self._table_suffix}")

    def _scan_all(self) -> list[dict[str, Any]]:
        tbl = self._table()
        items: list[dict[str, Any]] = []
        kwargs: dict[str, Any] = {}
        while True:
            resp = tbl.scan(**kwargs)
            items.extend(resp.get("Items", []))
            if "LastEvaluatedKey" not in resp:
                return items
            kwargs["ExclusiveStartKey"] = resp["LastEvaluatedKey"]

    # ---- IHolidayProvider ----

    def get_holidays(self) -> list[dict[str, Any]]:
        if self._cache is not None:
            cached = self._cache.get_rows(self.CACHE_KEY)
            if cached is not None:
                return cached

        try:
            items = self._scan_all()
        except (ClientError, BotoCoreError) as exc:
            raise HolidayStoreError(f"Holiday scan failed: {exc}") from exc

        rows = sorted(
            (_to_row(item) for item in items if item.get("is_active", True)),
            key=lambda row: row["date"],
        )
        logger.debug("Loaded %d active holidays from DynamoDB", len(rows))

        if self._cache is not None:
            self._cache.set_rows(self.CACHE_KEY, self.CACHE_TTL, rows)
        return rows

    def put_holiday(self, day: str, name: str = "", recurring: bool = False,
                    is_active: bool = True) -> None:
        """Write one holiday row and drop the cached list."""
        try:
            self._table().put_item(Item={
                "PK": f"YEAR#{day[:4]}",
                "SK": f"DATE#{day}",
                "date": day,
                "name": name,
                "recurring": recurring,
                "is_active": is_active,
            })
        except (ClientError, BotoCoreError) as exc:
            raise HolidayStoreError(f"Holiday write failed for {day!r}: {exc}") from exc
        if self._cache is not None:
            self._cache.delete(self.CACHE_KEY)
