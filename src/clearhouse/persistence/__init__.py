"""Pluggable collaborator backends behind Protocol interfaces."""

from __future__ import annotations

from clearhouse.core.config import AppSettings
from clearhouse.persistence.dynamodb_backend import DynamoDBHolidayProvider
from clearhouse.persistence.redis_backend import RedisCacheBackend
from clearhouse.persistence.s3_backend import S3FileStore


def create_persistence(settings: AppSettings | None = None):
    """Create wired-up backends from application settings.

    Returns:
        Tuple of (holiday_provider, cache, file_store).
    """
    if settings is None:
        settings = AppSettings()

    cache = RedisCacheBackend(
        host=settings.redis.host,
        port=settings.redis.port,
        db=settings.redis.db,
    )

    holiday_provider = DynamoDBHolidayProvider(
        table_suffix=settings.dynamodb.table_suffix,
        region=settings.dynamodb.region,
        endpoint_url=settings.dynamodb.endpoint_url,
        cache=cache,
    )

    file_store = S3FileStore(
        bucket=settings.s3.bucket,
        region=settings.s3.region,
        endpoint_url=settings.s3.endpoint_url,
    )

    return holiday_provider, cache, file_store
