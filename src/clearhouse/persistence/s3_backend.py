"""S3 file storage backend implementing IFileStore."""

from __future__ import annotations

import logging

import boto3
from botocore.exceptions import ClientError

from clearhouse.core.exceptions import FileStoreError

logger = logging.getLogger(__name__)


class S3FileStore:
    """Production IFileStore for generated NACHA files."""

    def __init__(self, bucket: str, region: str = "us-east-1",
                 endpoint_url: str | None = None) -> None:
        self._bucket = bucket
        kwargs: dict = {"region_name": region}
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url
        self._client = boto3.client("s3", **kwargs)

    def read(self, path: str) -> bytes:
        try:
            resp = self._client.get_object(Bucket=self._bucket, Key=path)
            return resp["Body"].read()
        except ClientError as exc:
            raise FileStoreError(f"S3 read failed for {path!r}: {exc}") from exc

    def write(self, path: str, data: bytes, content_type: str = "application/octet-stream") -> str:
        try:
            self._client.put_object(
                Bucket=self._bucket, Key=path, Body=data, ContentType=content_type,
            )
        except ClientError as exc:
            raise FileStoreError(f"S3 write failed for {path!r}: {exc}") from exc
        logger.info("Stored %s in s3://%s (%d bytes)", path, self._bucket, len(data))
        return path

    def list_files(self, prefix: str) -> list[str]:
        try:
            keys: list[str] = []
            paginator = self._client.get_paginator("list_objects_v2")
            for page in paginator.paginate(Bucket=self._bucket, Prefix=prefix):
                for obj in page.get("Contents", []):
                    keys.append(obj["Key"])
            return keys
        except ClientError as exc:
            raise FileStoreError(f"S3 list failed for prefix={prefix!r}: {exc}") from exc
