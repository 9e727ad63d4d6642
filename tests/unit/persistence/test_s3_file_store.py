"""Unit tests for S3FileStore using moto."""

from __future__ import annotations

import boto3
import pytest
from moto import mock_aws

from clearhouse.core.exceptions import FileStoreError
from clearhouse.persistence.s3_backend import S3FileStore

BUCKET = "test-nacha-files"


@pytest.fixture
def s3_backend():
    with mock_aws():
        client = boto3.client("s3", region_name="us-east-1")
        client.create_bucket(Bucket=BUCKET)
        yield S3FileStore(bucket=BUCKET, region="us-east-1")


class TestWrite:
    def test_write_returns_path(self, s3_backend):
        result = s3_backend.write("nacha/ACH_DR_20240917_101500000000.txt", b"1" * 94)
        assert result == "nacha/ACH_DR_20240917_101500000000.txt"

    def test_write_sets_content_type(self, s3_backend):
        s3_backend.write("nacha/a.txt", b"data", content_type="text/plain")
        head = boto3.client("s3", region_name="us-east-1").head_object(Bucket=BUCKET, Key="nacha/a.txt")
        assert head["ContentType"] == "text/plain"


class TestRead:
    def test_read_returns_bytes(self, s3_backend):
        s3_backend.write("nacha/hello.txt", b"Hello")
        assert s3_backend.read("nacha/hello.txt") == b"Hello"

    def test_read_missing_key_raises(self, s3_backend):
        with pytest.raises(FileStoreError):
            s3_backend.read("does/not/exist.txt")


class TestListFiles:
    def test_list_returns_matching_keys(self, s3_backend):
        s3_backend.write("nacha/a.txt", b"1")
        s3_backend.write("nacha/b.txt", b"2")
        s3_backend.write("other/c.txt", b"3")
        assert sorted(s3_backend.list_files("nacha/")) == ["nacha/a.txt", "nacha/b.txt"]

    def test_list_empty_prefix_returns_nothing(self, s3_backend):
        assert s3_backend.list_files("nonexistent/") == []

    def test_list_handles_pagination(self, s3_backend):
        for i in range(1050):
            s3_backend.write(f"bulk/{i:04d}.txt", b"x")
        assert len(s3_backend.list_files("bulk/")) == 1050


class TestErrors:
    def test_missing_bucket_write_raises(self):
        with mock_aws():
            store = S3FileStore(bucket="no-such-bucket", region="us-east-1")
            with pytest.raises(FileStoreError):
                store.write("nacha/x.txt", b"x")
