"""Application configuration using pydantic-settings with grouped env prefixes."""

from __future__ import annotations

from typing import Literal

from pydantic import SecretStr
from pydantic_settings import BaseSettings


class ACHConfig(BaseSettings):
    """Originating company configuration rendered into NACHA headers."""

    model_config = {"env_prefix": "CLEARHOUSE_ACH_"}

    immediate_origin: str = ""
    immediate_destination: str = ""
    immediate_origin_name: str = ""  # falls back to company_name
    immediate_destination_name: str = ""
    company_name: str = ""
    company_id: str = ""
    originating_dfi: str = ""
    discretionary_data: str = ""
    standard_entry_class: str = "CCD"


class EncryptionConfig(BaseSettings):
    """Secret used to derive the at-rest envelope key."""

    model_config = {"env_prefix": "CLEARHOUSE_ENCRYPTION_"}

    secret_key: SecretStr = SecretStr("")
    encrypt_files: bool = True


class BusinessDayConfig(BaseSettings):
    """Holiday refresh cadence and day-count conventions."""

    model_config = {"env_prefix": "CLEARHOUSE_BUSINESS_DAY_"}

    holiday_refresh_hours: int = 24
    between_convention: Literal["inclusive", "signed_half_open"] = "inclusive"
    default_holiday_years: int = 1  # years after the current one in the fallback calendar


class DynamoDBConfig(BaseSettings):
    """DynamoDB configuration (holiday table)."""

    model_config = {"env_prefix": "CLEARHOUSE_DYNAMO_"}

    table_suffix: str = ""  # "-dev", "-uat", or "" for prod
    region: str = "us-east-1"
    endpoint_url: str | None = None  # LocalStack override


class RedisConfig(BaseSettings):
    """Redis cache configuration."""

    model_config = {"env_prefix": "CLEARHOUSE_REDIS_"}

    host: str = "localhost"
    port: int = 6379
    db: int = 0


class S3Config(BaseSettings):
    """S3 storage for generated NACHA files."""

    model_config = {"env_prefix": "CLEARHOUSE_S3_"}

    bucket: str = "clearhouse-nacha-files"
    region: str = "us-east-1"
    endpoint_url: str | None = None  # LocalStack override
    prefix: str = "nacha/"


class AppSettings(BaseSettings):
    """Root application settings aggregating all sub-configs."""

    model_config = {"env_prefix": "CLEARHOUSE_"}

    environment: Literal["dev", "uat", "prod"] = "dev"
    log_level: str = "INFO"

    ach: ACHConfig = ACHConfig()
    encryption: EncryptionConfig = EncryptionConfig()
    business_day: BusinessDayConfig = BusinessDayConfig()
    dynamodb: DynamoDBConfig = DynamoDBConfig()
    redis: RedisConfig = RedisConfig()
    s3: S3Config = S3Config()
