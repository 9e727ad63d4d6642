"""Tests for engine wiring from settings."""

from __future__ import annotations

import pytest

from clearhouse.core.config import AppSettings, BusinessDayConfig, EncryptionConfig, S3Config
from clearhouse.core.exceptions import ConfigurationError
from clearhouse.services.engine import build_engine
from tests.fakes import MemoryFileStore, MemoryHolidayProvider


def test_no_secret_means_no_envelope():
    engine = build_engine(AppSettings(encryption=EncryptionConfig(secret_key="")))
    assert engine.envelope is None
    assert engine.holidays is None


def test_secret_enables_envelope():
    engine = build_engine(AppSettings(encryption=EncryptionConfig(secret_key="k")))
    assert engine.envelope is not None


def test_components_share_one_calendar():
    settings = AppSettings(
        business_day=BusinessDayConfig(between_convention="signed_half_open"),
        s3=S3Config(prefix="outbound/"),
    )
    engine = build_engine(settings, holiday_provider=MemoryHolidayProvider(), file_store=MemoryFileStore())
    assert engine.policy.calendar is engine.calendar
    assert engine.holidays is not None
    assert engine.encoder._path_prefix == "outbound/"


def test_prod_requires_secret_when_encrypting():
    settings = AppSettings(environment="prod", encryption=EncryptionConfig(secret_key=""))
    with pytest.raises(ConfigurationError, match="SECRET_KEY"):
        build_engine(settings)


def test_prod_without_encryption_needs_no_secret():
    settings = AppSettings(environment="prod", encryption=EncryptionConfig(secret_key="", encrypt_files=False))
    assert build_engine(settings).envelope is None
