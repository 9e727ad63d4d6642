"""Shared unit fixtures: originator config, calendar, entry factory."""

from __future__ import annotations

import datetime as dt
from decimal import Decimal

import pytest

from clearhouse.calendar.business_days import BusinessDayCalendar
from clearhouse.calendar.effective_dates import EffectiveDatePolicy
from clearhouse.calendar.holidays import federal_holidays
from clearhouse.core.config import ACHConfig
from clearhouse.core.types import AccountType, FileType
from clearhouse.models.payable import PayableEntry

SECRET = "unit-test-secret"
FIXED_NOW = dt.datetime(2024, 9, 16, 10, 15, 30, 123456)


@pytest.fixture
def ach_config() -> ACHConfig:
    return ACHConfig(
        immediate_origin="1234567890",
        immediate_destination="091000019",
        company_name="ACME PAYROLL",
        company_id="1234567890",
        originating_dfi="09100001",
    )


@pytest.fixture
def policy() -> EffectiveDatePolicy:
    return EffectiveDatePolicy(BusinessDayCalendar(federal_holidays(2024)))


@pytest.fixture
def make_entry():
    def _make(
        transaction_id: str = "tx-1",
        entry_type: FileType = FileType.DEBIT,
        amount: str = "100.00",
        routing_number: str = "123456789",
        effective_date: dt.date = dt.date(2024, 9, 17),
        account_type: AccountType = AccountType.CHECKING,
        **extra,
    ) -> PayableEntry:
        return PayableEntry(
            transaction_id=transaction_id,
            entry_type=entry_type,
            routing_number=routing_number,
            account_number=extra.pop("account_number", "000123456"),
            individual_id=extra.pop("individual_id", "EMP001"),
            individual_name=extra.pop("individual_name", "JANE DOE"),
            account_type=account_type,
            amount=Decimal(amount),
            effective_date=effective_date,
        )

    return _make
