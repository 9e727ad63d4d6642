"""Tests for the NACHAFile transmission lifecycle."""

from __future__ import annotations

import datetime as dt

import pytest

from clearhouse.core.exceptions import InvalidStatusTransition
from clearhouse.core.types import FileStatus, FileType
from clearhouse.models.nacha_file import NACHAFile


@pytest.fixture
def nacha_file():
    return NACHAFile(
        id="nacha_1",
        filename="ACH_DR_20240917_101500000000.txt",
        file_type=FileType.DEBIT,
        content="",
        effective_date=dt.date(2024, 9, 17),
        transaction_count=1,
        generated_at=dt.datetime(2024, 9, 16, 10, 15),
    )


class TestTransitions:
    def test_starts_generated(self, nacha_file):
        assert nacha_file.status == FileStatus.GENERATED
        assert not nacha_file.transmitted

    def test_mark_transmitted(self, nacha_file):
        at = dt.datetime(2024, 9, 16, 11, 0)
        nacha_file.mark_transmitted(at)
        assert nacha_file.status == FileStatus.TRANSMITTED
        assert nacha_file.transmitted
        assert nacha_file.transmitted_at == at

    def test_failed_can_retry(self, nacha_file):
        nacha_file.mark_failed()
        nacha_file.mark_failed()
        nacha_file.mark_transmitted()
        assert nacha_file.status == FileStatus.TRANSMITTED

    def test_transmitted_is_terminal(self, nacha_file):
        nacha_file.mark_transmitted()
        with pytest.raises(InvalidStatusTransition):
            nacha_file.mark_failed()
        with pytest.raises(InvalidStatusTransition):
            nacha_file.mark_transmitted()
