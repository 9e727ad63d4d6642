"""Fixed-width field rendering shared by all NACHA record types."""

from __future__ import annotations

import datetime as dt
from decimal import ROUND_HALF_UP, Decimal
from typing import Union

from clearhouse.core.exceptions import InvalidEntryError

RECORD_LENGTH = 94
BLOCKING_FACTOR = 10
PADDING_RECORD = "9" * RECORD_LENGTH

Number = Union[int, Decimal, str]


def alpha(value: str | None, width: int) -> str:
    """Alphanumeric field: left-justified, space-filled, truncated to ``width``."""
    return (value or "").ljust(width)[:width]


def right(value: str | None, width: int) -> str:
    """Right-justified, space-filled (immediate destination/origin)."""
    return (value or "").rjust(width)[:width]


def numeric(value: Number, width: int) -> str:
    """Numeric field: right-justified, zero-filled.

    Values wider than the field are rejected rather than truncated, since a
    clipped amount or count would silently change the file's meaning.
    """
    digits = str(value)
    if not digits.isdigit():
        raise InvalidEntryError(f"Numeric field expects digits, got {digits!r}")
    if len(digits) > width:
        raise InvalidEntryError(f"Value {digits} does not fit a {width}-digit field")
    return digits.zfill(width)


def to_cents(amount: Number | float) -> int:
    """Canonical cents conversion: amount * 100, rounded half-up to an integer."""
    value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    return int((value * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def yymmdd(day: dt.date) -> str:
    return day.strftime("%y%m%d")


def hhmm(moment: dt.datetime) -> str:
    return moment.strftime("%H%M")


def record(*fields: str) -> str:
    line = "".join(fields)
    if len(line) != RECORD_LENGTH:
        raise InvalidEntryError(f"Record renders to {len(line)} characters, expected {RECORD_LENGTH}")
    return line
