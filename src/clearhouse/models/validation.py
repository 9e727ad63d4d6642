"""Validation and calendar query result models."""

from __future__ import annotations

import datetime
from typing import Optional

from pydantic import BaseModel, Field

from clearhouse.models.envelope import EnvelopeMetadata


class ValidationResult(BaseModel):
    """Structural check outcome; violations are data, never exceptions."""

    is_valid: bool
    errors: list[str] = Field(default_factory=list)


class CompleteValidationResult(ValidationResult):
    """Structural check preceded by envelope opening when needed."""

    is_encrypted: bool = False
    integrity_valid: bool = True
    metadata: Optional[EnvelopeMetadata] = None


class BusinessDayInfo(BaseModel):
    date: datetime.date
    is_business_day: bool
    is_holiday: bool
    holiday_name: Optional[str] = None
    next_business_day: datetime.date
