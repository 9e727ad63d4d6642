"""Business-day and effective-date lookups."""

from __future__ import annotations

import datetime as dt

from fastapi import APIRouter, Request

from clearhouse.models.validation import BusinessDayInfo

router = APIRouter(tags=["business-days"])


@router.get("/{day}", response_model=BusinessDayInfo)
async def business_day_info(day: dt.date, request: Request) -> BusinessDayInfo:
    return request.app.state.engine.calendar.business_day_info(day)


@router.get("/{day}/effective-dates")
async def effective_dates(day: dt.date, request: Request) -> dict[str, str]:
    """Effective dates for a file released on ``day``."""
    policy = request.app.state.engine.policy
    debit = policy.release_effective_date(day)
    return {
        "release_date": day.isoformat(),
        "ach_effective_date": policy.ach_effective_date(day).isoformat(),
        "debit_effective_date": debit.isoformat(),
        "credit_effective_date": policy.credit_effective_date(debit).isoformat(),
    }
