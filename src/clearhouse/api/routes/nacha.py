"""NACHA generation and validation endpoints."""

from __future__ import annotations

import datetime as dt

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field, ValidationError

from clearhouse.core.exceptions import (
    EnvelopeError,
    InvalidEntryError,
    NoEligibleTransactionsError,
)
from clearhouse.core.types import FileType
from clearhouse.models.payable import (
    ACHTransaction,
    TransactionEntry,
    entries_from_split,
    entries_from_transactions,
)
from clearhouse.models.validation import ValidationResult

router = APIRouter(tags=["nacha"])


class GenerateRequest(BaseModel):
    file_type: FileType
    effective_date: dt.date | None = None
    release_date: dt.date | None = None
    transactions: list[ACHTransaction] = Field(default_factory=list)
    entries: list[TransactionEntry] = Field(default_factory=list)


class ValidateRequest(BaseModel):
    content: str
    strict: bool = False


@router.post("/generate")
def generate(body: GenerateRequest, request: Request) -> dict:
    """Generate a file from pending transactions or split entries.

    ``release_date`` wins over ``effective_date`` when both are given.
    """
    if body.release_date is None and body.effective_date is None:
        raise HTTPException(status_code=422, detail="effective_date or release_date is required")

    service = request.app.state.engine.generation
    try:
        payables = entries_from_transactions(body.transactions, body.file_type)
        payables += entries_from_split(body.entries, body.file_type)
        if body.release_date is not None:
            generated = service.generate_daily(payables, body.file_type, body.release_date)
        else:
            generated = service.generate(payables, body.file_type, body.effective_date)
    except NoEligibleTransactionsError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except (InvalidEntryError, ValidationError) as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    nacha_file = generated.nacha_file
    return {
        "success": True,
        "data": {
            "file": nacha_file.model_dump(mode="json", exclude={"content"}),
            "content": generated.content,
            "entry_count": generated.entry_count,
            "entry_hash": generated.entry_hash,
        },
        "message": f"Generated {nacha_file.filename}",
    }


@router.post("/validate")
def validate(body: ValidateRequest, request: Request) -> dict:
    validator = request.app.state.engine.validator
    if body.strict:
        try:
            result = validator.validate_strict(validator.read_content(body.content))
        except EnvelopeError as exc:
            result = ValidationResult(is_valid=False, errors=[str(exc)])
        return result.model_dump(mode="json")
    return validator.validate_complete(body.content).model_dump(mode="json")
