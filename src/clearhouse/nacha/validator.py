"""Structural checks for NACHA content, plain or enveloped.

Violations are collected into result objects; nothing here raises for a
malformed file.
"""

from __future__ import annotations

import logging

from clearhouse.core.exceptions import DecryptionError, IntegrityError
from clearhouse.models.validation import CompleteValidationResult, ValidationResult
from clearhouse.nacha.fields import BLOCKING_FACTOR, PADDING_RECORD, RECORD_LENGTH
from clearhouse.nacha.records import entry_hash
from clearhouse.security.envelope import SecureEnvelope, is_file_envelope

logger = logging.getLogger(__name__)

MIN_RECORDS = 4


class NACHAValidator:
    """Validates generated files; opens envelopes first when given one."""

    def __init__(self, envelope: SecureEnvelope | None = None) -> None:
        self._envelope = envelope

    def validate(self, content: str) -> ValidationResult:
        errors: list[str] = []
        lines = content.split("\n")

        if len(lines) < MIN_RECORDS:
            errors.append(
                "File must have at least 4 records (header, batch header, batch control, file control)"
            )
        if not lines[0].startswith("1"):
            errors.append("First record must be File Header (type 1)")
        if len(lines) > 1 and not lines[1].startswith("5"):
            errors.append("Second record must be Batch Header (type 5)")
        for index, line in enumerate(lines[:-1]):
            if len(line) != RECORD_LENGTH:
                errors.append(f"Line {index + 1} must be exactly {RECORD_LENGTH} characters")

        return ValidationResult(is_valid=not errors, errors=errors)

    def validate_strict(self, content: str) -> ValidationResult:
        """``validate`` plus block padding, record order, entry hash and totals."""
        result = self.validate(content)
        errors = list(result.errors)
        lines = content.split("\n")

        if len(lines) % BLOCKING_FACTOR:
            errors.append(f"File must contain a multiple of {BLOCKING_FACTOR} records")
        if lines[-1] and len(lines[-1]) != RECORD_LENGTH:
            errors.append(f"Line {len(lines)} must be exactly {RECORD_LENGTH} characters")

        body = [line for line in lines if line != PADDING_RECORD]
        entries = [line for line in body if line.startswith("6")]
        batch_controls = [line for line in body if line.startswith("8")]
        file_controls = [line for line in body if line.startswith("9")]
        expected = ["1", "5"] + ["6"] * len(entries) + ["8", "9"]
        if [line[:1] for line in body] != expected:
            errors.append("Records must be ordered 1, 5, 6..., 8, 9 followed by 9-filled padding")

        if len(batch_controls) == 1 and len(file_controls) == 1:
            errors.extend(self._check_controls(entries, batch_controls[0], file_controls[0]))

        return ValidationResult(is_valid=not errors, errors=errors)

    @staticmethod
    def _check_controls(entries: list[str], batch_control: str, file_control: str) -> list[str]:
        errors: list[str] = []
        try:
            routing = [line[3:12] for line in entries]
            expected_hash = entry_hash(routing)
            amounts = [(line[1:3], int(line[29:39])) for line in entries]
        except (ValueError, IndexError) as exc:
            return [f"Entry detail records are not parseable: {exc}"]

        debit_cents = sum(cents for code, cents in amounts if code in ("27", "37"))
        credit_cents = sum(cents for code, cents in amounts if code in ("22", "32"))

        if batch_control[10:20] != expected_hash:
            errors.append("Batch control entry hash does not match entry detail records")
        if file_control[21:31] != expected_hash:
            errors.append("File control entry hash does not match entry detail records")
        if batch_control[4:10] != str(len(entries)).zfill(6):
            errors.append("Batch control entry count does not match entry detail records")
        if file_control[13:21] != str(len(entries)).zfill(8):
            errors.append("File control entry count does not match entry detail records")
        for label, line, debit_slice, credit_slice in (
            ("Batch", batch_control, slice(20, 32), slice(32, 44)),
            ("File", file_control, slice(31, 43), slice(43, 55)),
        ):
            if line[debit_slice] != str(debit_cents).zfill(12):
                errors.append(f"{label} control debit total does not match entry detail records")
            if line[credit_slice] != str(credit_cents).zfill(12):
                errors.append(f"{label} control credit total does not match entry detail records")
        return errors

    def read_content(self, content: str) -> str:
        """Plain content, opening the envelope first when there is one.

        Raises DecryptionError when the envelope cannot be opened and
        IntegrityError when its stored checksum does not match.
        """
        if not is_file_envelope(content):
            return content
        if self._envelope is None:
            raise DecryptionError("Encrypted file detected but no encryption service available")
        opened = self._envelope.decrypt_nacha_file(content)
        if not opened.is_valid:
            raise IntegrityError("File integrity check failed - content may be corrupted")
        return opened.content

    def validate_complete(self, content: str) -> CompleteValidationResult:
        if not is_file_envelope(content):
            return CompleteValidationResult(**self.validate(content).model_dump())

        if self._envelope is None:
            return CompleteValidationResult(
                is_valid=False,
                errors=["Encrypted file detected but no encryption service available"],
                is_encrypted=True,
                integrity_valid=False,
            )
        try:
            opened = self._envelope.decrypt_nacha_file(content)
        except DecryptionError as exc:
            logger.warning("NACHA envelope could not be opened: %s", exc)
            return CompleteValidationResult(
                is_valid=False,
                errors=[f"Decryption failed: {exc}"],
                is_encrypted=True,
                integrity_valid=False,
            )
        if not opened.is_valid:
            return CompleteValidationResult(
                is_valid=False,
                errors=["File integrity check failed - content may be corrupted"],
                is_encrypted=True,
                integrity_valid=False,
                metadata=opened.metadata,
            )

        structural = self.validate(opened.content)
        return CompleteValidationResult(
            is_valid=structural.is_valid,
            errors=structural.errors,
            is_encrypted=True,
            integrity_valid=True,
            metadata=opened.metadata,
        )
