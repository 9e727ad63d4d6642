"""Tests for NACHAValidator."""

from __future__ import annotations

import datetime as dt

import pytest

from clearhouse.core.exceptions import DecryptionError, IntegrityError
from clearhouse.core.types import FileType
from clearhouse.models.envelope import NACHAMetadata
from clearhouse.nacha.encoder import NACHAEncoder
from clearhouse.nacha.validator import NACHAValidator
from clearhouse.security.envelope import SecureEnvelope
from tests.unit.conftest import FIXED_NOW, SECRET

EFFECTIVE = dt.date(2024, 9, 17)


@pytest.fixture
def envelope():
    return SecureEnvelope(SECRET)


@pytest.fixture
def content(ach_config, policy, make_entry):
    encoder = NACHAEncoder(ach_config, policy=policy, clock=lambda: FIXED_NOW)
    entries = [make_entry(transaction_id="a"), make_entry(transaction_id="b", amount="25.50")]
    return encoder.generate(entries, EFFECTIVE, FileType.DEBIT).content


def _replace_line(content: str, index: int, line: str) -> str:
    lines = content.split("\n")
    lines[index] = line
    return "\n".join(lines)


class TestValidate:
    def test_generated_file_is_valid(self, content):
        result = NACHAValidator().validate(content)
        assert result.is_valid
        assert result.errors == []

    def test_too_few_records(self):
        result = NACHAValidator().validate("1" + " " * 93)
        assert not result.is_valid
        assert "File must have at least 4 records (header, batch header, batch control, file control)" in result.errors

    def test_wrong_first_and_second_record(self, content):
        lines = content.split("\n")
        swapped = "\n".join([lines[1], lines[0]] + lines[2:])
        errors = NACHAValidator().validate(swapped).errors
        assert "First record must be File Header (type 1)" in errors
        assert "Second record must be Batch Header (type 5)" in errors

    def test_short_line_reported_by_number(self, content):
        broken = _replace_line(content, 2, content.split("\n")[2][:90])
        assert NACHAValidator().validate(broken).errors == ["Line 3 must be exactly 94 characters"]

    def test_trailing_line_length_not_checked(self, content):
        assert NACHAValidator().validate(content + "\n").is_valid

    def test_empty_content(self):
        assert not NACHAValidator().validate("").is_valid


class TestValidateStrict:
    def test_generated_file_is_valid(self, content):
        assert NACHAValidator().validate_strict(content).is_valid

    def test_missing_padding(self, content):
        unpadded = "\n".join(line for line in content.split("\n") if line != "9" * 94)
        errors = NACHAValidator().validate_strict(unpadded).errors
        assert "File must contain a multiple of 10 records" in errors

    def test_tampered_amount_breaks_totals(self, content):
        entry = content.split("\n")[2]
        tampered = _replace_line(content, 2, entry[:29] + "0000099999" + entry[39:])
        errors = NACHAValidator().validate_strict(tampered).errors
        assert "Batch control debit total does not match entry detail records" in errors
        assert "File control debit total does not match entry detail records" in errors

    def test_tampered_routing_breaks_hash(self, content):
        entry = content.split("\n")[2]
        tampered = _replace_line(content, 2, entry[:3] + "987654321" + entry[12:])
        errors = NACHAValidator().validate_strict(tampered).errors
        assert "Batch control entry hash does not match entry detail records" in errors

    def test_out_of_order_records(self, content):
        lines = content.split("\n")
        reordered = "\n".join(lines[:2] + [lines[4], lines[3], lines[2]] + lines[5:])
        errors = NACHAValidator().validate_strict(reordered).errors
        assert "Records must be ordered 1, 5, 6..., 8, 9 followed by 9-filled padding" in errors


class TestValidateComplete:
    def test_plain_content(self, content):
        result = NACHAValidator(SecureEnvelope(SECRET)).validate_complete(content)
        assert result.is_valid
        assert not result.is_encrypted
        assert result.integrity_valid

    def test_encrypted_valid(self, content, envelope):
        opaque = envelope.encrypt_nacha_file(content, ["a", "b"], EFFECTIVE)
        result = NACHAValidator(envelope).validate_complete(opaque)
        assert result.is_valid
        assert result.is_encrypted
        assert result.integrity_valid
        assert result.metadata.transaction_ids == ["a", "b"]

    def test_encrypted_without_envelope(self, content, envelope):
        opaque = envelope.encrypt_nacha_file(content, ["a"], EFFECTIVE)
        result = NACHAValidator().validate_complete(opaque)
        assert not result.is_valid
        assert result.is_encrypted
        assert result.errors == ["Encrypted file detected but no encryption service available"]

    def test_wrong_key(self, content, envelope):
        opaque = envelope.encrypt_nacha_file(content, ["a"], EFFECTIVE)
        result = NACHAValidator(SecureEnvelope("wrong")).validate_complete(opaque)
        assert not result.is_valid
        assert not result.integrity_valid
        assert result.errors[0].startswith("Decryption failed: ")

    def test_checksum_mismatch(self, content, envelope):
        metadata = NACHAMetadata(transaction_ids=["a"], effective_date="2024-09-17",
                                 record_count=10, checksum="0" * 64)
        result = NACHAValidator(envelope).validate_complete(envelope.encrypt_file(content, metadata))
        assert not result.is_valid
        assert result.errors == ["File integrity check failed - content may be corrupted"]
        assert result.metadata.checksum == "0" * 64

    def test_malformed_metadata_is_reported(self, content, envelope):
        opaque = envelope.encrypt_file(content, {"type": "NACHA", "transactionIds": 5})
        result = NACHAValidator(envelope).validate_complete(opaque)
        assert not result.is_valid
        assert not result.integrity_valid
        assert "Invalid metadata structure" in result.errors[0]

    def test_encrypted_structural_errors_surface(self, envelope):
        opaque = envelope.encrypt_nacha_file("not a nacha file", ["a"], EFFECTIVE)
        result = NACHAValidator(envelope).validate_complete(opaque)
        assert result.integrity_valid
        assert not result.is_valid
        assert "First record must be File Header (type 1)" in result.errors


class TestReadContent:
    def test_plain_passthrough(self, content):
        assert NACHAValidator().read_content(content) == content

    def test_opens_envelope(self, content, envelope):
        opaque = envelope.encrypt_nacha_file(content, ["a"], EFFECTIVE)
        assert NACHAValidator(envelope).read_content(opaque) == content

    def test_envelope_without_service_raises(self, content, envelope):
        with pytest.raises(DecryptionError):
            NACHAValidator().read_content(envelope.encrypt_nacha_file(content, ["a"], EFFECTIVE))

    def test_checksum_mismatch_raises(self, content, envelope):
        metadata = NACHAMetadata(transaction_ids=["a"], checksum="0" * 64)
        with pytest.raises(IntegrityError):
            NACHAValidator(envelope).read_content(envelope.encrypt_file(content, metadata))
