"""Envelope payload models: one explicit struct per known metadata kind."""

from __future__ import annotations

from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class NACHAMetadata(BaseModel):
    """Metadata stored alongside an encrypted NACHA file."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    type: Literal["NACHA"] = "NACHA"
    transaction_ids: list[str] = Field(default_factory=list)
    effective_date: str = ""  # ISO date
    record_count: int = 0
    checksum: str = ""


class GenericMetadata(BaseModel):
    """Any other caller-supplied metadata, kept verbatim."""

    model_config = ConfigDict(extra="allow")

    type: Optional[str] = None


EnvelopeMetadata = Union[NACHAMetadata, GenericMetadata]


def parse_metadata(raw: dict[str, Any] | None) -> EnvelopeMetadata:
    """Pick the metadata struct from the ``type`` tag."""
    raw = raw or {}
    if raw.get("type") == "NACHA":
        return NACHAMetadata.model_validate(raw)
    return GenericMetadata.model_validate(raw)


def dump_metadata(metadata: EnvelopeMetadata | dict[str, Any] | None) -> dict[str, Any]:
    if metadata is None:
        return {}
    if isinstance(metadata, BaseModel):
        return metadata.model_dump(by_alias=True, exclude_none=True)
    return dict(metadata)


class DecryptedFile(BaseModel):
    """Opened file envelope."""

    content: str
    metadata: EnvelopeMetadata
    timestamp: str = ""
    version: str = ""


class DecryptedNACHAFile(BaseModel):
    """Opened NACHA envelope; ``is_valid`` is strictly the checksum comparison."""

    content: str
    metadata: EnvelopeMetadata
    is_valid: bool
