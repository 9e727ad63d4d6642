"""At-rest encryption envelope for values and generated NACHA files.

Wire formats (lowercase hex):
    plain value:  ``<ivHex>:<cipherHex>``
    file payload: ``FILE:<ivHex>:<cipherHex>``

AES-256-CBC with PKCS7 padding and a fresh random IV per call. The key is
derived once per instance from the configured secret with scrypt. CBC carries
no authentication tag, so tamper evidence for files comes from the SHA-256
checksum stored inside the encrypted NACHA metadata.
"""

from __future__ import annotations

import datetime as dt
import hashlib
import json
import logging
import os
from typing import Any, Sequence

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives.kdf.scrypt import Scrypt
from pydantic import ValidationError

from clearhouse.core.exceptions import DecryptionError, EncryptionError
from clearhouse.models.envelope import (
    DecryptedFile,
    DecryptedNACHAFile,
    EnvelopeMetadata,
    NACHAMetadata,
    dump_metadata,
    parse_metadata,
)

logger = logging.getLogger(__name__)

FILE_MARKER = "FILE"
ENVELOPE_VERSION = "1.0"

KEY_SALT = b"salt"
KEY_LENGTH = 32
IV_LENGTH = 16
SCRYPT_N, SCRYPT_R, SCRYPT_P = 2**14, 8, 1


def derive_key(secret: str) -> bytes:
    kdf = Scrypt(salt=KEY_SALT, length=KEY_LENGTH, n=SCRYPT_N, r=SCRYPT_R, p=SCRYPT_P)
    return kdf.derive(secret.encode("utf-8"))


def is_file_envelope(text: str) -> bool:
    return text.startswith(f"{FILE_MARKER}:")


class SecureEnvelope:
    """Symmetric envelope keyed from a secret string."""

    def __init__(self, secret_key: str) -> None:
        self._key = derive_key(secret_key)

    # ---- primitives ----

    def _seal(self, plaintext: str) -> tuple[str, str]:
        try:
            iv = os.urandom(IV_LENGTH)
            padder = padding.PKCS7(algorithms.AES.block_size).padder()
            padded = padder.update(plaintext.encode("utf-8")) + padder.finalize()
            encryptor = Cipher(algorithms.AES(self._key), modes.CBC(iv)).encryptor()
            sealed = encryptor.update(padded) + encryptor.finalize()
        except (ValueError, TypeError, UnicodeEncodeError) as exc:
            raise EncryptionError(f"Encryption failed: {exc}") from exc
        return iv.hex(), sealed.hex()

    def _open(self, iv_hex: str, cipher_hex: str) -> str:
        """Raises ValueError (incl. UnicodeDecodeError) on any malformed input."""
        iv = bytes.fromhex(iv_hex)
        sealed = bytes.fromhex(cipher_hex)
        if len(iv) != IV_LENGTH:
            raise ValueError("invalid initialization vector length")
        if not sealed:
            raise ValueError("empty ciphertext")
        decryptor = Cipher(algorithms.AES(self._key), modes.CBC(iv)).decryptor()
        padded = decryptor.update(sealed) + decryptor.finalize()
        unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
        return (unpadder.update(padded) + unpadder.finalize()).decode("utf-8")

    # ---- plain values ----

    def encrypt(self, value: str) -> str:
        iv_hex, cipher_hex = self._seal(value)
        return f"{iv_hex}:{cipher_hex}"

    def decrypt(self, opaque: str) -> str:
        parts = opaque.split(":")
        if len(parts) != 2 or not all(parts):
            raise DecryptionError("Decryption failed: Invalid encrypted data format")
        try:
            return self._open(*parts)
        except ValueError as exc:
            raise DecryptionError(f"Decryption failed: {exc}") from exc

    # ---- file payloads ----

    def encrypt_file(
        self, content: str, metadata: EnvelopeMetadata | dict[str, Any] | None = None
    ) -> str:
        payload = {
            "content": content,
            "metadata": dump_metadata(metadata),
            "timestamp": dt.datetime.now(dt.timezone.utc).isoformat(timespec="milliseconds"),
            "version": ENVELOPE_VERSION,
        }
        serialized = json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
        iv_hex, cipher_hex = self._seal(serialized)
        return f"{FILE_MARKER}:{iv_hex}:{cipher_hex}"

    def decrypt_file(self, opaque: str) -> DecryptedFile:
        if not is_file_envelope(opaque):
            raise DecryptionError("Invalid encrypted file format")
        parts = opaque.split(":")
        if len(parts) != 3 or not parts[1] or not parts[2]:
            raise DecryptionError("File decryption failed: Invalid encrypted file data format")
        try:
            payload = json.loads(self._open(parts[1], parts[2]))
        except ValueError as exc:
            raise DecryptionError(f"File decryption failed: {exc}") from exc

        if not isinstance(payload, dict) or not isinstance(payload.get("content"), str):
            raise DecryptionError("File decryption failed: Invalid file data structure")
        metadata = payload.get("metadata") or {}
        if not isinstance(metadata, dict):
            raise DecryptionError("File decryption failed: Invalid metadata structure")
        try:
            return DecryptedFile(
                content=payload["content"],
                metadata=parse_metadata(metadata),
                timestamp=str(payload.get("timestamp", "")),
                version=str(payload.get("version", "")),
            )
        except ValidationError as exc:
            raise DecryptionError("File decryption failed: Invalid metadata structure") from exc

    # ---- NACHA files ----

    def encrypt_nacha_file(
        self, content: str, transaction_ids: Sequence[str], effective_date: dt.date
    ) -> str:
        metadata = NACHAMetadata(
            transaction_ids=list(transaction_ids),
            effective_date=effective_date.isoformat(),
            record_count=len(content.split("\n")),
            checksum=self.hash(content),
        )
        return self.encrypt_file(content, metadata)

    def decrypt_nacha_file(self, opaque: str) -> DecryptedNACHAFile:
        """Open a NACHA envelope and compare the stored checksum.

        Raises DecryptionError when the envelope cannot be opened at all;
        otherwise returns the content with ``is_valid`` set from the checksum.
        """
        opened = self.decrypt_file(opaque)
        stored = getattr(opened.metadata, "checksum", None)
        is_valid = stored is not None and stored == self.hash(opened.content)
        if not is_valid:
            logger.warning("NACHA envelope checksum mismatch")
        return DecryptedNACHAFile(content=opened.content, metadata=opened.metadata, is_valid=is_valid)

    # ---- helpers ----

    @staticmethod
    def hash(text: str) -> str:
        return hashlib.sha256(text.encode("utf-8")).hexdigest()

    @staticmethod
    def generate_token(nbytes: int = 32) -> str:
        return os.urandom(nbytes).hex()
