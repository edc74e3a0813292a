"""Binary field encoding shared by the Google JSON payloads."""

import base64
import binascii
from typing import Annotated, Any

from pydantic import BeforeValidator, PlainSerializer


def encode_bytes(value: bytes) -> str:
    """Encode raw bytes with standard, padded base64."""
    return base64.b64encode(value).decode("ascii")


def decode_bytes(value: Any) -> bytes:
    """Decode a base64 string into raw bytes; raw bytes pass through."""
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if not isinstance(value, str):
        raise ValueError("expected a base64 string")
    # Google APIs may emit URL-safe base64 for bytes fields, with or without padding
    normalized = value.replace("-", "+").replace("_", "/")
    normalized += "=" * (-len(normalized) % 4)
    try:
        return base64.b64decode(normalized, validate=True)
    except binascii.Error as exc:
        raise ValueError(f"invalid base64 data: {exc}") from exc


B64Bytes = Annotated[
    bytes,
    BeforeValidator(decode_bytes),
    PlainSerializer(encode_bytes, return_type=str, when_used="json"),
]
