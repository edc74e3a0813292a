"""Canonical signing payload construction and hashing."""

import hashlib
import json
import logging

from pydantic import ValidationError

from ..models.payload import (
    SIGNATURE_TYPE,
    CriticalSection,
    PayloadIdentity,
    PayloadImage,
    SigningPayload,
)

logger = logging.getLogger(__name__)

SHA512_SIZE = 64


class SerializationError(Exception):
    """Local encoding fault while producing payload bytes."""

    pass


class PayloadBuilder:
    """Builds the simple-signing document and its canonical bytes."""

    def build(self, repository: str, digest: str) -> SigningPayload:
        try:
            return SigningPayload(
                critical=CriticalSection(
                    identity=PayloadIdentity(docker_reference=repository),
                    image=PayloadImage(docker_manifest_digest=digest),
                    type=SIGNATURE_TYPE,
                )
            )
        except ValidationError as exc:
            raise SerializationError(f"failed to create payload: {exc}") from exc

    def serialize(self, payload: SigningPayload) -> bytes:
        """
        Serialize a payload deterministically.

        Keys are sorted and separators carry no whitespace, so one logical
        image always maps to the same bytes.
        """
        try:
            document = payload.model_dump(mode="json", by_alias=True)
            text = json.dumps(
                document, sort_keys=True, separators=(",", ":"), ensure_ascii=False
            )
            logger.debug("Serialized payload for %s (%d chars)", payload.repository, len(text))
            return text.encode("utf-8")
        except (TypeError, ValueError) as exc:
            # UnicodeEncodeError is a ValueError
            raise SerializationError(f"failed to create payload: {exc}") from exc

    def canonical_bytes(self, repository: str, digest: str) -> bytes:
        return self.serialize(self.build(repository, digest))


def sha512_digest(data: bytes) -> bytes:
    """Return the 64-byte SHA-512 digest of ``data``."""
    return hashlib.sha512(data).digest()
