"""Container Analysis occurrence models for signed attestations."""

from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field

from .encoding import B64Bytes

KMS_PUBLIC_KEY_PREFIX = "//cloudkms.googleapis.com/v1/"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class OccurrenceSignature(_Frozen):
    public_key_id: str = Field(..., alias="publicKeyId")
    signature: B64Bytes


class GenericSignedAttestation(_Frozen):
    content_type: Literal["SIMPLE_SIGNING_JSON"] = Field(
        default="SIMPLE_SIGNING_JSON", alias="contentType"
    )
    serialized_payload: B64Bytes = Field(..., alias="serializedPayload")
    signatures: List[OccurrenceSignature] = Field(default_factory=list)


class Attestation(_Frozen):
    generic_signed_attestation: GenericSignedAttestation = Field(
        ..., alias="genericSignedAttestation"
    )


class OccurrenceAttestation(_Frozen):
    attestation: Attestation


class OccurrenceResource(_Frozen):
    uri: str


class Occurrence(_Frozen):
    """One published attestation record."""

    kind: Literal["ATTESTATION"] = "ATTESTATION"
    note_name: str = Field(..., alias="noteName")
    resource: OccurrenceResource
    attestation: OccurrenceAttestation

    def to_api_body(self) -> dict:
        """Serialize with API field names and base64 binary fields."""
        return self.model_dump(mode="json", by_alias=True)
