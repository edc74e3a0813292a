"""Simple signing payload models."""

from pydantic import BaseModel, ConfigDict, Field

SIGNATURE_TYPE = "Google cloud binauthz container signature"


class PayloadIdentity(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    docker_reference: str = Field(..., alias="docker-reference")


class PayloadImage(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    docker_manifest_digest: str = Field(..., alias="docker-manifest-digest")


class CriticalSection(BaseModel):
    model_config = ConfigDict(frozen=True)

    identity: PayloadIdentity
    image: PayloadImage
    type: str = SIGNATURE_TYPE


class SigningPayload(BaseModel):
    """The document whose canonical bytes are hashed and signed."""

    model_config = ConfigDict(frozen=True)

    critical: CriticalSection

    @property
    def repository(self) -> str:
        return self.critical.identity.docker_reference

    @property
    def digest(self) -> str:
        return self.critical.image.docker_manifest_digest
