"""Cloud KMS asymmetric signing request/response models."""

from pydantic import BaseModel, ConfigDict, Field

from .encoding import B64Bytes


class Sha512Digest(BaseModel):
    sha512: B64Bytes = Field(..., description="Raw SHA-512 digest (64 bytes)")


class AsymmetricSignRequest(BaseModel):
    """Body of a cryptoKeyVersions:asymmetricSign call."""

    digest: Sha512Digest


class AsymmetricSignResponse(BaseModel):
    """Signature returned by the signer."""

    model_config = ConfigDict(extra="ignore")

    signature: B64Bytes
