"""Verification outcome models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class VerificationOutcome(str, Enum):
    """Outcome classes exposed to the HTTP layer."""

    SUCCESS = "success"
    CLIENT_INPUT_ERROR = "client_input_error"
    SYSTEM_ERROR = "system_error"


class VerificationStep(str, Enum):
    """Pipeline steps, in execution order."""

    VALIDATE = "validate"
    PARSE_REFERENCE = "parse_reference"
    RESOLVE_ATTESTOR = "resolve_attestor"
    BUILD_PAYLOAD = "build_payload"
    DIGEST = "digest"
    SIGN = "sign"
    PUBLISH = "publish"


class AttestationResult(BaseModel):
    """Summary of one successful attestation run."""

    model_config = ConfigDict(frozen=True)

    outcome: VerificationOutcome = VerificationOutcome.SUCCESS
    image_id: str
    repository: str
    digest: str
    note_name: str = Field(..., description="projects/<p>/notes/<n>")
    public_key_id: str = Field(..., description="URI-qualified key version used to sign")
