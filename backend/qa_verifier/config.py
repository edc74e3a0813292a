import re

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ATTESTOR_PATTERN = re.compile(r"^projects/[^/]+/attestors/[^/]+$")
KEY_VERSION_PATTERN = re.compile(
    r"^projects/[^/]+/locations/[^/]+/keyRings/[^/]+/cryptoKeys/[^/]+/cryptoKeyVersions/[^/]+$"
)
_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Attestation identity
    # projects/<p>/attestors/<a>
    attestor_id: str = Field(validation_alias="ATTESTOR")
    # projects/<p>/locations/<l>/keyRings/<kr>/cryptoKeys/<k>/cryptoKeyVersions/<v>
    kms_key_version: str = Field(validation_alias="KMS_KEY_VERSION")

    # Server Configuration
    host: str = Field(default="0.0.0.0", validation_alias="HOST")
    port: int = Field(default=8080, validation_alias="PORT")

    # Upstream Google APIs
    binauthz_base_url: str = "https://binaryauthorization.googleapis.com"
    kms_base_url: str = "https://cloudkms.googleapis.com"
    containeranalysis_base_url: str = "https://containeranalysis.googleapis.com"
    # Per-call HTTP timeout in seconds
    request_timeout_seconds: float = 30.0
    # Upper bound for one full verification run
    verify_timeout_seconds: float = 60.0
    # Static bearer token; Application Default Credentials are used when empty
    access_token: str = Field(default="", validation_alias="GOOGLE_ACCESS_TOKEN")

    # Application Configuration
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    @field_validator("attestor_id")
    @classmethod
    def _check_attestor_id(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("missing ATTESTOR")
        if not ATTESTOR_PATTERN.match(value):
            raise ValueError("ATTESTOR must look like projects/<p>/attestors/<a>")
        return value

    @field_validator("kms_key_version")
    @classmethod
    def _check_key_version(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("missing KMS_KEY_VERSION")
        if not KEY_VERSION_PATTERN.match(value):
            raise ValueError(
                "KMS_KEY_VERSION must be a full cryptoKeyVersions resource path"
            )
        return value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"unsupported log level: {value}")
        return level
