# Services package

from .attestors import AttestorDirectoryClient, AttestorNotFound, DirectoryError
from .google_api import (
    GoogleApiClient,
    GoogleApiError,
    GoogleDefaultTokenProvider,
    StaticTokenProvider,
    TokenProvider,
)
from .ledger import InvalidNote, LedgerPublisher, PublishError
from .payload import PayloadBuilder, SerializationError, sha512_digest
from .reference import ClientInputError, InvalidReference, parse_image_reference
from .signing import SigningClient, SigningError
from .verifier import AttestationOrchestrator, VerificationFailed

__all__ = [
    "AttestationOrchestrator",
    "AttestorDirectoryClient",
    "AttestorNotFound",
    "ClientInputError",
    "DirectoryError",
    "GoogleApiClient",
    "GoogleApiError",
    "GoogleDefaultTokenProvider",
    "InvalidNote",
    "InvalidReference",
    "LedgerPublisher",
    "PayloadBuilder",
    "PublishError",
    "SerializationError",
    "SigningClient",
    "SigningError",
    "StaticTokenProvider",
    "TokenProvider",
    "VerificationFailed",
    "parse_image_reference",
    "sha512_digest",
]
