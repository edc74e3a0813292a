# Data models package

from .attestor import Attestor, UserOwnedDrydockNote
from .image import ImageIdentity
from .occurrence import KMS_PUBLIC_KEY_PREFIX, Occurrence
from .payload import SIGNATURE_TYPE, SigningPayload
from .signing import AsymmetricSignRequest, AsymmetricSignResponse
from .verification import AttestationResult, VerificationOutcome, VerificationStep

__all__ = [
    "AsymmetricSignRequest",
    "AsymmetricSignResponse",
    "AttestationResult",
    "Attestor",
    "ImageIdentity",
    "KMS_PUBLIC_KEY_PREFIX",
    "Occurrence",
    "SIGNATURE_TYPE",
    "SigningPayload",
    "UserOwnedDrydockNote",
    "VerificationOutcome",
    "VerificationStep",
]
