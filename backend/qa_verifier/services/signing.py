"""Cloud KMS asymmetric signing client."""

import logging

from ..models.signing import AsymmetricSignRequest, AsymmetricSignResponse, Sha512Digest
from .google_api import GoogleApiClient, GoogleApiError
from .payload import SHA512_SIZE

logger = logging.getLogger(__name__)


class SigningError(Exception):
    """The signer was unreachable or rejected the request."""

    pass


class SigningClient:
    """Signs SHA-512 digests with a KMS asymmetric key version."""

    def __init__(
        self,
        api: GoogleApiClient,
        base_url: str = "https://cloudkms.googleapis.com",
    ) -> None:
        self._api = api
        self._base_url = base_url.rstrip("/")

    async def sign(self, key_version_id: str, digest: bytes) -> bytes:
        """
        Sign ``digest`` with the given key version and return the raw signature.

        Args:
            key_version_id: projects/<p>/locations/<l>/keyRings/<kr>/cryptoKeys/<k>/cryptoKeyVersions/<v>
            digest: 64-byte SHA-512 digest

        Raises:
            SigningError: transport failure or remote rejection (disabled key,
                missing permission, ...). Not retried.
        """
        if len(digest) != SHA512_SIZE:
            raise SigningError(f"expected a {SHA512_SIZE}-byte SHA-512 digest, got {len(digest)}")

        url = f"{self._base_url}/v1/{key_version_id}:asymmetricSign"
        logger.debug("Signing %d-byte digest with %s", len(digest), key_version_id)
        request = AsymmetricSignRequest(digest=Sha512Digest(sha512=digest))
        try:
            response = await self._api.post(
                url,
                request.model_dump(mode="json"),
                response_model=AsymmetricSignResponse,
            )
        except GoogleApiError as exc:
            logger.debug("Sign request for %s failed: %s", key_version_id, exc)
            raise SigningError(f"failed to sign: {exc}") from exc

        if not response.signature:
            raise SigningError("failed to sign: empty signature in response")
        return response.signature
