"""Binary Authorization attestor directory client."""

import logging

from ..config import ATTESTOR_PATTERN
from ..models.attestor import Attestor
from .google_api import GoogleApiClient, GoogleApiError

logger = logging.getLogger(__name__)


class DirectoryError(Exception):
    """Attestor lookup failed or the attestor cannot be used."""

    pass


class AttestorNotFound(DirectoryError):
    """The directory has no attestor with the requested ID."""

    pass


class AttestorDirectoryClient:
    """Resolves attestor IDs (projects/<p>/attestors/<a>) to their metadata."""

    def __init__(
        self,
        api: GoogleApiClient,
        base_url: str = "https://binaryauthorization.googleapis.com",
    ) -> None:
        self._api = api
        self._base_url = base_url.rstrip("/")

    async def resolve(self, attestor_id: str) -> Attestor:
        """
        Download the attestor document.

        The note reference is returned as-is and may be empty.
        """
        if not ATTESTOR_PATTERN.match(attestor_id):
            raise DirectoryError(f"invalid attestor ID {attestor_id!r}")

        url = f"{self._base_url}/v1beta1/{attestor_id}"
        try:
            attestor = await self._api.get(url, response_model=Attestor)
        except GoogleApiError as exc:
            if exc.status_code == 404:
                raise AttestorNotFound(f"attestor {attestor_id} not found") from exc
            raise DirectoryError(f"failed to get attestor: {exc}") from exc

        logger.debug("Resolved attestor %s (note=%r)", attestor.name, attestor.note_id)
        return attestor
