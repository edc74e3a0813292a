"""Container Analysis occurrence publisher."""

import logging

from pydantic import ValidationError

from ..models.occurrence import (
    KMS_PUBLIC_KEY_PREFIX,
    Attestation,
    GenericSignedAttestation,
    Occurrence,
    OccurrenceAttestation,
    OccurrenceResource,
    OccurrenceSignature,
)
from .google_api import GoogleApiClient, GoogleApiError

logger = logging.getLogger(__name__)


class PublishError(Exception):
    """The ledger rejected the occurrence or could not be reached."""

    pass


class InvalidNote(PublishError):
    """The note reference has no project segment to route on."""

    pass


def note_project(note_ref: str) -> str:
    """Return the project ID of ``projects/<p>/notes/<n>``."""
    parts = note_ref.split("/")
    if len(parts) < 4:
        raise InvalidNote(f"invalid noteID {note_ref!r}")
    return parts[1]


class LedgerPublisher:
    """Builds and submits signed-attestation occurrences."""

    def __init__(
        self,
        api: GoogleApiClient,
        base_url: str = "https://containeranalysis.googleapis.com",
    ) -> None:
        self._api = api
        self._base_url = base_url.rstrip("/")

    def build_occurrence(
        self,
        note_ref: str,
        image_id: str,
        key_version_id: str,
        payload: bytes,
        signature: bytes,
    ) -> Occurrence:
        return Occurrence(
            note_name=note_ref,
            resource=OccurrenceResource(uri=f"https://{image_id}"),
            attestation=OccurrenceAttestation(
                attestation=Attestation(
                    generic_signed_attestation=GenericSignedAttestation(
                        serialized_payload=payload,
                        signatures=[
                            OccurrenceSignature(
                                public_key_id=f"{KMS_PUBLIC_KEY_PREFIX}{key_version_id}",
                                signature=signature,
                            )
                        ],
                    )
                )
            ),
        )

    async def publish(
        self,
        note_ref: str,
        image_id: str,
        key_version_id: str,
        payload: bytes,
        signature: bytes,
    ) -> None:
        """
        Create one ATTESTATION occurrence for ``image_id`` under ``note_ref``.

        Every call creates a new, independent record; nothing is deduplicated.

        Raises:
            InvalidNote: ``note_ref`` has fewer than four ``/`` segments.
            PublishError: the ledger rejected the record or was unreachable.
        """
        project_id = note_project(note_ref)
        url = f"{self._base_url}/v1beta1/projects/{project_id}/occurrences"

        try:
            occurrence = self.build_occurrence(
                note_ref, image_id, key_version_id, payload, signature
            )
        except ValidationError as exc:
            raise PublishError(f"failed to create json for occurrence: {exc}") from exc

        try:
            await self._api.post(url, occurrence.to_api_body())
        except GoogleApiError as exc:
            raise PublishError(f"failed to create occurrence: {exc}") from exc

        logger.debug("Created occurrence for %s under %s", image_id, note_ref)
