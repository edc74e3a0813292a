"""QA verification pipeline: parse, sign, and publish an image attestation."""

import logging
from typing import NoReturn, Optional

from ..models.occurrence import KMS_PUBLIC_KEY_PREFIX
from ..models.verification import AttestationResult, VerificationOutcome, VerificationStep
from .attestors import AttestorDirectoryClient, DirectoryError
from .ledger import LedgerPublisher, PublishError
from .payload import PayloadBuilder, SerializationError, sha512_digest
from .reference import ClientInputError, parse_image_reference
from .signing import SigningClient, SigningError

logger = logging.getLogger(__name__)


class VerificationFailed(Exception):
    """A pipeline step failed; carries the outcome class and the step name."""

    def __init__(
        self,
        outcome: VerificationOutcome,
        step: VerificationStep,
        cause: Exception,
    ) -> None:
        super().__init__(f"{step.value}: {cause}")
        self.outcome = outcome
        self.step = step
        self.cause = cause


class AttestationOrchestrator:
    """
    Runs one verification request end to end.

    Steps run strictly in order and stop at the first failure. Completed steps
    are not undone: a signature that was produced before a failed publish is
    simply discarded. Instances hold only configuration and collaborators, so
    one orchestrator serves concurrent requests.
    """

    def __init__(
        self,
        *,
        attestor_id: str,
        key_version_id: str,
        directory: AttestorDirectoryClient,
        signer: SigningClient,
        publisher: LedgerPublisher,
        payload_builder: Optional[PayloadBuilder] = None,
    ) -> None:
        self._attestor_id = attestor_id
        self._key_version_id = key_version_id
        self._directory = directory
        self._signer = signer
        self._publisher = publisher
        self._payload_builder = payload_builder or PayloadBuilder()

    async def verify(self, image_ref: Optional[str]) -> AttestationResult:
        """
        Attest that ``image_ref`` passed QA.

        Raises:
            VerificationFailed: with ``CLIENT_INPUT_ERROR`` for an empty or
                malformed reference, ``SYSTEM_ERROR`` for anything else.
        """
        if not image_ref or not image_ref.strip():
            self._fail(
                VerificationOutcome.CLIENT_INPUT_ERROR,
                VerificationStep.VALIDATE,
                ClientInputError("missing imageID"),
            )

        try:
            image = parse_image_reference(image_ref)
        except ClientInputError as exc:
            self._fail(VerificationOutcome.CLIENT_INPUT_ERROR, VerificationStep.PARSE_REFERENCE, exc)

        try:
            attestor = await self._directory.resolve(self._attestor_id)
            note_id = attestor.note_id
            if not note_id:
                raise DirectoryError(f"attestor {self._attestor_id} has no bound note")
        except DirectoryError as exc:
            self._fail(VerificationOutcome.SYSTEM_ERROR, VerificationStep.RESOLVE_ATTESTOR, exc)

        try:
            payload = self._payload_builder.canonical_bytes(image.repository, image.digest)
        except SerializationError as exc:
            self._fail(VerificationOutcome.SYSTEM_ERROR, VerificationStep.BUILD_PAYLOAD, exc)

        digest = sha512_digest(payload)

        try:
            signature = await self._signer.sign(self._key_version_id, digest)
        except SigningError as exc:
            self._fail(VerificationOutcome.SYSTEM_ERROR, VerificationStep.SIGN, exc)

        try:
            await self._publisher.publish(
                note_id, image.image_id, self._key_version_id, payload, signature
            )
        except PublishError as exc:
            self._fail(VerificationOutcome.SYSTEM_ERROR, VerificationStep.PUBLISH, exc)

        logger.info("Attested %s under %s", image.image_id, note_id)
        return AttestationResult(
            image_id=image.image_id,
            repository=image.repository,
            digest=image.digest,
            note_name=note_id,
            public_key_id=f"{KMS_PUBLIC_KEY_PREFIX}{self._key_version_id}",
        )

    def _fail(
        self,
        outcome: VerificationOutcome,
        step: VerificationStep,
        exc: Exception,
    ) -> NoReturn:
        if outcome is VerificationOutcome.CLIENT_INPUT_ERROR:
            logger.warning("Verification failed at %s: %s", step.value, exc)
        else:
            logger.error("Verification failed at %s: %s", step.value, exc)
        raise VerificationFailed(outcome, step, exc) from exc
