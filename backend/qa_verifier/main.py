import logging
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI, Request

from .api import verify
from .config import Settings
from .models.verification import VerificationOutcome
from .services.attestors import AttestorDirectoryClient
from .services.google_api import (
    GoogleApiClient,
    GoogleDefaultTokenProvider,
    StaticTokenProvider,
    TokenProvider,
)
from .services.ledger import LedgerPublisher
from .services.signing import SigningClient
from .services.verifier import AttestationOrchestrator, VerificationFailed

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def build_orchestrator(
    settings: Settings,
    *,
    token_provider: Optional[TokenProvider] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> AttestationOrchestrator:
    """Wire the pipeline collaborators from explicit settings."""
    if token_provider is None:
        if settings.access_token:
            token_provider = StaticTokenProvider(settings.access_token)
        else:
            token_provider = GoogleDefaultTokenProvider()

    api = GoogleApiClient(
        token_provider,
        timeout=settings.request_timeout_seconds,
        transport=transport,
    )
    return AttestationOrchestrator(
        attestor_id=settings.attestor_id,
        key_version_id=settings.kms_key_version,
        directory=AttestorDirectoryClient(api, settings.binauthz_base_url),
        signer=SigningClient(api, settings.kms_base_url),
        publisher=LedgerPublisher(api, settings.containeranalysis_base_url),
    )


async def verification_failed_handler(request: Request, exc: VerificationFailed):
    """Render a failed verification; details were already logged by the pipeline."""
    return verify.render_outcome(request, exc.outcome)


async def general_exception_handler(request: Request, exc: Exception):
    """
    Handle all other unexpected exceptions.

    Logs detailed error information while returning the generic error page.
    """
    logger.error(f"Unexpected error: {exc}", exc_info=True)
    return verify.render_outcome(request, VerificationOutcome.SYSTEM_ERROR)


def create_app(
    settings: Optional[Settings] = None,
    orchestrator: Optional[AttestationOrchestrator] = None,
) -> FastAPI:
    """
    Build the QA verifier application.

    Settings are read from the environment when not given. Missing
    ``ATTESTOR`` or ``KMS_KEY_VERSION`` fails here, before serving.
    """
    if settings is None:
        settings = Settings()

    logging.basicConfig(level=getattr(logging, settings.log_level), format=LOG_FORMAT)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        logger.info(
            "Starting QA Verifier (attestor=%s, key=%s)",
            settings.attestor_id,
            settings.kms_key_version,
        )
        yield
        logger.info("Shutting down QA Verifier")

    app = FastAPI(
        title="QA Verifier",
        description="Signs Binary Authorization attestations for images that passed QA",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.orchestrator = orchestrator or build_orchestrator(settings)

    app.include_router(verify.build_router())

    app.add_exception_handler(VerificationFailed, verification_failed_handler)
    app.add_exception_handler(Exception, general_exception_handler)
    return app
