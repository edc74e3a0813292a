"""QA verifier HTML endpoints."""

import asyncio
import logging
from pathlib import Path
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Form, Query, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from ..config import Settings
from ..models.verification import VerificationOutcome
from ..services.verifier import AttestationOrchestrator

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

# Starlette renamed the 422 constant and warns on the old name.
HTTP_422 = getattr(status, "HTTP_422_UNPROCESSABLE_CONTENT", None) or status.HTTP_422_UNPROCESSABLE_ENTITY

_OUTCOME_STATUS = {
    VerificationOutcome.CLIENT_INPUT_ERROR: HTTP_422,
    VerificationOutcome.SYSTEM_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

# Resource identifiers never reach the page; details stay in the operator log.
_OUTCOME_MESSAGES = {
    VerificationOutcome.CLIENT_INPUT_ERROR: "Missing or invalid imageID. Expected <repository>@<digest>.",
    VerificationOutcome.SYSTEM_ERROR: "Something went wrong.",
}


def get_orchestrator(request: Request) -> AttestationOrchestrator:
    """Return the orchestrator attached to the application."""
    return request.app.state.orchestrator


def get_settings(request: Request) -> Settings:
    """Return the settings attached to the application."""
    return request.app.state.settings


def render_outcome(request: Request, outcome: VerificationOutcome) -> HTMLResponse:
    """Render the error page for a failed verification."""
    return templates.TemplateResponse(
        request,
        "error.html",
        {"message": _OUTCOME_MESSAGES[outcome], "outcome": outcome.value},
        status_code=_OUTCOME_STATUS[outcome],
    )


async def index(
    request: Request,
    image: Optional[str] = Query(None, description="Image reference to pre-fill"),
) -> HTMLResponse:
    """Render the verification form."""
    return templates.TemplateResponse(request, "index.html", {"image": image or ""})


async def verify_image(
    request: Request,
    orchestrator: Annotated[AttestationOrchestrator, Depends(get_orchestrator)],
    settings: Annotated[Settings, Depends(get_settings)],
    image_id: Annotated[str, Form(alias="imageID")] = "",
) -> Response:
    """Sign and publish a QA attestation for the submitted image."""
    try:
        await asyncio.wait_for(
            orchestrator.verify(image_id), timeout=settings.verify_timeout_seconds
        )
    except asyncio.TimeoutError:
        logger.error(
            "Verification of %r exceeded %ss", image_id, settings.verify_timeout_seconds
        )
        return render_outcome(request, VerificationOutcome.SYSTEM_ERROR)

    return RedirectResponse("/", status_code=status.HTTP_302_FOUND)


async def favicon() -> Response:
    return Response(status_code=status.HTTP_200_OK)


async def health() -> dict:
    """Health check endpoint."""
    return {"status": "healthy"}


# (path, methods, endpoint, response_class)
ROUTES = (
    ("/", ["GET"], index, HTMLResponse),
    ("/verify", ["POST"], verify_image, HTMLResponse),
    ("/favicon.ico", ["GET"], favicon, Response),
    ("/health", ["GET"], health, None),
)


def build_router() -> APIRouter:
    """Register every entry of ``ROUTES`` on a fresh router."""
    router = APIRouter(tags=["verify"])
    for path, methods, endpoint, response_class in ROUTES:
        kwargs = {"response_class": response_class} if response_class else {}
        router.add_api_route(path, endpoint, methods=methods, **kwargs)
    return router
