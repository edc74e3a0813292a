from __future__ import annotations

import base64
import json
import os
from typing import Callable, Optional

import httpx
import pytest
from hypothesis import settings

from qa_verifier.config import Settings
from qa_verifier.main import build_orchestrator
from qa_verifier.services.google_api import GoogleApiClient, StaticTokenProvider
from qa_verifier.services.verifier import AttestationOrchestrator

_DEFAULT_MAX_EXAMPLES = int(os.getenv("HYPOTHESIS_MAX_EXAMPLES", "25"))

# Disable the deadline so slow CI containers do not produce flaky failures.
if "HYPOTHESIS_PROFILE" not in os.environ:
    try:
        settings.register_profile(
            "ci",
            settings(
                deadline=None,
                max_examples=_DEFAULT_MAX_EXAMPLES,
            ),
        )
    except ValueError:
        pass
    settings.load_profile("ci")


ATTESTOR_ID = "projects/proj/attestors/qa-attestor"
NOTE_ID = "projects/proj/notes/qa"
KEY_VERSION = (
    "projects/proj/locations/global/keyRings/qa/cryptoKeys/qa-signer/cryptoKeyVersions/1"
)

BINAUTHZ = "https://binaryauthorization.googleapis.com"
KMS = "https://cloudkms.googleapis.com"
CONTAINER_ANALYSIS = "https://containeranalysis.googleapis.com"


def fake_signature(digest: bytes) -> bytes:
    """Deterministic stand-in signature so tests can pair digests and signatures."""
    return b"sig:" + digest


class FakeGoogleApis:
    """
    In-memory Binary Authorization, KMS, and Container Analysis endpoints.

    Every request is recorded; occurrences are stored as posted.
    """

    def __init__(self, note_reference: Optional[str] = NOTE_ID) -> None:
        self.note_reference = note_reference
        self.requests: list[httpx.Request] = []
        self.occurrences: list[dict] = []
        self.sign_calls: list[str] = []
        self.overrides: dict[str, Callable[[httpx.Request], httpx.Response]] = {}

    def attestor_document(self) -> dict:
        doc = {"name": ATTESTOR_ID, "description": "QA attestor"}
        if self.note_reference is not None:
            doc["userOwnedDrydockNote"] = {"noteReference": self.note_reference}
        return doc

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url = str(request.url)

        for prefix, override in self.overrides.items():
            if url.startswith(prefix):
                return override(request)

        if url.startswith(f"{BINAUTHZ}/v1beta1/") and request.method == "GET":
            return httpx.Response(200, json=self.attestor_document())

        if url.startswith(f"{KMS}/v1/") and url.endswith(":asymmetricSign"):
            body = json.loads(request.content)
            digest = base64.b64decode(body["digest"]["sha512"])
            self.sign_calls.append(url)
            signature = base64.b64encode(fake_signature(digest)).decode()
            return httpx.Response(200, json={"signature": signature, "name": KEY_VERSION})

        if url.startswith(f"{CONTAINER_ANALYSIS}/v1beta1/projects/") and url.endswith(
            "/occurrences"
        ):
            body = json.loads(request.content)
            self.occurrences.append(body)
            return httpx.Response(200, json={**body, "name": f"occ-{len(self.occurrences)}"})

        return httpx.Response(404, json={"error": {"code": 404, "message": "not found"}})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def fake_apis() -> FakeGoogleApis:
    return FakeGoogleApis()


@pytest.fixture
def api_client(fake_apis: FakeGoogleApis) -> GoogleApiClient:
    return GoogleApiClient(
        StaticTokenProvider("test-token"), timeout=5.0, transport=fake_apis.transport
    )


@pytest.fixture
def app_settings() -> Settings:
    return Settings(
        ATTESTOR=ATTESTOR_ID,
        KMS_KEY_VERSION=KEY_VERSION,
        GOOGLE_ACCESS_TOKEN="test-token",
        _env_file=None,
    )


@pytest.fixture
def orchestrator(app_settings: Settings, fake_apis: FakeGoogleApis) -> AttestationOrchestrator:
    return build_orchestrator(app_settings, transport=fake_apis.transport)
