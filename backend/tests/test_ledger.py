"""Occurrence publisher tests."""

import base64

import httpx
import pytest
from pydantic import ValidationError

from conftest import CONTAINER_ANALYSIS, KEY_VERSION, NOTE_ID
from qa_verifier.services.ledger import (
    InvalidNote,
    LedgerPublisher,
    PublishError,
    note_project,
)

IMAGE_ID = "gcr.io/proj/demo-app@sha256:" + "cd" * 32
PAYLOAD = b'{"critical":{}}'
SIGNATURE = b"\x00\x01signature\xff"


def test_note_project_extracts_project_segment() -> None:
    assert note_project("projects/other-proj/notes/qa") == "other-proj"


@pytest.mark.parametrize("note", ["", "projects/p", "projects/p/notes"])
def test_note_project_rejects_short_references(note: str) -> None:
    with pytest.raises(InvalidNote):
        note_project(note)


def test_build_occurrence_matches_api_shape(api_client) -> None:
    occurrence = LedgerPublisher(api_client).build_occurrence(
        NOTE_ID, IMAGE_ID, KEY_VERSION, PAYLOAD, SIGNATURE
    )

    assert occurrence.to_api_body() == {
        "kind": "ATTESTATION",
        "noteName": NOTE_ID,
        "resource": {"uri": f"https://{IMAGE_ID}"},
        "attestation": {
            "attestation": {
                "genericSignedAttestation": {
                    "contentType": "SIMPLE_SIGNING_JSON",
                    "serializedPayload": base64.b64encode(PAYLOAD).decode(),
                    "signatures": [
                        {
                            "publicKeyId": f"//cloudkms.googleapis.com/v1/{KEY_VERSION}",
                            "signature": base64.b64encode(SIGNATURE).decode(),
                        }
                    ],
                }
            }
        },
    }


def test_occurrence_is_immutable(api_client) -> None:
    occurrence = LedgerPublisher(api_client).build_occurrence(
        NOTE_ID, IMAGE_ID, KEY_VERSION, PAYLOAD, SIGNATURE
    )

    with pytest.raises(ValidationError):
        occurrence.note_name = "projects/x/notes/y"  # type: ignore[misc]


@pytest.mark.asyncio
async def test_publish_posts_to_note_project(api_client, fake_apis) -> None:
    publisher = LedgerPublisher(api_client)

    result = await publisher.publish(NOTE_ID, IMAGE_ID, KEY_VERSION, PAYLOAD, SIGNATURE)

    assert result is None
    assert str(fake_apis.requests[0].url) == (
        f"{CONTAINER_ANALYSIS}/v1beta1/projects/proj/occurrences"
    )
    assert len(fake_apis.occurrences) == 1
    posted = fake_apis.occurrences[0]
    generic = posted["attestation"]["attestation"]["genericSignedAttestation"]
    assert base64.b64decode(generic["serializedPayload"]) == PAYLOAD
    assert base64.b64decode(generic["signatures"][0]["signature"]) == SIGNATURE


@pytest.mark.asyncio
async def test_publish_rejects_invalid_note_before_calling(api_client, fake_apis) -> None:
    publisher = LedgerPublisher(api_client)

    with pytest.raises(InvalidNote):
        await publisher.publish("projects/p", IMAGE_ID, KEY_VERSION, PAYLOAD, SIGNATURE)

    assert fake_apis.requests == []


@pytest.mark.asyncio
async def test_publish_remote_rejection(api_client, fake_apis) -> None:
    fake_apis.overrides[CONTAINER_ANALYSIS] = lambda request: httpx.Response(
        409, json={"error": {"code": 409, "message": "already exists"}}
    )
    publisher = LedgerPublisher(api_client)

    with pytest.raises(PublishError) as exc_info:
        await publisher.publish(NOTE_ID, IMAGE_ID, KEY_VERSION, PAYLOAD, SIGNATURE)

    assert not isinstance(exc_info.value, InvalidNote)


@pytest.mark.asyncio
async def test_publish_twice_creates_two_records(api_client, fake_apis) -> None:
    publisher = LedgerPublisher(api_client)

    await publisher.publish(NOTE_ID, IMAGE_ID, KEY_VERSION, PAYLOAD, SIGNATURE)
    await publisher.publish(NOTE_ID, IMAGE_ID, KEY_VERSION, PAYLOAD, SIGNATURE)

    assert len(fake_apis.occurrences) == 2
