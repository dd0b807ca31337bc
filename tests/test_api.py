"""Tests for the HTTP surface."""

import pytest
from fastapi.testclient import TestClient

from dfu_assistant.app.dependencies import get_chat_service, get_llm_provider
from dfu_assistant.app.main import app, stream_reply
from dfu_assistant.config import settings
from dfu_assistant.repositories.session import SessionIdConversationStore
from dfu_assistant.state.models import WizardStep

from .helpers import HangingLLMProvider, UnconfiguredLLMProvider, collect


@pytest.fixture
def client(service, llm):
    app.dependency_overrides[get_chat_service] = lambda: service
    app.dependency_overrides[get_llm_provider] = lambda: llm
    yield TestClient(app)
    app.dependency_overrides.clear()


def post_turn(client, text, turn_count=0, **extra):
    return client.post("/turns", json={"text": text, "turn_count": turn_count, **extra})


def test_turn_streams_markdown(client):
    response = post_turn(client, "begin-integration posix")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/markdown")
    assert "### Step 1/3: Memory Allocation" in response.text


def test_full_conversation(client, llm):
    for i, text in enumerate(["begin-integration posix", "ShmM_MapOwner", "MyReader"]):
        post_turn(client, text, turn_count=2 * i)

    response = post_turn(client, "none", turn_count=6)

    assert "// dmiu_integration.c" in response.text
    assert "✅ **Integration complete!**" in response.text
    assert len(llm.requests) == 1


def test_command_field(client):
    response = post_turn(client, "autosar", command="begin-integration")
    assert "## Starting AUTOSAR Integration" in response.text


def test_negative_turn_count_is_rejected(client):
    assert post_turn(client, "hello", turn_count=-1).status_code == 422


def test_read_session(client):
    post_turn(client, "begin-integration posix")
    post_turn(client, "ShmM_MapOwner", turn_count=2)

    response = client.get("/sessions/4")

    assert response.status_code == 200
    body = response.json()
    assert body["step"] == "AWAITING_DATASET_FN"
    assert body["platform"] == "posix"
    assert body["memory_fn"] == "ShmM_MapOwner"
    assert body["dataset_fn"] is None


def test_unknown_session(client):
    assert client.get("/sessions/40").status_code == 404
    assert client.get("/sessions/abc").status_code == 404


def test_clear_sessions(client):
    post_turn(client, "begin-integration posix")
    assert client.get("/sessions/2").status_code == 200

    response = client.delete("/sessions")

    assert response.status_code == 204
    assert client.get("/sessions/2").status_code == 404


def test_session_id_keying(client, service, monkeypatch):
    monkeypatch.setattr(settings, "SESSION_KEYING", "session_id")
    service.store = SessionIdConversationStore()

    assert post_turn(client, "begin-integration posix").status_code == 422

    post_turn(client, "begin-integration posix", session_id="conv-1")
    response = client.get("/sessions/conv-1")
    assert response.json()["step"] == "AWAITING_MEMORY_FN"


def test_health(client):
    assert client.get("/health").json() == {"status": "ok", "oracle": True}


def test_health_without_model(client):
    app.dependency_overrides[get_llm_provider] = lambda: UnconfiguredLLMProvider()
    assert client.get("/health").json() == {"status": "ok", "oracle": False}


class _DisconnectingRequest:
    """Reports the client gone after the first chunk was sent."""

    def __init__(self):
        self.checks = 0

    async def is_disconnected(self):
        self.checks += 1
        return self.checks > 1


async def test_disconnect_rolls_back_before_response_ends(make_service, workspace):
    service = make_service(workspace, HangingLLMProvider())
    for i, text in enumerate(["begin-integration posix", "ShmM_MapOwner", "MyReader"]):
        await collect(service.process_message(2 * i, text))

    sent = [chunk async for chunk in stream_reply(_DisconnectingRequest(), service.process_message(6, "none"))]

    assert len(sent) == 1
    assert b"Generating Integration Files" in sent[0]
    session = service.get_session(6)
    assert session.step == WizardStep.AWAITING_ALT_FN
    assert session.alt_fn is None
