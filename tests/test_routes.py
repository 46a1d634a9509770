"""API tests with the pipeline and chat wired to fakes."""

import json

import pytest
from fastapi.testclient import TestClient

from config.settings import Settings, get_settings
from main import app
from middleware.auth import encrypt_api_key
from routes.chat import get_chat_model_service, get_session_store
from routes.vehicle_damage import get_orchestrator
from services import (
    AnalysisOrchestrator,
    ChatSessionStore,
    ClaimsGuideGenerator,
    DamageAnalyzer,
    StructuredModelClient,
)
from services.conversation import NOT_CONFIGURED_MESSAGE, SEND_FAILED_MESSAGE
from tests.fakes import (
    FakeChat,
    FakeChatService,
    FakeModelService,
    make_analysis,
    make_claims,
    make_damage,
    make_png,
)
from utils.errors import ModelUnavailable

API_KEY = "client-secret"
ENCRYPTION_KEY = "server-shared-secret"


def _settings(**overrides):
    values = {
        "gemini_api_key": "test-key",
        "api_key": API_KEY,
        "encryption_key": ENCRYPTION_KEY,
        "max_images_per_report": 3,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def headers():
    return {"x-api-key": encrypt_api_key(API_KEY, ENCRYPTION_KEY)}


@pytest.fixture
def payloads():
    return {
        "front.png": make_analysis([make_damage(severity="High", damage_type="Dent", location="front bumper")]),
        "rear.png": make_analysis([], total=0),
    }


@pytest.fixture
def claims_service():
    return FakeModelService(responses=[make_claims()])


@pytest.fixture
def chat():
    return FakeChat(["Hello! I'm VDA-Bot.", "About INR 1500."])


@pytest.fixture
def client(payloads, claims_service, chat):
    def analysis_handler(prompt, schema, image):
        payload = payloads[image.name]
        return payload if isinstance(payload, str) else json.dumps(payload)

    orchestrator = AnalysisOrchestrator(
        analyzer=DamageAnalyzer(StructuredModelClient(FakeModelService(handler=analysis_handler))),
        claims_generator=ClaimsGuideGenerator(StructuredModelClient(claims_service)),
    )
    store = ChatSessionStore()

    app.dependency_overrides[get_settings] = lambda: _settings()
    app.dependency_overrides[get_orchestrator] = lambda: orchestrator
    app.dependency_overrides[get_chat_model_service] = lambda: FakeChatService(chat=chat)
    app.dependency_overrides[get_session_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


def _files(*names):
    return [("files", (name, make_png(), "image/png")) for name in names]


def _report(client, headers):
    response = client.post("/vehicle-damage/analyze", files=_files("front.png", "rear.png"), headers=headers)
    assert response.status_code == 200
    return response.json()


class TestAuthentication:

    def test_missing_header_is_rejected(self, client):
        response = client.post("/vehicle-damage/analyze", files=_files("front.png"))

        assert response.status_code == 422

    def test_wrong_key_is_rejected(self, client):
        headers = {"x-api-key": encrypt_api_key("someone-else", ENCRYPTION_KEY)}

        response = client.post("/vehicle-damage/analyze", files=_files("front.png"), headers=headers)

        assert response.status_code == 401

    def test_garbage_header_is_rejected(self, client):
        response = client.post(
            "/vehicle-damage/analyze",
            files=_files("front.png"),
            headers={"x-api-key": "not-a-token"},
        )

        assert response.status_code == 401

    def test_unconfigured_server_refuses(self, client, headers):
        app.dependency_overrides[get_settings] = lambda: _settings(api_key="")

        response = client.post("/vehicle-damage/analyze", files=_files("front.png"), headers=headers)

        assert response.status_code == 500


class TestAnalyze:

    def test_report_in_upload_order_with_totals(self, client, headers, claims_service):
        report = _report(client, headers)

        assert [r["image"] for r in report["results"]] == ["front.png", "rear.png"]
        assert report["results"][0]["analysis"]["damages"][0]["damageType"] == "Dent"
        assert report["results"][0]["costMismatch"] is False
        assert report["grandTotalINR"] == 1500
        assert report["damageSummary"] == "High Dent on front bumper"
        assert report["claimsInformation"]["eligibleClaims"][0]["claimType"] == "Own Damage Claim"
        assert len(claims_service.calls) == 1

    def test_undecodable_upload_is_a_bad_request(self, client, headers):
        files = [("files", ("front.png", b"not an image", "image/png"))]

        response = client.post("/vehicle-damage/analyze", files=files, headers=headers)

        assert response.status_code == 400
        assert response.json()["detail"]["error_type"] == "INVALID_IMAGE"

    def test_too_many_images_is_a_bad_request(self, client, headers):
        response = client.post(
            "/vehicle-damage/analyze",
            files=_files("1.png", "2.png", "3.png", "4.png"),
            headers=headers,
        )

        assert response.status_code == 400

    def test_failed_image_withholds_the_report(self, client, headers, payloads, claims_service):
        payloads["rear.png"] = "no json here"

        response = client.post("/vehicle-damage/analyze", files=_files("front.png", "rear.png"), headers=headers)

        assert response.status_code == 422
        detail = response.json()["detail"]
        assert detail["error_type"] == "BATCH_ANALYSIS_FAILED"
        assert detail["details"]["image_index"] == 1
        assert "clearer images" in detail["message"]
        assert "original_exception" not in detail
        assert "no json here" not in response.text
        assert claims_service.calls == []

    def test_missing_gemini_key_is_service_unavailable(self, client, headers):
        app.dependency_overrides.pop(get_orchestrator)
        app.dependency_overrides[get_settings] = lambda: _settings(gemini_api_key="")

        response = client.post("/vehicle-damage/analyze", files=_files("front.png"), headers=headers)

        assert response.status_code == 503
        assert response.json()["detail"]["error_type"] == "CONFIG_MISSING"


class TestChat:

    def _open(self, client, headers):
        report = _report(client, headers)
        response = client.post(
            "/vehicle-damage/chat/sessions",
            json={"results": report["results"]},
            headers=headers,
        )
        assert response.status_code == 201
        return response.json()

    def test_open_session_returns_greeting(self, client, headers, chat):
        session = self._open(client, headers)

        assert session["state"] == "ready"
        assert session["greeting"] == "Hello! I'm VDA-Bot."
        assert session["history"] == [{"role": "model", "text": "Hello! I'm VDA-Bot."}]
        assert "High Dent on the front bumper" in chat.received[0]

    def test_send_message_and_read_history(self, client, headers):
        session_id = self._open(client, headers)["sessionId"]

        response = client.post(
            f"/vehicle-damage/chat/sessions/{session_id}/messages",
            json={"text": "How much for the bumper?"},
            headers=headers,
        )

        assert response.status_code == 200
        assert response.json()["reply"] == "About INR 1500."
        history = client.get(f"/vehicle-damage/chat/sessions/{session_id}", headers=headers).json()["history"]
        assert [turn["role"] for turn in history] == ["model", "user", "model"]

    def test_failed_reply_is_an_apology_not_an_error(self, client, headers, chat):
        chat.replies[1] = ModelUnavailable.from_exception(ConnectionError("down"), "chat message")
        session_id = self._open(client, headers)["sessionId"]

        response = client.post(
            f"/vehicle-damage/chat/sessions/{session_id}/messages",
            json={"text": "Hello?"},
            headers=headers,
        )

        assert response.status_code == 200
        assert response.json()["reply"] == SEND_FAILED_MESSAGE

    def test_blank_message_is_a_bad_request(self, client, headers):
        session_id = self._open(client, headers)["sessionId"]

        response = client.post(
            f"/vehicle-damage/chat/sessions/{session_id}/messages",
            json={"text": "   "},
            headers=headers,
        )

        assert response.status_code == 400

    def test_unconfigured_assistant_rejects_messages(self, client, headers):
        app.dependency_overrides[get_chat_model_service] = lambda: None
        session = self._open(client, headers)

        assert session["state"] == "uninitialized"
        assert session["greeting"] is None
        assert session["history"] == [{"role": "model", "text": NOT_CONFIGURED_MESSAGE}]

        response = client.post(
            f"/vehicle-damage/chat/sessions/{session['sessionId']}/messages",
            json={"text": "Hello?"},
            headers=headers,
        )
        assert response.status_code == 409

    def test_unknown_and_deleted_sessions_are_not_found(self, client, headers):
        session_id = self._open(client, headers)["sessionId"]

        assert client.delete(f"/vehicle-damage/chat/sessions/{session_id}", headers=headers).status_code == 204
        assert client.get(f"/vehicle-damage/chat/sessions/{session_id}", headers=headers).status_code == 404
        assert client.delete(f"/vehicle-damage/chat/sessions/{session_id}", headers=headers).status_code == 404


def test_health_reports_configuration(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["analysis_model"] == "gemini-3-pro-preview"
