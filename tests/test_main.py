"""HTTP surface tests using FastAPI's TestClient."""

import pytest
from fastapi.testclient import TestClient

from chatbot import main
from chatbot.config import Settings
from chatbot.errors import UpstreamError
from chatbot.main import app, get_chat_service

ENVELOPE_KEYS = {"statusCode", "message", "timestamp", "path"}


class StubService:
    def __init__(self, reply=None, error=None):
        self.reply = reply
        self.error = error
        self.enquiries = []

    def handle(self, enquiry):
        self.enquiries.append(enquiry)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_chatbot_returns_reply_string(client):
    service = StubService(reply='We have "two" phones in stock.')
    app.dependency_overrides[get_chat_service] = lambda: service

    response = client.post("/chatbot", json={"userEnquiry": "I am looking for a phone"})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert response.text == 'We have "two" phones in stock.'
    assert service.enquiries == ["I am looking for a phone"]


def test_pipeline_failure_is_generic_500(client):
    app.dependency_overrides[get_chat_service] = lambda: StubService(error=UpstreamError("rate service down"))

    response = client.post("/chatbot", json={"userEnquiry": "10 USD in EUR"})

    assert response.status_code == 500
    body = response.json()
    assert set(body) == ENVELOPE_KEYS
    assert body["statusCode"] == 500
    assert body["message"] == "Internal server error"
    assert body["path"] == "/chatbot"
    assert "rate service" not in response.text


def test_unexpected_exception_uses_same_envelope():
    app.dependency_overrides[get_chat_service] = lambda: StubService(error=RuntimeError("boom"))
    try:
        response = TestClient(app, raise_server_exceptions=False).post("/chatbot", json={"userEnquiry": "hi"})
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json()["message"] == "Internal server error"


def test_missing_enquiry_is_rejected(client):
    app.dependency_overrides[get_chat_service] = lambda: StubService(reply="unused")

    response = client.post("/chatbot", json={})

    assert response.status_code == 400
    body = response.json()
    assert set(body) == ENVELOPE_KEYS
    assert "userEnquiry" in body["message"]


def test_unknown_route_uses_envelope(client):
    response = client.get("/nope")

    assert response.status_code == 404
    assert response.json()["path"] == "/nope"


def test_missing_openai_key_is_500(client, monkeypatch):
    monkeypatch.setattr(main, "settings", Settings(openai_api_key=""))
    get_chat_service.cache_clear()
    try:
        response = client.post("/chatbot", json={"userEnquiry": "hello"})
    finally:
        get_chat_service.cache_clear()

    assert response.status_code == 500
    assert response.json()["message"] == "Internal server error"


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"
