"""Tests for the HTTP endpoints."""

from __future__ import annotations

import pytest
from curl_cffi.requests.exceptions import ConnectionError as CurlConnectionError
from fastapi.testclient import TestClient

from gemini_bridge.exceptions import GeminiAPIError
from gemini_bridge.main import app
from gemini_bridge.routers.gemini import get_service
from gemini_bridge.services.context import GeminiContext
from gemini_bridge.services.gemini import GeminiService
from gemini_bridge.services.provider import GeminiProvider

from tests.conftest import TEXT_MODEL, VISION_MODEL, FakeProvider, text_response


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider(response=text_response("Hi there"))


@pytest.fixture
def client(context):
    # No `with` block: the lifespan (and its real session) is never started
    app.state.context = context
    app.dependency_overrides[get_service] = lambda: GeminiService(context)
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestHealth:
    def test_root(self, client: TestClient) -> None:
        body = client.get("/").json()
        assert body["status"] == "healthy"

    def test_health(self, client: TestClient) -> None:
        assert client.get("/health").json() == {"status": "healthy"}


class TestChatEndpoint:
    def test_success(self, client: TestClient) -> None:
        response = client.post(
            "/api/gemini/chat",
            json={
                "history": [
                    {"role": "user", "parts": [{"text": "hello"}], "id": "abc"},
                    {"role": "model", "parts": [{"text": "hey"}], "id": "def"},
                ],
                "inputText": "how are you?",
                "generationConfig": {"temperature": 0.3},
            },
        )
        assert response.status_code == 200
        assert response.json() == {"status": True, "text": "Hi there", "totalTokens": 30}

    def test_validation_failure(self, client: TestClient, provider: FakeProvider) -> None:
        response = client.post("/api/gemini/chat", json={"inputText": ""})
        assert response.status_code == 200
        assert response.json() == {
            "status": False,
            "text": "",
            "error": "input text is required.",
        }
        assert provider.remote_calls == 0

    def test_unknown_safety_category_is_ignored(
        self, client: TestClient, provider: FakeProvider
    ) -> None:
        response = client.post(
            "/api/gemini/chat",
            json={
                "inputText": "x",
                "safetySettings": [
                    {"category": "HARM_CATEGORY_NEW", "threshold": "BLOCK_LOW_AND_ABOVE"},
                    {"category": "HARM_CATEGORY_HATE_SPEECH", "threshold": "BLOCK_ONLY_HIGH"},
                ],
            },
        )
        assert response.status_code == 200
        assert response.json()["status"] is True

        sent = provider.generate_calls[0][1].model_dump(mode="json")["safetySettings"]
        assert [s["category"] for s in sent] == [
            "HARM_CATEGORY_HARASSMENT",
            "HARM_CATEGORY_HATE_SPEECH",
            "HARM_CATEGORY_SEXUALLY_EXPLICIT",
            "HARM_CATEGORY_DANGEROUS_CONTENT",
        ]
        assert sent[1]["threshold"] == "BLOCK_ONLY_HIGH"

    def test_off_threshold_is_accepted(self, client: TestClient, provider: FakeProvider) -> None:
        response = client.post(
            "/api/gemini/chat",
            json={
                "inputText": "x",
                "safetySettings": [{"category": "HARM_CATEGORY_HARASSMENT", "threshold": "OFF"}],
            },
        )
        assert response.status_code == 200
        assert response.json()["status"] is True

        sent = provider.generate_calls[0][1].model_dump(mode="json")["safetySettings"]
        assert sent[0] == {"category": "HARM_CATEGORY_HARASSMENT", "threshold": "OFF"}


class TestContentEndpoint:
    def test_image_request(self, client: TestClient, provider: FakeProvider) -> None:
        response = client.post(
            "/api/gemini/content",
            json={
                "parts": [
                    {"text": "Describe"},
                    {"inlineData": {"mimeType": "image/png", "data": "AAAA"}},
                ]
            },
        )
        assert response.json()["status"] is True
        assert provider.generate_calls[0][0] == VISION_MODEL

    def test_missing_prompt(self, client: TestClient) -> None:
        response = client.post("/api/gemini/content", json={})
        assert response.json() == {
            "status": False,
            "text": "",
            "error": "prompt text is required.",
        }


class TestTokenCountEndpoint:
    def test_windowed_history(self, client: TestClient) -> None:
        response = client.post(
            "/api/gemini/token-count",
            json={
                "history": [
                    {"role": "user", "parts": [{"text": "a"}]},
                    {"role": "model", "parts": [{"text": "b"}]},
                    {"role": "user", "parts": [{"text": "c"}]},
                ],
                "limit": 15,
            },
        )
        assert response.status_code == 200
        assert response.json() == {"totalTokens": 30, "validIndex": 2}

    def test_upstream_failure_is_502(self, client: TestClient, provider: FakeProvider) -> None:
        provider.count_error = GeminiAPIError(
            "Resource has been exhausted", status_code=429, status="RESOURCE_EXHAUSTED"
        )
        response = client.post("/api/gemini/token-count", json={"prompt": "hello"})
        assert response.status_code == 502
        assert response.json()["detail"]["error"] == {
            "code": 429,
            "message": "Resource has been exhausted",
            "status": "RESOURCE_EXHAUSTED",
        }

    def test_transport_failure_is_502(self) -> None:
        class UnreachableSession:
            async def post(self, url, **kwargs):
                raise CurlConnectionError("Failed to connect to generativelanguage.googleapis.com")

        context = GeminiContext(
            provider=GeminiProvider(UnreachableSession(), api_key="k"),
            text_model=TEXT_MODEL,
            vision_model=VISION_MODEL,
        )
        app.state.context = context
        app.dependency_overrides[get_service] = lambda: GeminiService(context)
        try:
            response = TestClient(app).post("/api/gemini/token-count", json={"prompt": "hi"})
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 502
        error = response.json()["detail"]["error"]
        assert error["status"] == "BAD_GATEWAY"
        assert "Failed to connect" in error["message"]


class TestModelsEndpoint:
    def test_lists_both_variants(self, client: TestClient) -> None:
        models = client.get("/api/gemini/models").json()["models"]
        assert [m["name"] for m in models] == [f"models/{TEXT_MODEL}", f"models/{VISION_MODEL}"]
