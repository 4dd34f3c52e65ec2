"""Tests for the HTTP surface."""

from collections.abc import Iterator

import httpx
import pytest
from fastapi.testclient import TestClient

from careerlens.config import get_settings
from careerlens.engine import CareerGenerator
from careerlens.main import app, get_generator, get_speech
from careerlens.providers.base import ProviderNotConfiguredError
from careerlens.providers.elevenlabs import ElevenLabsAdapter
from conftest import FakeProvider

MATCHES_TEXT = '```json\n[{"id": "nurse", "title": "Registered Nurse", "match": 150}]\n```'


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def client(provider: FakeProvider) -> Iterator[TestClient]:
    """Client whose generator and speech adapter never touch the network."""

    def speech_handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/voices"):
            return httpx.Response(200, json={"voices": [{"voice_id": "a"}]})
        return httpx.Response(200, content=b"ID3audio")

    speech = ElevenLabsAdapter(
        api_key="test-key",
        client=httpx.AsyncClient(transport=httpx.MockTransport(speech_handler)),
    )
    app.dependency_overrides[get_generator] = lambda: CareerGenerator(provider, model="test-model")
    app.dependency_overrides[get_speech] = lambda: speech

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def settings_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[pytest.MonkeyPatch]:
    """Let a test change environment-driven settings."""
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()


class TestStatusEndpoints:
    """Test liveness and health."""

    def test_hello(self, client: TestClient) -> None:
        response = client.get("/api/hello")

        assert response.status_code == 200
        assert response.json()["message"] == "Career Assessment API - Ready!"

    def test_health_reports_configuration(self, client: TestClient, settings_env: pytest.MonkeyPatch) -> None:
        settings_env.setenv("GENERATIVE_API_KEY", "key")
        settings_env.delenv("ELEVENLABS_API_KEY", raising=False)

        data = client.get("/api/health").json()

        assert data["apis"] == {"gemini": "configured", "elevenlabs": "not-configured"}

    def test_unknown_path_lists_endpoints(self, client: TestClient) -> None:
        response = client.get("/api/nope")

        assert response.status_code == 404
        assert "POST /api/matches" in response.json()["availableEndpoints"]

    def test_gemini_check_without_key(self, client: TestClient, settings_env: pytest.MonkeyPatch) -> None:
        settings_env.delenv("GENERATIVE_API_KEY", raising=False)

        response = client.get("/api/test-gemini")

        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_gemini_check_with_key(
        self, client: TestClient, provider: FakeProvider, settings_env: pytest.MonkeyPatch
    ) -> None:
        settings_env.setenv("GENERATIVE_API_KEY", "key")
        provider.content = '{"status": "success", "message": "Gemini API is working"}'

        data = client.get("/api/test-gemini").json()

        assert data["success"] is True
        assert data["response"]["status"] == "success"
        assert data["usage"]["total_tokens"] == 30

    def test_elevenlabs_check(self, client: TestClient) -> None:
        data = client.get("/api/test-elevenlabs").json()
        assert data == {"status": "Connected", "voicesCount": 1, "apiKeyPresent": True}


class TestCareerEndpoints:
    """Test the AI-backed endpoints with a canned provider."""

    def test_matches_are_normalized_and_padded(self, client: TestClient, provider: FakeProvider) -> None:
        provider.content = MATCHES_TEXT

        response = client.post("/api/matches", json={"username": "sam", "answers": {"q1": "a"}})

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["source"] == "gemini-ai"
        assert len(data["matches"]) == 6
        assert data["matches"][0]["match"] == 100
        assert data["matches"][5]["id"] == "career_5"
        assert provider.requests[0].max_tokens == 8192

    def test_overview_refusal_is_reported(self, client: TestClient, provider: FakeProvider) -> None:
        provider.content = "I cannot comply with that request."

        response = client.post("/api/overview", json={"answers": {"q1": "a"}})

        assert response.status_code == 500
        data = response.json()
        assert data["success"] is False
        assert data["errorType"] == "NO_JSON_FOUND"
        assert data["retryable"] is True
        assert data["troubleshooting"]

    def test_malformed_json_is_reported(self, client: TestClient, provider: FakeProvider) -> None:
        provider.content = '{"topMatches": [,]}'

        data = client.post("/api/overview", json={"answers": {"q1": "a"}}).json()

        assert data["errorType"] == "PARSE_ERROR"
        assert data["error"].startswith("JSON parse error")

    def test_provider_errors_are_reported(self, client: TestClient, provider: FakeProvider) -> None:
        provider.error = ProviderNotConfiguredError("gemini", "GENERATIVE_API_KEY not configured")

        response = client.post("/api/overview", json={"answers": {"q1": "a"}})

        assert response.status_code == 500
        assert response.json()["errorType"] == "NOT_CONFIGURED"
        assert response.json()["retryable"] is False

    def test_profile_without_answers_skips_the_model(self, client: TestClient, provider: FakeProvider) -> None:
        data = client.post("/api/profile", json={"username": "sam"}).json()

        assert data["source"] == "no-assessment-data"
        assert data["profile"]["summary"]["headline"] == "Complete Assessment to Generate Profile"
        assert provider.requests == []

    def test_profile_with_answers(self, client: TestClient, provider: FakeProvider) -> None:
        provider.content = '{"summary": {"headline": "Builder"}}'

        data = client.post("/api/profile", json={"username": "sam", "answers": {"q1": "a", "q2": "b"}}).json()

        assert data["profile"]["summary"]["headline"] == "Builder"
        assert data["profile"]["strengths"][0]["name"] == "Analytical Thinking"
        assert data["metadata"]["username"] == "sam"
        assert data["metadata"]["answersCount"] == 2

    def test_explore_echoes_filters(self, client: TestClient, provider: FakeProvider) -> None:
        provider.content = '[{"title": "Nurse", "industry": "Healthcare"}, {"title": "Medic"}]'

        data = client.get("/api/explore", params={"industry": "Healthcare"}).json()

        assert data["totalCount"] == 2
        assert data["filters"]["industry"] == "Healthcare"
        assert data["filters"]["educationLevel"] is None
        assert "Industry: Healthcare" in provider.requests[0].prompt

    @pytest.mark.parametrize("body", [{}, {"careerIds": []}, {"careerIds": "nurse"}])
    def test_compare_requires_ids(self, client: TestClient, body: dict) -> None:
        response = client.post("/api/explore/compare", json=body)

        assert response.status_code == 400
        assert response.json() == {"error": "careerIds array required"}

    def test_compare(self, client: TestClient, provider: FakeProvider) -> None:
        provider.content = '{"careers": [{"id": "nurse"}, {"id": "pilot"}], "recommendation": "Pick nurse"}'

        data = client.post("/api/explore/compare", json={"careerIds": ["nurse", "pilot"]}).json()

        assert [career["id"] for career in data["comparison"]["careers"]] == ["nurse", "pilot"]
        assert data["comparison"]["recommendation"] == "Pick nurse"

    def test_answers_are_acknowledged(self, client: TestClient) -> None:
        data = client.post("/api/answers", json={"q1": "a"}).json()
        assert data["message"] == "Assessment answers received"


class TestSpeechEndpoint:
    """Test text-to-speech."""

    def test_requires_text(self, client: TestClient) -> None:
        response = client.post("/api/text-to-speech", json={})

        assert response.status_code == 400
        assert response.json() == {"error": "Text is required"}

    def test_returns_audio(self, client: TestClient) -> None:
        response = client.post("/api/text-to-speech", json={"text": "Hello"})

        assert response.status_code == 200
        assert response.headers["content-type"] == "audio/mpeg"
        assert response.content == b"ID3audio"
