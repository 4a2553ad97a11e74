"""
Tests for the HTTP layer.

Routes run through FastAPI's TestClient with the analyst dependency
overridden, so the real prompt pipeline runs but no model is called.
"""

import pytest
from fastapi.testclient import TestClient

from src.api import dependencies
from src.api.dependencies import get_score_analyst, get_text_client
from src.config.settings import Settings, get_settings
from src.core.insights.analyst import ScoreAnalyst
from src.core.insights.intent import BEST_ROUND_INSTRUCTION
from src.core.insights.prompts import NO_SCORES_NOTICE
from src.infrastructure.anthropic.client import AnthropicClientError
from src.main import (
    GENERATION_FAILED_MESSAGE,
    INVALID_REQUEST_MESSAGE,
    create_app,
    lifespan,
)


@pytest.fixture
def app(text_client):
    app = create_app()
    app.dependency_overrides[get_score_analyst] = lambda: ScoreAnalyst(text_client=text_client)
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    with TestClient(app) as client:
        yield client


# ---------------------------------------------------------------------------
# POST /api/insight
# ---------------------------------------------------------------------------

class TestInsightEndpoint:
    """Tests for the happy path."""

    def test_returns_model_response(self, client, text_client, sample_rounds):
        response = client.post(
            "/api/insight",
            json={"prompt": "What was my best round?", "rounds": sample_rounds},
        )

        assert response.status_code == 200
        assert response.json() == {"response": text_client.generate.return_value}

    def test_builds_prompt_from_body(self, client, text_client):
        client.post(
            "/api/insight",
            json={
                "prompt": "What was my best round?",
                "rounds": [
                    {"courseName": "Oakwood", "totalScore": 72},
                    {"courseName": "Maple Hill", "totalScore": 55},
                ],
            },
        )

        prompt = text_client.generate.await_args.kwargs["prompt"]
        assert BEST_ROUND_INSTRUCTION in prompt
        assert prompt.index("Round 1: Course: Maple Hill") < prompt.index("Round 2: Course: Oakwood")

    def test_empty_rounds(self, client, text_client):
        response = client.post("/api/insight", json={"prompt": "hello", "rounds": []})

        assert response.status_code == 200
        assert text_client.generate.await_args.kwargs["prompt"].endswith(NO_SCORES_NOTICE)

    def test_legacy_path(self, client):
        response = client.post("/api/gemini-insight", json={"prompt": "hello", "rounds": []})

        assert response.status_code == 200
        assert "response" in response.json()

    def test_legacy_path_hidden_from_schema(self, client):
        paths = client.get("/openapi.json").json()["paths"]

        assert "/api/insight" in paths
        assert "/api/gemini-insight" not in paths


class TestInsightValidation:
    """Every malformed body gets the same 400 and the model isn't called."""

    @pytest.mark.parametrize(
        "body",
        [
            {},
            {"rounds": []},
            {"prompt": "", "rounds": []},
            {"prompt": "hello"},
            {"prompt": "hello", "rounds": "not a list"},
            {"prompt": None, "rounds": {"bad": True}},
            ["prompt", "rounds"],
        ],
    )
    def test_rejects_bad_body(self, client, text_client, body):
        response = client.post("/api/insight", json=body)

        assert response.status_code == 400
        assert response.json() == {"error": INVALID_REQUEST_MESSAGE}
        text_client.generate.assert_not_awaited()

    def test_rejects_invalid_json(self, client, text_client):
        response = client.post(
            "/api/insight",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json() == {"error": INVALID_REQUEST_MESSAGE}


class TestInsightGenerationFailure:
    """Upstream failures are reported without leaking the cause."""

    def test_returns_fixed_500(self, client, text_client):
        text_client.generate.side_effect = AnthropicClientError("API error: secret upstream detail")

        response = client.post("/api/insight", json={"prompt": "hello", "rounds": []})

        assert response.status_code == 500
        assert response.json() == {"error": GENERATION_FAILED_MESSAGE}
        assert "secret upstream detail" not in response.text

    def test_unexpected_error_uses_same_error_shape(self, app, text_client):
        text_client.generate.side_effect = RuntimeError("secret internal detail")

        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.post("/api/insight", json={"prompt": "hello", "rounds": []})

        assert response.status_code == 500
        assert set(response.json()) == {"error"}
        assert "secret internal detail" not in response.text


class TestInsightRoundData:
    """Odd round values still produce a prompt, never an error."""

    def test_huge_timestamp_renders_no_date(self, client, text_client):
        body = (
            '{"prompt": "hello", "rounds": [{"courseName": "Oakwood", '
            '"date": {"seconds": ' + "9" * 400 + ', "nanoseconds": 0}}]}'
        )

        response = client.post(
            "/api/insight",
            content=body,
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 200
        prompt = text_client.generate.await_args.kwargs["prompt"]
        assert "Course: Oakwood, Layout: N/A, Date: N/A Date" in prompt

    def test_infinite_total_renders_not_available(self, client, text_client):
        body = '{"prompt": "hello", "rounds": [{"courseName": "Oakwood", "totalScore": Infinity}]}'

        response = client.post(
            "/api/insight",
            content=body,
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 200
        prompt = text_client.generate.await_args.kwargs["prompt"]
        assert "Total Score: N/A" in prompt


# ---------------------------------------------------------------------------
# Health, root, CORS
# ---------------------------------------------------------------------------

class TestHealth:
    """Tests for liveness and readiness."""

    def test_liveness(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_ready_when_configured(self, client):
        response = client.get("/health/ready")

        assert response.status_code == 200
        assert response.json()["status"] == "ready"

    def test_not_ready_without_api_key(self, app, client):
        app.dependency_overrides[get_settings] = lambda: Settings(anthropic_api_key="")

        response = client.get("/health/ready")

        assert response.status_code == 503
        body = response.json()
        assert body["status"] == "not_ready"
        assert "ANTHROPIC_API_KEY" in body["checks"][0]["error"]

    def test_root(self, client):
        assert client.get("/").json()["docs"] == "/docs"


class TestCors:
    """Tests for the origin allow-list."""

    def test_allows_configured_origin(self, client):
        response = client.options(
            "/api/insight",
            headers={
                "Origin": "http://localhost:5175",
                "Access-Control-Request-Method": "POST",
            },
        )

        assert response.headers["access-control-allow-origin"] == "http://localhost:5175"

    def test_ignores_unknown_origin(self, client):
        response = client.post(
            "/api/insight",
            json={"prompt": "hello", "rounds": []},
            headers={"Origin": "https://evil.example"},
        )

        assert "access-control-allow-origin" not in response.headers


# ---------------------------------------------------------------------------
# Startup and dependencies
# ---------------------------------------------------------------------------

class TestStartup:
    """The service refuses to start without an API key."""

    @pytest.mark.asyncio
    async def test_missing_api_key_fails_startup(self, monkeypatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "")
        get_settings.cache_clear()

        with pytest.raises(RuntimeError, match="ANTHROPIC_API_KEY"):
            async with lifespan(create_app()):
                pass

    @pytest.mark.asyncio
    async def test_starts_with_api_key(self, monkeypatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "configured")
        get_settings.cache_clear()

        async with lifespan(create_app()):
            pass


class TestDependencies:
    """Tests for the dependency providers."""

    def test_text_client_is_shared(self, monkeypatch):
        monkeypatch.setattr(dependencies, "_text_client", None)
        settings = Settings(anthropic_api_key="k", anthropic_model="claude-test")

        first = get_text_client(settings)
        second = get_text_client(settings)

        assert first is second
        assert first.config.model == "claude-test"

    def test_text_client_uses_settings(self, monkeypatch):
        monkeypatch.setattr(dependencies, "_text_client", None)
        settings = Settings(
            anthropic_api_key="k",
            anthropic_max_tokens=100,
            anthropic_temperature=0.0,
        )

        config = get_text_client(settings).config

        assert config.max_tokens == 100
        assert config.temperature == 0.0

    def test_text_client_ignores_environment_key(self, monkeypatch):
        """Only the Settings value is used to build the client."""
        monkeypatch.setattr(dependencies, "_text_client", None)
        monkeypatch.setenv("ANTHROPIC_API_KEY", "from-environment")

        client = get_text_client(Settings(anthropic_api_key="from-settings"))

        assert client.config.api_key == "from-settings"

    def test_score_analyst_wraps_client(self, text_client):
        assert isinstance(get_score_analyst(text_client), ScoreAnalyst)
