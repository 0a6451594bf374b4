"""Tests for the HTTP gateway in mock mode."""
import asyncio

import httpx
import pytest
from fastapi.testclient import TestClient
from prometheus_client import REGISTRY
from structlog.testing import capture_logs
from unittest.mock import AsyncMock

from openai_llm.config import OpenAISettings
from openai_llm.exceptions import OpenAIClientError, OpenAIResponseError
from openai_llm.main import create_app


@pytest.fixture
def settings() -> OpenAISettings:
    return OpenAISettings(_env_file=None, mock=True, json_logs=False, n=2, model="mock-davinci")


@pytest.fixture
def client(settings: OpenAISettings):
    with TestClient(create_app(settings)) as c:
        yield c


def test_healthz(client: TestClient) -> None:
    resp = client.get("/healthz")
    assert resp.status_code == 200
    assert resp.json()["service"] == "openai_llm"


def test_readyz_reports_mock(client: TestClient) -> None:
    assert client.get("/readyz").json()["mock"] is True


def test_generate_groups_candidates_per_prompt(client: TestClient) -> None:
    resp = client.post("/generate", json={"prompts": ["alpha", "beta"]})
    assert resp.status_code == 200
    data = resp.json()
    assert len(data["generations"]) == 2
    assert all(len(group) == 2 for group in data["generations"])
    assert data["generations"][1][0]["text"].endswith("beta")
    assert data["generations"][0][0]["generation_info"]["finish_reason"] == "stop"
    assert data["llm_output"]["model"] == "mock-davinci"
    assert data["llm_output"]["token_usage"]["prompt_tokens"] == 2


def test_request_id_echoed(client: TestClient) -> None:
    resp = client.get("/healthz", headers={"X-Request-ID": "req-1"})
    assert resp.headers["X-Request-ID"] == "req-1"
    assert resp.headers["X-Trace-ID"] == "req-1"


def test_generate_rejects_empty_prompts(client: TestClient) -> None:
    assert client.post("/generate", json={"prompts": []}).status_code == 422


def test_api_error_maps_to_502(client: TestClient) -> None:
    client.app.state.llm.generate = AsyncMock(
        side_effect=OpenAIClientError("Rate limit reached", status_code=429)
    )
    resp = client.post("/generate", json={"prompts": ["x"]})
    assert resp.status_code == 502
    assert resp.json()["detail"] == "Rate limit reached"


def test_bad_response_maps_to_502(client: TestClient) -> None:
    client.app.state.llm.generate = AsyncMock(side_effect=OpenAIResponseError("Expected 2 choices"))
    resp = client.post("/generate", json={"prompts": ["x"]})
    assert resp.status_code == 502


def test_timeout_maps_to_504(client: TestClient) -> None:
    async def slow(*args, **kwargs):
        await asyncio.sleep(1)

    client.app.state.settings.generate_timeout_seconds = 0.01
    client.app.state.llm.generate = slow
    resp = client.post("/generate", json={"prompts": ["x"]})
    assert resp.status_code == 504


def test_metrics_exposed(client: TestClient) -> None:
    client.post("/generate", json={"prompts": ["x"]})
    body = client.get("/metrics/").text
    assert "openai_llm_generate_requests_total" in body


def test_real_mode_requires_api_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    with pytest.raises(RuntimeError, match="OPENAI_API_KEY"):
        create_app(OpenAISettings(_env_file=None, mock=False, json_logs=False))


def _sample(name: str, labels: dict[str, str]) -> float:
    return REGISTRY.get_sample_value(name, labels) or 0.0


def test_transport_error_maps_to_503_and_is_counted(client: TestClient) -> None:
    before = _sample("openai_llm_generate_requests_total", {"outcome": "transport_error"})
    client.app.state.llm.generate = AsyncMock(side_effect=httpx.ConnectError("connection refused"))

    with capture_logs() as logs:
        resp = client.post("/generate", json={"prompts": ["x"]})

    assert resp.status_code == 503
    assert _sample("openai_llm_generate_requests_total", {"outcome": "transport_error"}) == before + 1
    completed = [e for e in logs if e["event"] == "request_completed" and e["path"] == "/generate"]
    assert completed and completed[0]["status"] == 503


def test_token_usage_counted(client: TestClient) -> None:
    prompt_before = _sample("openai_llm_tokens_total", {"kind": "prompt"})
    completion_before = _sample("openai_llm_tokens_total", {"kind": "completion"})

    data = client.post("/generate", json={"prompts": ["alpha", "beta"]}).json()

    usage = data["llm_output"]["token_usage"]
    assert _sample("openai_llm_tokens_total", {"kind": "prompt"}) == prompt_before + usage["prompt_tokens"]
    assert (
        _sample("openai_llm_tokens_total", {"kind": "completion"})
        == completion_before + usage["completion_tokens"]
    )


def test_access_log_fields(client: TestClient) -> None:
    with capture_logs() as logs:
        client.get("/healthz", headers={"X-Request-ID": "req-7"})

    event = next(e for e in logs if e["event"] == "request_completed")
    assert event["method"] == "GET"
    assert event["path"] == "/healthz"
    assert event["status"] == 200
    assert event["duration_ms"] >= 0


def test_unhandled_error_still_logged(settings: OpenAISettings) -> None:
    app = create_app(settings)

    @app.get("/boom")
    async def boom() -> None:
        raise RuntimeError("boom")

    with TestClient(app, raise_server_exceptions=False) as c:
        with capture_logs() as logs:
            resp = c.get("/boom")

    assert resp.status_code == 500
    event = next(e for e in logs if e["event"] == "request_completed")
    assert event["path"] == "/boom"
    assert event["status"] == 500
    assert event["log_level"] == "error"
