from __future__ import annotations

import json
from datetime import datetime

import httpx
import pytest
from fastapi.testclient import TestClient

from app.config import Settings, build_relay_config
from app.main import create_app

PROVIDER_COMPLETION = {
    "id": "chatcmpl-123",
    "object": "chat.completion",
    "model": "gpt-4o",
    "choices": [
        {
            "index": 0,
            "message": {"role": "assistant", "content": "pong"},
            "finish_reason": "stop",
        }
    ],
    "usage": {"prompt_tokens": 1, "completion_tokens": 1, "total_tokens": 2},
}


@pytest.fixture()
def captured() -> dict:
    return {"requests": [], "response": httpx.Response(200, json=PROVIDER_COMPLETION)}


@pytest.fixture()
def client(captured: dict) -> TestClient:
    def handler(request: httpx.Request) -> httpx.Response:
        captured["requests"].append(request)
        return captured["response"]

    config = build_relay_config(Settings(provider="shuaihong", target_api_key="sk-test"))
    return TestClient(create_app(config=config, transport=httpx.MockTransport(handler)))


def test_passthrough_returns_provider_body_unmodified(client: TestClient, captured: dict):
    payload = {"model": "gpt-4o-mini", "messages": [{"role": "user", "content": "ping"}]}

    response = client.post("/chat/completions", json=payload)

    assert response.status_code == 200
    assert response.json() == PROVIDER_COMPLETION

    outbound = captured["requests"][-1]
    assert str(outbound.url) == "https://ai.shuaihong.fun/v1/chat/completions"
    assert outbound.headers["authorization"] == "Bearer sk-test"
    assert json.loads(outbound.content) == payload


def test_passthrough_fills_missing_model(client: TestClient, captured: dict):
    payload = {"messages": [{"role": "user", "content": "ping"}], "temperature": 0}

    client.post("/chat/completions", json=payload)

    assert json.loads(captured["requests"][-1].content) == {
        "messages": [{"role": "user", "content": "ping"}],
        "temperature": 0,
        "model": "gpt-4o",
    }


def test_passthrough_forwards_unknown_fields(client: TestClient, captured: dict):
    payload = {
        "model": "gpt-4o",
        "messages": [{"role": "user", "content": "ping"}],
        "tools": [{"type": "function", "function": {"name": "noop"}}],
        "stream": False,
        "vendor_option": {"a": 1},
    }

    client.post("/chat/completions", json=payload)

    assert json.loads(captured["requests"][-1].content) == payload


def test_passthrough_provider_error(client: TestClient, captured: dict):
    captured["response"] = httpx.Response(503, text="upstream overloaded")

    response = client.post("/chat/completions", json={"messages": []})

    assert response.status_code == 503
    assert response.json() == {
        "error": {
            "message": "Provider error: upstream overloaded",
            "type": "provider_error",
            "code": 503,
        }
    }


def test_passthrough_invalid_provider_json_is_internal_error(client: TestClient, captured: dict):
    captured["response"] = httpx.Response(200, text="<html>oops</html>")

    response = client.post("/chat/completions", json={"messages": []})

    assert response.status_code == 500
    body = response.json()
    assert body["error"]["type"] == "internal_error"
    assert body["error"]["code"] == 500


def test_passthrough_transport_error():
    def timeout(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    config = build_relay_config(Settings(provider="openai"))
    client = TestClient(create_app(config=config, transport=httpx.MockTransport(timeout)))

    response = client.post("/chat/completions", json={"messages": []})

    assert response.status_code == 500
    assert response.json() == {
        "error": {"message": "timed out", "type": "internal_error", "code": 500}
    }


def test_passthrough_rejects_non_object_body(client: TestClient, captured: dict):
    response = client.post("/chat/completions", json="hello")

    assert response.status_code == 400
    assert response.json()["error"]["type"] == "invalid_request_error"
    assert captured["requests"] == []


def test_health_endpoint(client: TestClient):
    response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["service"] == "gemini-relay"
    assert body["provider"] == "shuaihong"
    datetime.fromisoformat(body["timestamp"])


def test_config_endpoint(client: TestClient):
    response = client.get("/config")

    assert response.json() == {"provider": "shuaihong", "model": "gpt-4o", "version": "1.0.0"}


def test_cors_preflight(client: TestClient):
    response = client.options(
        "/v1beta/models/gemini-pro:generateContent",
        headers={
            "Origin": "http://localhost:5173",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "x-goog-api-key",
        },
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"
