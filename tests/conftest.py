"""Pytest configuration and fixtures."""

from typing import Any, Dict, Generator, List

import fakeredis
import pytest
import requests
from fastapi.testclient import TestClient

from utils import db, llm


@pytest.fixture(autouse=True)
def store(monkeypatch) -> fakeredis.FakeRedis:
    """Swap the module-level Redis client for an in-memory one."""
    fake = fakeredis.FakeRedis()
    monkeypatch.setattr(db, "_redis", fake)
    return fake


class FakeResponse:
    def __init__(self, body: Dict[str, Any], status_code: int = 200):
        self._body = body
        self.status_code = status_code
        self.ok = status_code < 400

    def raise_for_status(self):
        if not self.ok:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self._body


def gemini_body(text: str, chunks: List[Dict[str, Any]] = None) -> Dict[str, Any]:
    candidate: Dict[str, Any] = {"content": {"parts": [{"text": text}]}}
    if chunks is not None:
        candidate["groundingMetadata"] = {"groundingChunks": chunks}
    return {"candidates": [candidate]}


class ModelStub:
    """Records requests sent to the model endpoint and replays a canned response."""

    def __init__(self):
        self.calls: List[Dict[str, Any]] = []
        self.response: Any = FakeResponse(gemini_body("Restock red wine before Friday."))

    def reply(self, response: Any) -> None:
        self.response = response

    def post(self, url, headers=None, json=None, timeout=None, **kwargs):
        self.calls.append({"url": url, "headers": headers, "json": json})
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


@pytest.fixture
def model(monkeypatch) -> ModelStub:
    """Gemini backend with a dummy key; outbound calls go to the stub."""
    stub = ModelStub()
    monkeypatch.setattr(llm, "_BACKEND", "gemini")
    monkeypatch.setattr(llm, "_API_KEY", "test-key")
    monkeypatch.setattr(llm.requests, "post", stub.post)
    return stub


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    from main import app
    with TestClient(app) as test_client:
        yield test_client


def login(client: TestClient, user_id: str, password: str) -> Dict[str, str]:
    resp = client.post("/auth/login", json={"id": user_id, "password": password})
    assert resp.status_code == 200, resp.text
    return {"X-Session-Id": resp.json()["session_id"]}


@pytest.fixture
def admin_headers(client) -> Dict[str, str]:
    return login(client, "admin", "password")


@pytest.fixture
def waiter_headers(client, admin_headers) -> Dict[str, str]:
    resp = client.post("/staff/access", json={"id": "waiter1", "password": "pw", "name": "Hari"},
                       headers=admin_headers)
    assert resp.status_code == 201
    return login(client, "waiter1", "pw")


@pytest.fixture
def customer_headers(client) -> Dict[str, str]:
    resp = client.post("/auth/register", json={"name": "Maya", "phone": "9841001234", "password": "secret"})
    assert resp.status_code == 201
    return login(client, resp.json()["id"], "secret")
