import httpx
import pytest
from fastapi.testclient import TestClient

from services.analysis_gateway.app.main import app as gateway_app

TEST_API_KEY = "test-gemini-key"


class MockResp:
    def __init__(self, status_code=200, json_data=None, text=""):
        self.status_code = status_code
        self._json = json_data
        self.text = text or ""

    def json(self):
        if self._json is None:
            raise ValueError("No JSON body")
        return self._json


def make_envelope(text):
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


class FakeUpstream:
    """Controls what the mocked Gemini endpoint does for the current test."""

    def __init__(self):
        self.calls = []
        self.status_code = 200
        self.envelope = None
        self.error = None
        self.fail()

    def reply(self, text):
        self.error = None
        self.status_code = 200
        self.envelope = make_envelope(text)

    def fail(self, exc=None):
        self.error = exc or httpx.ConnectError("connection refused")

    def respond(self, status_code=200, envelope=None):
        self.error = None
        self.status_code = status_code
        self.envelope = envelope

    @property
    def last_prompt(self):
        return self.calls[-1]["json"]["contents"][0]["parts"][0]["text"]


@pytest.fixture
def upstream(monkeypatch):
    fake = FakeUpstream()

    class MockAsyncClient:
        def __init__(self, *a, **k):
            pass

        async def __aenter__(self):
            return self

        async def __aexit__(self, *exc):
            return False

        async def post(self, url, json=None, headers=None):
            fake.calls.append({"url": url, "json": json, "headers": headers or {}})
            if fake.error is not None:
                raise fake.error
            return MockResp(status_code=fake.status_code, json_data=fake.envelope, text="upstream body")

    monkeypatch.setattr("httpx.AsyncClient", MockAsyncClient)
    return fake


@pytest.fixture
def client(monkeypatch, upstream):
    monkeypatch.setenv("GEMINI_API_KEY", TEST_API_KEY)
    return TestClient(gateway_app)


@pytest.fixture
def api_key():
    return TEST_API_KEY


@pytest.fixture
def gemini_envelope():
    return make_envelope
