import pytest

from services.analysis_gateway.app.logic.operations import HANDLERS
from services.analysis_gateway.app.schemas.analysis import Operation

ALL_ENDPOINTS = [
    "quick-triage",
    "full-analyze",
    "status-explain",
    "generate-email",
    "user-chat",
    "personal-report",
    "admin-insights",
    "generate-reminder",
]


def assert_cors(resp):
    assert resp.headers["access-control-allow-origin"] == "*"
    assert resp.headers["access-control-allow-methods"] == "GET, POST, OPTIONS"
    assert resp.headers["access-control-allow-headers"] == "Content-Type"
    assert resp.headers["content-type"].startswith("application/json")


def test_every_operation_has_a_handler():
    assert set(HANDLERS) == set(Operation)
    assert [op.value for op in Operation] == ALL_ENDPOINTS


@pytest.mark.parametrize("path", ["/", "/health"])
@pytest.mark.parametrize("method", ["GET", "POST", "DELETE", "TRACE", "PROPFIND"])
def test_introspection_lists_endpoints_on_any_method(client, path, method):
    resp = client.request(method, path)
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "endpoints": ALL_ENDPOINTS}
    assert_cors(resp)


@pytest.mark.parametrize("path", ["/quick-triage", "/does-not-exist", "/health", "/"])
def test_options_preflight_short_circuits(client, upstream, path):
    resp = client.options(path)
    assert resp.status_code == 200
    assert resp.content == b""
    assert_cors(resp)
    assert upstream.calls == []


@pytest.mark.parametrize("method", ["GET", "POST", "PUT", "DELETE", "TRACE", "PROPFIND"])
def test_unknown_path_is_404(client, method):
    resp = client.request(method, "/live-analyze")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Endpoint not found"}
    assert_cors(resp)


def test_paths_compare_verbatim(client):
    assert client.post("/Quick-Triage", json={"text": "x"}).status_code == 404
    assert client.post("/quick-triage/", json={"text": "x"}).status_code == 404


def test_docs_routes_are_not_exposed(client):
    for path in ("/docs", "/openapi.json", "/redoc"):
        assert client.get(path).status_code == 404


@pytest.mark.parametrize("path", ALL_ENDPOINTS)
def test_registered_path_rejects_get(client, upstream, path):
    resp = client.get(f"/{path}")
    assert resp.status_code == 405
    assert resp.json() == {"error": "Method not allowed"}
    assert_cors(resp)
    assert upstream.calls == []


@pytest.mark.parametrize("method", ["TRACE", "PROPFIND", "PUT"])
def test_registered_path_rejects_other_methods(client, upstream, method):
    resp = client.request(method, "/full-analyze")
    assert resp.status_code == 405
    assert resp.json() == {"error": "Method not allowed"}
    assert_cors(resp)
    assert upstream.calls == []


def test_malformed_body_is_500(client, upstream):
    resp = client.post(
        "/quick-triage",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert resp.status_code == 500
    assert resp.json()["error"]
    assert_cors(resp)
    assert upstream.calls == []


def test_non_object_body_is_500(client):
    resp = client.post("/quick-triage", json=["a", "b"])
    assert resp.status_code == 500
    assert resp.json() == {"error": "Request body must be a JSON object"}


def test_wrongly_typed_field_is_500(client):
    resp = client.post("/user-chat", json={"query": "hi", "complaints": "not a list"})
    assert resp.status_code == 500
    assert "error" in resp.json()


def test_missing_credential_is_500(client, upstream, monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY")
    resp = client.post("/quick-triage", json={"text": "broken tap"})
    assert resp.status_code == 500
    assert resp.json() == {"error": "GEMINI_API_KEY not configured"}
    assert_cors(resp)
    assert upstream.calls == []


def test_blank_credential_is_500(client, monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "   ")
    resp = client.post("/generate-reminder", json={"complaint": {}})
    assert resp.status_code == 500
    assert resp.json() == {"error": "GEMINI_API_KEY not configured"}


def test_credential_only_travels_in_upstream_header(client, upstream, api_key):
    upstream.respond(status_code=403, envelope={"error": {"message": "bad key"}})
    resp = client.post("/quick-triage", json={"text": "broken tap"})
    assert resp.status_code == 200
    assert api_key not in resp.text
    call = upstream.calls[0]
    assert call["headers"]["x-goog-api-key"] == api_key
    assert api_key not in call["url"]


def test_credential_is_read_per_request(client, upstream, monkeypatch, api_key):
    upstream.reply("ok")
    client.post("/user-chat", json={"query": "hi"})
    monkeypatch.setenv("GEMINI_API_KEY", "rotated-key")
    client.post("/user-chat", json={"query": "hi"})
    assert [c["headers"]["x-goog-api-key"] for c in upstream.calls] == [api_key, "rotated-key"]
