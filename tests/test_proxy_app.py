"""App-level behaviour: health, diagnostics, 404s, CORS and the error handler."""

from __future__ import annotations

import httpx
import pytest

from complaints_proxy.metrics import metrics_snapshot


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_liveness_never_calls_gas(gas, make_app, client_for):
    app = make_app()
    gas_url = app.state.proxy.settings.gas_url
    async with client_for(app) as client:
        resp = await client.get("/health")
    body = resp.json()
    assert resp.status_code == 200
    assert body["status"] == "ok"
    assert body["gas_url"] == gas_url[:50] + "..."
    assert body["timestamp"].endswith("Z")
    assert gas.requests == []


@pytest.mark.asyncio
async def test_health_reports_counters(gas, make_app, client_for):
    gas.fail()
    async with client_for(make_app()) as client:
        await client.get("/api/complaints")
        resp = await client.get("/api/health")
    body = resp.json()
    assert body["success"] is True
    assert body["message"] == "GAS Proxy Server is running"
    assert body["fallback_enabled"] is True
    assert body["metrics"]["upstream_calls"] == 1
    assert body["metrics"]["upstream_failures"] == 1
    assert body["metrics"]["fallback_responses"] == 1
    assert len(gas.requests) == 1


# ---------------------------------------------------------------------------
# Diagnostics
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_connection_reports_parsed_body(gas, make_app, client_for):
    gas.respond(200, json_body={"success": True, "message": "pong"})
    async with client_for(make_app()) as client:
        resp = await client.get("/api/test-connection")
    body = resp.json()
    assert resp.status_code == 200
    assert body["success"] is True
    assert body["message"] == "Proxy server connected to GAS"
    assert body["gas_response"] == {"success": True, "message": "pong"}
    assert gas.last_envelope["path"] == "test-connection"
    assert gas.last_envelope["action"] == "test"


@pytest.mark.asyncio
async def test_connection_wraps_raw_text(gas, make_app, client_for):
    gas.respond(200, text="<html>login</html>")
    async with client_for(make_app()) as client:
        resp = await client.get("/api/test-connection")
    assert resp.status_code == 200
    assert resp.json()["gas_response"] == {"raw": "<html>login</html>"}


@pytest.mark.asyncio
async def test_connection_transport_failure(gas, make_app, client_for):
    gas.fail("dns failure")
    async with client_for(make_app()) as client:
        resp = await client.get("/api/test-connection")
    body = resp.json()
    assert resp.status_code == 500
    assert body["success"] is False
    assert body["error"] == "dns failure"
    assert body["timestamp"]


@pytest.mark.asyncio
async def test_simple_test_relays_text_from_plain_get(gas, make_app, client_for):
    gas.respond(200, text="GAS is alive")
    async with client_for(make_app()) as client:
        resp = await client.get("/api/simple-test")
    assert resp.status_code == 200
    assert resp.text == "GAS is alive"
    assert resp.headers["content-type"].startswith("text/plain")
    sent = gas.requests[-1]
    assert sent.method == "GET"
    assert sent.url.params["test"] == "true"


# ---------------------------------------------------------------------------
# Unknown routes and the catch-all handler
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
@pytest.mark.parametrize(
    "method, path",
    [
        ("GET", "/api/nonexistent"),
        ("POST", "/api/does/not/exist"),
        ("GET", "/"),
        ("POST", "/api/activities"),
        ("PATCH", "/api/complaints/C-1"),
    ],
)
async def test_unknown_route_gets_fixed_body(gas, make_app, client_for, method, path):
    async with client_for(make_app()) as client:
        resp = await client.request(method, path)
    assert resp.status_code == 404
    assert resp.json() == {"error": "Route not found in proxy server"}
    assert gas.requests == []


@pytest.mark.asyncio
async def test_unexpected_exception_becomes_internal_proxy_error(gas, make_app, client_for):
    def _explode(_req: httpx.Request) -> httpx.Response:
        raise RuntimeError("stub exploded")

    gas.use(_explode)
    async with client_for(make_app()) as client:
        resp = await client.get(
            "/api/users",
            headers={"Origin": "http://localhost:5173", "X-Request-ID": "r1"},
        )
    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal proxy error", "details": "stub exploded"}
    assert resp.headers["access-control-allow-origin"] == "http://localhost:5173"
    assert resp.headers["x-request-id"] == "r1"
    assert metrics_snapshot()["errors_last_hour"] == 1


# ---------------------------------------------------------------------------
# Middleware
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_cors_preflight_allows_dev_origin(make_app, client_for):
    async with client_for(make_app()) as client:
        resp = await client.options(
            "/api/complaints",
            headers={
                "Origin": "http://localhost:5173",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Content-Type, x-api-key",
            },
        )
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "http://localhost:5173"
    assert resp.headers["access-control-allow-credentials"] == "true"


@pytest.mark.asyncio
async def test_cors_rejects_unlisted_origin(make_app, client_for):
    async with client_for(make_app()) as client:
        resp = await client.options(
            "/api/complaints",
            headers={
                "Origin": "https://evil.example",
                "Access-Control-Request-Method": "GET",
            },
        )
    assert resp.status_code == 400
    assert "access-control-allow-origin" not in resp.headers


@pytest.mark.asyncio
async def test_wildcard_origin_is_mirrored_on_preflight(make_app, client_for):
    async with client_for(make_app(cors_origins=("*",))) as client:
        resp = await client.options(
            "/api/users",
            headers={
                "Origin": "https://dashboard.eeu.example",
                "Access-Control-Request-Method": "GET",
            },
        )
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "https://dashboard.eeu.example"


@pytest.mark.asyncio
async def test_request_id_is_echoed_or_generated(make_app, client_for):
    async with client_for(make_app()) as client:
        given = await client.get("/health", headers={"X-Request-ID": "req-42"})
        generated = await client.get("/health")
    assert given.headers["x-request-id"] == "req-42"
    assert generated.headers["x-request-id"]


@pytest.mark.asyncio
async def test_server_errors_are_counted(gas, make_app, client_for):
    gas.respond(200, text="not json")
    async with client_for(make_app()) as client:
        await client.get("/api/users")
        await client.get("/api/users")
    assert metrics_snapshot()["errors_last_hour"] == 2


@pytest.mark.asyncio
async def test_large_bodies_are_gzipped(gas, make_app, client_for):
    rows = [{"id": f"C-{i}", "title": "Transformer fault " * 4} for i in range(50)]
    gas.respond(200, json_body={"success": True, "data": rows})
    async with client_for(make_app()) as client:
        resp = await client.get("/api/complaints", headers={"Accept-Encoding": "gzip"})
    assert resp.headers.get("content-encoding") == "gzip"
    assert resp.json()["data"] == rows


@pytest.mark.asyncio
async def test_attachment_downloads_are_not_gzipped(gas, make_app, client_for):
    payload = bytes(range(256)) * 16
    gas.respond(200, content=payload, headers={"Content-Type": "image/jpeg"})
    async with client_for(make_app()) as client:
        resp = await client.get(
            "/api/attachments/att-1/download", headers={"Accept-Encoding": "gzip"}
        )
    assert "content-encoding" not in resp.headers
    assert resp.content == payload


@pytest.mark.asyncio
async def test_connection_forwards_query_string(gas, make_app, client_for):
    async with client_for(make_app()) as client:
        await client.get("/api/test-connection", params={"source": "diagnostics"})
    assert gas.last_envelope["query"] == {"source": "diagnostics"}
