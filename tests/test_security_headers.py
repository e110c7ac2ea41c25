import pytest
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse
from httpx import ASGITransport, AsyncClient

from learn_python.observability.security import SECURITY_HEADERS, SecurityHeadersMiddleware


def _assert_security_headers(resp) -> None:
    for name, value in SECURITY_HEADERS.items():
        assert resp.headers.get_list(name) == [value], name


@pytest.mark.parametrize(
    "method,path,kwargs",
    [
        ("GET", "/", {}),
        ("GET", "/ping", {}),
        ("GET", "/healthz", {}),
        ("GET", "/info", {}),
        ("GET", "/version", {}),
        ("GET", "/metrics", {}),
        ("POST", "/echo", {"json": {"message": "test"}}),
        ("POST", "/echo", {"content": b"not-json"}),
        ("GET", "/missing", {}),
        ("DELETE", "/ping", {}),
    ],
)
async def test_every_response_carries_security_headers(api_client, method, path, kwargs) -> None:
    resp = await api_client.request(method, path, **kwargs)
    _assert_security_headers(resp)


async def test_security_headers_present_on_internal_errors(app, api_client) -> None:
    async def boom() -> None:
        raise ValueError("unexpected")

    app.add_api_route("/boom", boom, methods=["GET"])
    resp = await api_client.get("/boom")
    assert resp.status_code == 500
    _assert_security_headers(resp)


async def test_middleware_is_idempotent_and_leaves_body_alone() -> None:
    inner = FastAPI()

    @inner.get("/")
    async def root() -> PlainTextResponse:
        return PlainTextResponse("body", headers={"X-Frame-Options": "SAMEORIGIN"})

    wrapped = SecurityHeadersMiddleware(SecurityHeadersMiddleware(inner))
    async with AsyncClient(transport=ASGITransport(app=wrapped), base_url="http://test") as client:
        resp = await client.get("/")

    assert resp.status_code == 200
    assert resp.text == "body"
    # Handler-set value is overwritten, never duplicated.
    _assert_security_headers(resp)


async def test_cors_preflight_is_answered_with_security_headers(api_client) -> None:
    resp = await api_client.options(
        "/echo",
        headers={
            "Origin": "https://example.com",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "content-type",
        },
    )
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "*"
    assert "POST" in resp.headers["access-control-allow-methods"]
    assert "content-type" in resp.headers["access-control-allow-headers"].lower()
    _assert_security_headers(resp)


async def test_cross_origin_request_gets_allow_origin(api_client) -> None:
    resp = await api_client.post("/echo", json={"message": "test"}, headers={"Origin": "https://example.com"})
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "*"
    _assert_security_headers(resp)
