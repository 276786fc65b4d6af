import base64
from typing import AsyncIterator

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from nmsdash.core.adapters.aiohttp_rest_client import AiohttpRestClient, encode_params
from nmsdash.core.domain.models import RequestFailedError
from nmsdash.core.ports.outbound.rest_client import RestClientConfig


async def _echo(request: web.Request) -> web.Response:
    return web.json_response(
        {
            "path": request.path,
            "query": dict(request.query),
            "authorization": request.headers.get("Authorization"),
            "accept": request.headers.get("Accept"),
        }
    )


async def _alarm(request: web.Request) -> web.Response:
    return web.Response(status=204)


async def _broken(request: web.Request) -> web.Response:
    return web.Response(status=500, text="boom")


async def _html(request: web.Request) -> web.Response:
    return web.Response(text="<html>login</html>", content_type="text/html")


@pytest_asyncio.fixture
async def server() -> AsyncIterator[TestServer]:
    app = web.Application()
    app.router.add_get("/opennms/api/v2/nodes", _echo)
    app.router.add_put("/opennms/api/v2/alarms/{alarm_id}", _alarm)
    app.router.add_get("/opennms/api/v2/events", _broken)
    app.router.add_get("/opennms/login", _html)

    test_server = TestServer(app)
    await test_server.start_server()
    yield test_server
    await test_server.close()


def _client(server: TestServer, **config: object) -> AiohttpRestClient:
    base_url = str(server.make_url("/opennms"))
    return AiohttpRestClient(RestClientConfig(base_url=base_url, **config))  # type: ignore[arg-type]


def test_encode_params_formats_booleans_and_drops_none() -> None:
    assert encode_params({"ack": True, "clear": False, "limit": 10, "_s": None}) == {
        "ack": "true",
        "clear": "false",
        "limit": 10,
    }


@pytest.mark.asyncio
async def test_get_resolves_relative_path_and_sends_params(server: TestServer) -> None:
    async with _client(server) as client:
        response = await client.get("api/v2/nodes", params={"limit": 10, "_s": "label==a*"})

    body = response.json()
    assert response.status_code == 200
    assert body["path"] == "/opennms/api/v2/nodes"
    assert body["query"] == {"limit": "10", "_s": "label==a*"}
    assert body["accept"] == "application/json"


@pytest.mark.asyncio
async def test_basic_auth_header_is_added(server: TestServer) -> None:
    client = _client(
        server,
        auth_type="basic",
        auth_credentials={"username": "admin", "password": "secret"},
    )
    try:
        response = await client.get("api/v2/nodes")
    finally:
        await client.close()

    expected = base64.b64encode(b"admin:secret").decode()
    assert response.json()["authorization"] == f"Basic {expected}"


@pytest.mark.asyncio
async def test_put_with_no_content_returns_empty_body(server: TestServer) -> None:
    async with _client(server) as client:
        response = await client.put("api/v2/alarms/12", params={"ack": True})

    assert response.status_code == 204
    assert response.is_empty
    assert response.json() is None


@pytest.mark.asyncio
async def test_error_status_raises_request_failed(server: TestServer) -> None:
    async with _client(server) as client:
        with pytest.raises(RequestFailedError) as exc_info:
            await client.get("api/v2/events")
        metrics = await client.get_metrics()

    assert exc_info.value.status_code == 500
    assert exc_info.value.url.endswith("/opennms/api/v2/events")
    assert metrics["failed_requests"] == 1
    assert metrics["successful_requests"] == 0


@pytest.mark.asyncio
async def test_non_json_body_is_returned_as_text(server: TestServer) -> None:
    async with _client(server) as client:
        response = await client.get("login")

    assert response.body == "<html>login</html>"


@pytest.mark.asyncio
async def test_unreachable_backend_raises_request_failed() -> None:
    client = AiohttpRestClient(RestClientConfig(base_url="http://127.0.0.1:1", timeout=2.0))
    try:
        with pytest.raises(RequestFailedError) as exc_info:
            await client.get("api/v2/nodes")
    finally:
        await client.close()

    assert exc_info.value.status_code is None


@pytest.mark.asyncio
async def test_session_is_opened_lazily_and_closed(server: TestServer) -> None:
    client = _client(server)

    assert await client.is_ready() is False
    await client.get("api/v2/nodes")
    assert await client.is_ready() is True

    await client.close()
    assert await client.is_ready() is False


def test_absolute_urls_are_not_rebased() -> None:
    client = AiohttpRestClient(RestClientConfig(base_url="http://nms:8980/opennms/"))

    assert client.build_url("api/v2/nodes") == "http://nms:8980/opennms/api/v2/nodes"
    assert client.build_url("https://other/x") == "https://other/x"


def test_unsupported_auth_type_is_rejected() -> None:
    with pytest.raises(ValueError):
        AiohttpRestClient(RestClientConfig(auth_type="digest"))
