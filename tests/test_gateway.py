"""
Tests for the HTTP gateway.

The gateway is exercised against a real local aiohttp server so the
transport, status and decoding paths run exactly as in production.
"""
import asyncio
import time

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer, unused_port

from meta_description.providers.gateway import HttpGateway, build_url, default_headers


async def echo(request: web.Request) -> web.Response:
    body = await request.json() if request.can_read_body else None
    return web.json_response(
        {
            "method": request.method,
            "query": dict(request.query),
            "authorization": request.headers.get("Authorization"),
            "body": body,
        }
    )


async def unauthorized(request: web.Request) -> web.Response:
    return web.json_response({"error": {"message": "Invalid API key"}}, status=401)


async def not_json(request: web.Request) -> web.Response:
    return web.Response(text="<html>maintenance</html>", content_type="text/html")


async def slow(request: web.Request) -> web.Response:
    await asyncio.sleep(1.0)
    return web.json_response({"late": True})


@pytest_asyncio.fixture
async def server():
    app = web.Application()
    app.router.add_route("*", "/echo", echo)
    app.router.add_get("/unauthorized", unauthorized)
    app.router.add_get("/not-json", not_json)
    app.router.add_get("/slow", slow)

    test_server = TestServer(app)
    await test_server.start_server()
    yield test_server
    await test_server.close()


class TestBuildUrl:
    """Tests for URL joining."""

    def test_joins_base_and_endpoint(self):
        assert build_url("https://api.openai.com/v1/", "models") == "https://api.openai.com/v1/models"

    def test_tolerates_missing_and_duplicate_slashes(self):
        assert build_url("https://x.test/v1", "/chat") == "https://x.test/v1/chat"

    def test_absolute_endpoint_wins(self):
        url = "https://api.cohere.ai/v1/models?endpoint=chat"
        assert build_url("https://api.cohere.ai/v2/", url) == url


class TestDefaultHeaders:

    def test_bearer_and_json(self):
        headers = default_headers("abc")
        assert headers == {"Content-Type": "application/json", "Authorization": "Bearer abc"}


class TestHttpGateway:
    """Tests for HttpGateway.request."""

    def test_rejects_non_positive_timeout(self):
        with pytest.raises(ValueError):
            HttpGateway(default_timeout=0)

    @pytest.mark.asyncio
    async def test_get_returns_decoded_json(self, server):
        result = await HttpGateway().request(
            "GET",
            str(server.make_url("/echo")),
            headers=default_headers("secret"),
            params={"key": "k1"},
        )

        assert result.ok
        assert result.value["method"] == "GET"
        assert result.value["query"] == {"key": "k1"}
        assert result.value["authorization"] == "Bearer secret"
        assert result.value["body"] is None

    @pytest.mark.asyncio
    async def test_post_sends_json_body(self, server):
        result = await HttpGateway().request(
            "post",
            str(server.make_url("/echo")),
            headers={"Content-Type": "application/json"},
            body={"model": "m", "messages": [{"role": "user", "content": "hi"}]},
        )

        assert result.ok
        assert result.value["method"] == "POST"
        assert result.value["body"]["messages"][0]["content"] == "hi"

    @pytest.mark.asyncio
    async def test_non_2xx_is_http_error_with_status_and_body(self, server):
        result = await HttpGateway().request("GET", str(server.make_url("/unauthorized")))

        assert not result.ok
        assert result.error.code == "http_error"
        assert result.error.status == 401
        assert "Invalid API key" in result.error.response_body

    @pytest.mark.asyncio
    async def test_invalid_json_is_parse_error(self, server):
        result = await HttpGateway().request("GET", str(server.make_url("/not-json")))

        assert not result.ok
        assert result.error.code == "parse_error"
        assert result.error.message == "Failed to decode API response."
        assert result.error.status is None

    @pytest.mark.asyncio
    async def test_connection_refused_is_http_error(self):
        url = f"http://127.0.0.1:{unused_port()}/nothing"
        result = await HttpGateway().request("GET", url, timeout=5)

        assert not result.ok
        assert result.error.code == "http_error"
        assert result.error.status is None
        assert result.error.message

    @pytest.mark.asyncio
    async def test_timeout_is_bounded(self, server):
        started = time.monotonic()
        result = await HttpGateway().request("GET", str(server.make_url("/slow")), timeout=0.2)
        elapsed = time.monotonic() - started

        assert not result.ok
        assert result.error.code == "http_error"
        assert result.error.message == "Request timed out after 0.2 seconds."
        assert elapsed < 0.9

    @pytest.mark.asyncio
    async def test_gateway_is_reusable_after_failure(self, server):
        gateway = HttpGateway()

        failed = await gateway.request("GET", str(server.make_url("/unauthorized")))
        succeeded = await gateway.request("GET", str(server.make_url("/echo")))

        assert not failed.ok
        assert succeeded.ok
