"""Unit tests for the REST API GET helper"""

import asyncio
import json

from aiohttp import web
from aiohttp import test_utils

from web2glass.apps.fetch import body_format, proxyUrl_build, text_fetch


class TestProxyUrl:
    """Proxy routing"""

    def test_direct(self):
        assert proxyUrl_build("http://host/a", None) == "http://host/a"

    def test_encoded_target(self):
        built = proxyUrl_build("http://host/a?b=1&c=2", "http://localhost:5173/__proxy")
        assert built == "http://localhost:5173/__proxy?url=http%3A%2F%2Fhost%2Fa%3Fb%3D1%26c%3D2"


class TestBodyFormat:
    """JSON pretty-printing"""

    def test_json_pretty(self):
        assert body_format('{"a":1}', "application/json; charset=utf-8") == '{\n  "a": 1\n}'

    def test_invalid_json_verbatim(self):
        assert body_format("{oops", "application/json") == "{oops"

    def test_text_verbatim(self):
        assert body_format('{"a":1}', "text/plain") == '{"a":1}'


def server_app_create() -> web.Application:
    async def clock(request: web.Request) -> web.Response:
        return web.json_response({"time": "12:00"})

    async def missing(request: web.Request) -> web.Response:
        return web.Response(status=404, text="nope")

    async def proxy(request: web.Request) -> web.Response:
        return web.Response(text=f"proxied {request.query['url']}")

    app = web.Application()
    app.router.add_get("/clock", clock)
    app.router.add_get("/missing", missing)
    app.router.add_get("/proxy", proxy)
    return app


class TestTextFetch:
    """GET against a local aiohttp server"""

    def test_json_response(self):
        async def scenario():
            async with test_utils.TestServer(server_app_create()) as server:
                return await text_fetch(str(server.make_url("/clock")))

        result = asyncio.run(scenario())

        assert result.status_line == "200 OK"
        assert json.loads(result.body) == {"time": "12:00"}
        assert "\n" in result.body

    def test_error_status_is_a_result(self):
        async def scenario():
            async with test_utils.TestServer(server_app_create()) as server:
                return await text_fetch(str(server.make_url("/missing")))

        result = asyncio.run(scenario())

        assert result.status_line == "404 Not Found"
        assert result.body == "nope"

    def test_through_proxy(self):
        async def scenario():
            async with test_utils.TestServer(server_app_create()) as server:
                return await text_fetch(
                    "http://device.local/rest/rgb/toggle",
                    proxy_url=str(server.make_url("/proxy")),
                )

        result = asyncio.run(scenario())

        assert result.body == "proxied http://device.local/rest/rgb/toggle"
