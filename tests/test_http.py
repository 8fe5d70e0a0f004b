import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from soundcloud_dl.api.http import HttpClient
from soundcloud_dl.exceptions import NetworkError


@pytest.fixture
def app() -> web.Application:
    async def echo(request: web.Request) -> web.Response:
        return web.json_response(
            {"ua": request.headers.get("User-Agent"), "q": dict(request.query)}
        )

    async def missing(request: web.Request) -> web.Response:
        return web.json_response({"errors": [{"error_message": "404 - Not Found"}]}, status=404)

    async def plain_error(request: web.Request) -> web.Response:
        return web.Response(status=502, text="bad gateway")

    async def not_json(request: web.Request) -> web.Response:
        return web.Response(text="<html>")

    async def payload(request: web.Request) -> web.Response:
        return web.Response(body=b"x" * 1000)

    application = web.Application()
    application.router.add_get("/echo", echo)
    application.router.add_get("/missing", missing)
    application.router.add_get("/plain-error", plain_error)
    application.router.add_get("/not-json", not_json)
    application.router.add_get("/payload", payload)
    return application


@pytest.mark.asyncio
async def test_get_json_sends_user_agent_and_params(app: web.Application) -> None:
    async with TestServer(app) as server:
        async with HttpClient("soundcloud-dl/1.0") as http:
            data = await http.get_json(str(server.make_url("/echo")), {"a": "1"})

    assert data == {"ua": "soundcloud-dl/1.0", "q": {"a": "1"}}


@pytest.mark.asyncio
async def test_error_status_carries_structured_body(app: web.Application) -> None:
    async with TestServer(app) as server:
        async with HttpClient("ua") as http:
            with pytest.raises(NetworkError) as exc_info:
                await http.get_json(
                    str(server.make_url("/missing")), {"client_id": "secret"}
                )

    error = exc_info.value
    assert error.status == 404
    assert error.body == {"errors": [{"error_message": "404 - Not Found"}]}
    assert "secret" not in str(error)


@pytest.mark.asyncio
async def test_error_status_with_text_body(app: web.Application) -> None:
    async with TestServer(app) as server:
        async with HttpClient("ua") as http:
            with pytest.raises(NetworkError) as exc_info:
                await http.get_json(str(server.make_url("/plain-error")))

    assert exc_info.value.status == 502
    assert exc_info.value.body == "bad gateway"


@pytest.mark.asyncio
async def test_invalid_json_is_a_network_error(app: web.Application) -> None:
    async with TestServer(app) as server:
        async with HttpClient("ua") as http:
            with pytest.raises(NetworkError, match="invalid JSON"):
                await http.get_json(str(server.make_url("/not-json")))


@pytest.mark.asyncio
async def test_connection_failure_is_a_network_error(
    unused_tcp_port: int,
) -> None:
    async with HttpClient("ua", timeout=2) as http:
        with pytest.raises(NetworkError) as exc_info:
            await http.get_json(f"http://127.0.0.1:{unused_tcp_port}/x")

    assert exc_info.value.status is None


@pytest.mark.asyncio
async def test_stream_yields_unread_response(app: web.Application) -> None:
    async with TestServer(app) as server:
        async with HttpClient("ua") as http:
            async with http.stream(str(server.make_url("/payload"))) as response:
                body = await response.read()

    assert body == b"x" * 1000


@pytest.mark.asyncio
async def test_stream_raises_on_error_status(app: web.Application) -> None:
    async with TestServer(app) as server:
        async with HttpClient("ua") as http:
            with pytest.raises(NetworkError) as exc_info:
                async with http.stream(str(server.make_url("/plain-error"))):
                    pass

    assert exc_info.value.status == 502
