"""
Shared fixtures: a local fake of the SoundCloud API and CDN served by aiohttp.
"""

import json
from pathlib import Path
from typing import Any

import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from soundcloud_dl.models.config import DownloadConfig

CLIENT_ID = "test-client-id"
PROFILE_URL = "https://soundcloud.com/tester"


class FakeSoundCloud:
    """
    Serves /resolve, /users/{id}/tracks, transcoding metadata and media bytes.

    Track dicts may contain ``{base}`` which is replaced by the server origin.
    Every request is recorded in ``hits``.
    """

    def __init__(self) -> None:
        self.user: dict[str, Any] = {"id": 7, "kind": "user", "username": "tester"}
        self.tracks: list[dict[str, Any]] = []
        self.hits: list[str] = []
        self.failing_media: set[str] = set()
        self.streams_without_url: set[str] = set()
        self.base_url = ""

    def make_app(self) -> web.Application:
        app = web.Application()
        app.router.add_get("/resolve", self._resolve)
        app.router.add_get("/users/{user_id}/tracks", self._tracks)
        app.router.add_get("/media/{track_id}/stream", self._stream)
        app.router.add_get("/cdn/{name}", self._media)
        app.router.add_get("/art/{name}", self._media)
        return app

    def hits_for(self, prefix: str) -> list[str]:
        return [hit for hit in self.hits if hit.startswith(prefix)]

    def _authorized(self, request: web.Request) -> bool:
        return request.query.get("client_id") == CLIENT_ID

    def _render(self, track: dict[str, Any], base: str) -> dict[str, Any]:
        return json.loads(json.dumps(track).replace("{base}", base))

    async def _resolve(self, request: web.Request) -> web.Response:
        self.hits.append("resolve")
        if not self._authorized(request):
            return web.json_response(
                {"errors": [{"error_message": "401 - Unauthorized"}]}, status=401
            )
        return web.json_response(self.user)

    async def _tracks(self, request: web.Request) -> web.Response:
        offset = int(request.query["offset"])
        limit = int(request.query["limit"])
        self.hits.append(f"tracks:{offset}")
        base = str(request.url.origin())
        page = [self._render(t, base) for t in self.tracks[offset : offset + limit]]
        return web.json_response(page)

    async def _stream(self, request: web.Request) -> web.Response:
        track_id = request.match_info["track_id"]
        self.hits.append(f"stream:{track_id}")
        if not self._authorized(request):
            return web.json_response({"error": "unauthorized"}, status=401)
        if track_id in self.streams_without_url:
            return web.json_response({})
        base = str(request.url.origin())
        return web.json_response({"url": f"{base}/cdn/{track_id}.mp3"})

    async def _media(self, request: web.Request) -> web.Response:
        name = request.match_info["name"]
        self.hits.append(f"{request.path.split('/')[1]}:{name}")
        if name in self.failing_media:
            return web.Response(status=500, text="boom")
        return web.Response(body=f"bytes of {name}".encode())


@pytest_asyncio.fixture
async def soundcloud():
    fake = FakeSoundCloud()
    server = TestServer(fake.make_app())
    await server.start_server()
    fake.base_url = str(server.make_url("/")).rstrip("/")
    try:
        yield fake
    finally:
        await server.close()


def make_config(out_dir: Path, api_base_url: str, **overrides: Any) -> DownloadConfig:
    settings: dict[str, Any] = {
        "client_id": CLIENT_ID,
        "profile_url": PROFILE_URL,
        "out_dir": out_dir,
        "api_base_url": api_base_url,
        "page_delay": 0,
        "artwork_delay": 0,
        "audio_delay": 0,
    }
    settings.update(overrides)
    return DownloadConfig(**settings)


def progressive_track(track_id: int, title: str, **extra: Any) -> dict[str, Any]:
    track = {
        "id": track_id,
        "kind": "track",
        "title": title,
        "artwork_url": None,
        "downloadable": False,
        "download_url": None,
        "user": {"id": 7, "username": "tester", "avatar_url": None},
        "media": {
            "transcodings": [
                {
                    "url": "{base}/media/%d/stream" % track_id,
                    "format": {"protocol": "hls", "mime_type": "audio/mpeg"},
                },
                {
                    "url": "{base}/media/%d/stream" % track_id,
                    "format": {"protocol": "progressive", "mime_type": "audio/mpeg"},
                },
            ]
        },
    }
    track.update(extra)
    return track
