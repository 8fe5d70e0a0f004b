"""
Thin async HTTP layer shared by every network operation.

Applies a fixed timeout and an identifying User-Agent to each request and
turns every transport or status failure into a NetworkError.
"""

import asyncio
import json
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

import aiohttp

from soundcloud_dl.exceptions import NetworkError

log = logging.getLogger(__name__)


class HttpClient:
    """A GET-only wrapper around a lazily created aiohttp session."""

    def __init__(self, user_agent: str, timeout: float = 30.0):
        self.user_agent = user_agent
        self.timeout = timeout
        self._session: Optional[aiohttp.ClientSession] = None

    async def _initialize_session(self) -> aiohttp.ClientSession:
        """Ensures an active aiohttp session is available."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers={"User-Agent": self.user_agent},
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            )
        return self._session

    async def close(self) -> None:
        """Gracefully closes the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> "HttpClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """Performs a GET and returns the decoded JSON body."""
        session = await self._initialize_session()
        try:
            async with session.get(url, params=params) as response:
                await self._raise_for_status(response)
                return await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise NetworkError(
                f"GET {_strip_query(url)} failed: {_describe(e)}"
            ) from e
        except ValueError as e:
            raise NetworkError(
                f"GET {_strip_query(url)} returned invalid JSON: {e}"
            ) from e

    @asynccontextmanager
    async def stream(
        self, url: str, params: Optional[Dict[str, Any]] = None
    ) -> AsyncIterator[aiohttp.ClientResponse]:
        """
        Performs a GET and yields the response unread, for chunked copying.

        The total-time cap is replaced by per-connect and per-read limits so
        that long audio transfers are not cut off.
        """
        session = await self._initialize_session()
        timeout = aiohttp.ClientTimeout(
            total=None, sock_connect=self.timeout, sock_read=self.timeout
        )
        try:
            async with session.get(
                url, params=params, timeout=timeout, allow_redirects=True
            ) as response:
                await self._raise_for_status(response)
                yield response
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise NetworkError(
                f"GET {_strip_query(url)} failed: {_describe(e)}"
            ) from e

    @staticmethod
    async def _raise_for_status(response: aiohttp.ClientResponse) -> None:
        if response.status < 400:
            return

        text = await response.text()
        try:
            body: Any = json.loads(text) if text else None
        except ValueError:
            body = text

        log.debug(f"HTTP {response.status} from {response.url.with_query(None)}")
        raise NetworkError(
            f"GET {response.url.with_query(None)} returned HTTP {response.status}"
            f" {response.reason or ''}".rstrip(),
            status=response.status,
            body=body,
        )


def _strip_query(url: str) -> str:
    # Query strings carry the client_id; keep it out of messages and logs.
    return url.split("?", 1)[0]


def _describe(error: BaseException) -> str:
    if isinstance(error, asyncio.TimeoutError):
        return "request timed out"
    return str(error) or type(error).__name__
