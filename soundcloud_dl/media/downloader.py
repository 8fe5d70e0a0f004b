"""
Handles the low-level streaming of remote files to disk.
"""

import asyncio
import logging
import os
from pathlib import Path

import aiofiles
import aiohttp

from soundcloud_dl.api.http import HttpClient
from soundcloud_dl.exceptions import TransferError
from soundcloud_dl.utils.path import create_dir

log = logging.getLogger(__name__)


class Downloader:
    """Streams a URL to a file in fixed-size chunks."""

    CHUNK_SIZE = 131072  # 128 KB

    def __init__(self, http: HttpClient, chunk_size: int = CHUNK_SIZE):
        self.http = http
        self.chunk_size = chunk_size

    async def download_file(self, url: str, destination_path: Path) -> int:
        """
        Downloads ``url`` to ``destination_path`` and returns the bytes written.

        The body is written to a ``.part`` sibling first and renamed into place
        once complete; a failed transfer removes the partial file. The write
        happens unconditionally, callers decide whether the file is wanted.

        Raises:
            NetworkError: If the request fails or returns a non-success status.
            TransferError: If reading the stream or writing the file fails.
        """
        temp_path = destination_path.with_name(destination_path.name + ".part")
        bytes_downloaded = 0

        async with self.http.stream(url) as response:
            try:
                await asyncio.to_thread(create_dir, destination_path.parent)
                async with aiofiles.open(temp_path, "wb") as f:
                    async for chunk in response.content.iter_chunked(self.chunk_size):
                        await f.write(chunk)
                        bytes_downloaded += len(chunk)
                await asyncio.to_thread(os.replace, temp_path, destination_path)
            except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as e:
                await asyncio.to_thread(_remove_quietly, temp_path)
                raise TransferError(
                    f"Transfer to '{destination_path.name}' failed after "
                    f"{bytes_downloaded} bytes: {str(e) or type(e).__name__}"
                ) from e

        log.debug(f"Wrote {bytes_downloaded} bytes to {destination_path}")
        return bytes_downloaded


def _remove_quietly(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        log.debug(f"Could not remove partial file '{path}': {e}")
