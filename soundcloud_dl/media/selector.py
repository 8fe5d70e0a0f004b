"""
Chooses the artwork and audio sources for a track.
"""

import logging
from typing import Optional

from soundcloud_dl.api.client import SoundCloudAPIClient
from soundcloud_dl.models.catalog import Track, Transcoding

log = logging.getLogger(__name__)

# The CDN serves the same image at several sizes; "-large" is 100x100.
_ARTWORK_SIZE_REWRITES = (
    ("-large.jpg", "-t500x500.jpg"),
    ("-large.png", "-t500x500.png"),
)


def best_artwork_url(track: Track) -> Optional[str]:
    """
    Returns the highest-resolution artwork URL for a track, falling back to
    the owner's avatar, or None when neither exists.
    """
    url = track.artwork_url or track.user.avatar_url
    if not url:
        return None
    for small, large in _ARTWORK_SIZE_REWRITES:
        url = url.replace(small, large)
    return url


def artwork_extension(url: str) -> str:
    return "png" if url.endswith(".png") else "jpg"


def with_client_id(url: str, client_id: str) -> str:
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}client_id={client_id}"


def find_progressive_mp3(track: Track) -> Optional[Transcoding]:
    """Returns the first progressive MPEG transcoding, if the track has one."""
    for transcoding in track.media.transcodings:
        if transcoding.is_progressive_mp3 and transcoding.url:
            return transcoding
    return None


class MediaSelector:
    """Resolves the playable audio URL for a track."""

    def __init__(self, api_client: SoundCloudAPIClient):
        self.api_client = api_client

    async def audio_url(self, track: Track) -> Optional[str]:
        """
        Picks the best audio source.

        An explicit download link wins and the transcodings are never consulted.
        Otherwise the first progressive MP3 transcoding is exchanged for its
        signed URL with one extra API call. Returns None when neither path
        yields a URL.

        Raises:
            NetworkError: If the transcoding lookup fails.
        """
        if track.downloadable and track.download_url:
            return with_client_id(track.download_url, self.api_client.client_id)

        transcoding = find_progressive_mp3(track)
        if transcoding is None:
            return None

        log.debug(f"Resolving progressive stream for track {track.id}")
        return await self.api_client.fetch_transcoding_url(transcoding)
