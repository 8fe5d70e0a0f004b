"""
Async client for the handful of SoundCloud api-v2 endpoints the downloader needs.
"""

import logging
from typing import Any, Dict, List, Optional

from soundcloud_dl.exceptions import ResolutionError
from soundcloud_dl.models.catalog import Track, Transcoding, User

from .http import HttpClient
from .rate_limiter import FixedDelayThrottle

log = logging.getLogger(__name__)


class SoundCloudAPIClient:
    """
    Resolves profiles, lists a user's tracks and looks up transcoding URLs.

    Every request carries the API credential as the ``client_id`` query parameter.
    """

    def __init__(
        self,
        http: HttpClient,
        client_id: str,
        base_url: str = "https://api-v2.soundcloud.com",
        page_size: int = 200,
        page_delay: float = 0.3,
        throttle: Optional[FixedDelayThrottle] = None,
    ):
        self.http = http
        self.client_id = client_id
        self.base_url = base_url.rstrip("/")
        self.page_size = page_size
        self.page_delay = page_delay
        self.throttle = throttle or FixedDelayThrottle()

    async def api_call(self, endpoint: str, **params: Any) -> Any:
        """Makes an authenticated GET and returns the decoded JSON."""
        params["client_id"] = self.client_id
        return await self.http.get_json(endpoint, params=params)

    async def resolve_user(self, profile_url: str) -> User:
        """
        Maps a public profile URL to its user record.

        Raises:
            ResolutionError: If the response does not describe a user.
            NetworkError: If the request itself fails.
        """
        data = await self.api_call(f"{self.base_url}/resolve", url=profile_url)
        if not isinstance(data, dict) or data.get("id") is None:
            raise ResolutionError(f"Could not resolve user from '{profile_url}'.")
        if data.get("kind") not in (None, "user"):
            raise ResolutionError(
                f"'{profile_url}' resolves to a {data['kind']}, not a user profile."
            )
        return User.model_validate(data)

    async def fetch_tracks_page(
        self, user_id: int, offset: int, limit: int
    ) -> Optional[List[Dict[str, Any]]]:
        """
        Fetches one page of a user's tracks.

        Returns None when the response is not a sequence. The live API wraps
        pages in a ``collection`` envelope, which is unwrapped here.
        """
        data = await self.api_call(
            f"{self.base_url}/users/{user_id}/tracks", limit=limit, offset=offset
        )
        if isinstance(data, dict) and isinstance(data.get("collection"), list):
            data = data["collection"]
        if not isinstance(data, list):
            return None
        return data

    async def list_tracks(self, user_id: int) -> List[Track]:
        """
        Collects the user's whole catalog, in API order.

        Stops on an empty page, a non-sequence response, or a short page.
        """
        tracks: List[Track] = []
        offset = 0

        while True:
            page = await self.fetch_tracks_page(user_id, offset, self.page_size)
            if not page:
                break

            tracks.extend(Track.model_validate(item) for item in page)
            offset += len(page)
            log.debug(f"Fetched {len(page)} tracks (total {len(tracks)})")

            if len(page) < self.page_size:
                break
            await self.throttle.wait(self.page_delay)

        return tracks

    async def fetch_transcoding_url(self, transcoding: Transcoding) -> Optional[str]:
        """Exchanges a transcoding metadata URL for the signed media URL."""
        if not transcoding.url:
            return None
        data = await self.api_call(transcoding.url)
        if isinstance(data, dict) and data.get("url"):
            return data["url"]
        return None
