"""
The main orchestrator: resolves the profile, lists its tracks and hands each
track to the TrackProcessor in turn.
"""

import logging
import time

from rich.markup import escape

from soundcloud_dl.api.client import SoundCloudAPIClient
from soundcloud_dl.api.http import HttpClient
from soundcloud_dl.api.rate_limiter import FixedDelayThrottle
from soundcloud_dl.media import Downloader, MediaSelector
from soundcloud_dl.models.catalog import Track, User
from soundcloud_dl.models.config import DownloadConfig
from soundcloud_dl.models.stats import DownloadStats

from .track_processor import TrackProcessor

log = logging.getLogger(__name__)


class DownloadManager:
    """
    Orchestrates a whole download session.

    Resolution and listing failures propagate to the caller; per-track
    failures are absorbed by the TrackProcessor.
    """

    def __init__(
        self,
        config: DownloadConfig,
        http: HttpClient,
        throttle: FixedDelayThrottle | None = None,
    ):
        self.config = config
        self.throttle = throttle or FixedDelayThrottle()
        self.api_client = SoundCloudAPIClient(
            http,
            config.client_id,
            base_url=config.api_base_url,
            page_size=config.page_size,
            page_delay=config.page_delay,
            throttle=self.throttle,
        )
        self.stats = DownloadStats(dry_run=config.dry_run)
        self.track_processor = TrackProcessor(
            config,
            self.stats,
            Downloader(http),
            MediaSelector(self.api_client),
            self.throttle,
        )
        self.duration = 0.0

    async def resolve_user(self) -> User:
        log.info(f"Resolving user… [dim]{escape(self.config.profile_url)}[/dim]")
        user = await self.api_client.resolve_user(self.config.profile_url)
        log.info(f"User: [bold]{escape(user.username)}[/bold] (#{user.id})")
        return user

    async def list_tracks(self, user: User) -> list[Track]:
        log.info("Fetching tracks…")
        tracks = await self.api_client.list_tracks(user.id)
        log.info(f"Found [bold]{len(tracks)}[/bold] tracks")
        return tracks

    async def run(self) -> DownloadStats:
        """
        Runs the session to completion and returns its statistics.

        Raises:
            ResolutionError: If the profile does not resolve to a user.
            NetworkError: If resolution or track listing fails.
        """
        start_time = time.monotonic()
        try:
            user = await self.resolve_user()
            tracks = await self.list_tracks(user)
            self.stats.tracks_total = len(tracks)

            for index, track in enumerate(tracks, 1):
                log.debug(f"Track {index}/{len(tracks)}: {track.id}")
                await self.track_processor.process_track(track)
        finally:
            self.duration = time.monotonic() - start_time

        log.info(
            f"Done. Saved {self.stats.artwork_downloaded} artwork and "
            f"{self.stats.audio_downloaded} audio file(s) in "
            f"{escape(str(self.config.out_dir))}/"
        )
        return self.stats
