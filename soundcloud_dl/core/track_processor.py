"""
Handles the processing of a single track: its artwork, then its audio.
"""

import logging
from pathlib import Path

from rich.markup import escape

from soundcloud_dl.api.rate_limiter import FixedDelayThrottle
from soundcloud_dl.exceptions import NetworkError, TransferError
from soundcloud_dl.media import Downloader, MediaSelector
from soundcloud_dl.media.selector import artwork_extension, best_artwork_url
from soundcloud_dl.models.catalog import Track
from soundcloud_dl.models.config import DownloadConfig
from soundcloud_dl.models.stats import DownloadStats
from soundcloud_dl.utils.path import (
    artwork_path,
    audio_path,
    destination_exists,
    safe_name,
)

log = logging.getLogger(__name__)


class TrackProcessor:
    """
    Downloads the artwork and audio of one track, skipping files already on disk.

    Failures here are logged and counted; they never abort the session.
    """

    def __init__(
        self,
        config: DownloadConfig,
        stats: DownloadStats,
        downloader: Downloader,
        selector: MediaSelector,
        throttle: FixedDelayThrottle,
    ):
        self.config = config
        self.stats = stats
        self.downloader = downloader
        self.selector = selector
        self.throttle = throttle

    async def process_track(self, track: Track) -> None:
        name = safe_name(track, self.config.name_max_length)

        if not self.config.no_artwork:
            await self._process_artwork(track, name)
        await self._process_audio(track, name)

        self.stats.tracks_processed += 1

    async def _process_artwork(self, track: Track, name: str) -> None:
        url = best_artwork_url(track)
        if not url:
            log.debug(f"No artwork for {escape(name)}")
            return

        path = artwork_path(self.config.artwork_dir, name, artwork_extension(url))
        if destination_exists(path):
            self.stats.artwork_skipped_exists += 1
            return

        if self.config.dry_run:
            log.info(f"  [cyan]→ (Dry Run)[/] Artwork to [dim]{escape(str(path))}[/dim]")
            return

        try:
            log.info(f"Artwork ↓ {escape(name)}")
            await self._save(url, path)
            self.stats.artwork_downloaded += 1
        except (NetworkError, TransferError) as e:
            self.stats.artwork_failed += 1
            log.warning(f"[yellow]Artwork failed[/] {escape(name)}: {escape(str(e))}")
        await self.throttle.wait(self.config.artwork_delay)

    async def _process_audio(self, track: Track, name: str) -> None:
        path = audio_path(self.config.audio_dir, name)
        if destination_exists(path):
            self.stats.audio_skipped_exists += 1
            return

        try:
            url = await self.selector.audio_url(track)
        except NetworkError as e:
            self.stats.audio_failed += 1
            log.warning(
                f"[yellow]Audio lookup failed[/] {escape(name)}: {escape(str(e))}"
            )
            return

        if not url:
            self.stats.audio_unavailable += 1
            log.info(f"[dim]No downloadable/progressive audio for {escape(name)}[/dim]")
            return

        if self.config.dry_run:
            log.info(f"  [cyan]→ (Dry Run)[/] Audio to [dim]{escape(str(path))}[/dim]")
            return

        try:
            log.info(f"Audio ↓ {escape(name)}")
            await self._save(url, path)
            self.stats.audio_downloaded += 1
        except (NetworkError, TransferError) as e:
            self.stats.audio_failed += 1
            log.warning(f"[yellow]Audio failed[/] {escape(name)}: {escape(str(e))}")
        await self.throttle.wait(self.config.audio_delay)

    async def _save(self, url: str, path: Path) -> None:
        size = await self.downloader.download_file(url, path)
        self.stats.total_size_downloaded += size
