"""
Dataclass for tracking download session statistics.
"""

from dataclasses import dataclass


@dataclass
class DownloadStats:
    """Running counters for a single download session."""

    tracks_total: int = 0
    tracks_processed: int = 0
    artwork_downloaded: int = 0
    artwork_skipped_exists: int = 0
    artwork_failed: int = 0
    audio_downloaded: int = 0
    audio_skipped_exists: int = 0
    audio_unavailable: int = 0
    audio_failed: int = 0
    total_size_downloaded: int = 0
    dry_run: bool = False

    @property
    def files_failed(self) -> int:
        return self.artwork_failed + self.audio_failed
