"""
Core application engine for orchestrating the download process.

The `DownloadManager` drives a session (resolve, list, process), delegating
each individual track to the `TrackProcessor`.
"""

from .download_manager import DownloadManager
from .track_processor import TrackProcessor

__all__ = ["DownloadManager", "TrackProcessor"]
