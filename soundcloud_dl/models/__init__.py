"""
Data Models Layer.

This package contains the models that define the core data structures
used throughout the application: configuration, API records and statistics.
"""

from .catalog import Track, Transcoding, User
from .config import DownloadConfig
from .stats import DownloadStats

__all__ = ["DownloadConfig", "DownloadStats", "Track", "Transcoding", "User"]
