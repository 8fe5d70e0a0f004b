"""
Media Layer.

This package is responsible for choosing media sources and writing
them to disk.
"""

from .downloader import Downloader
from .selector import MediaSelector, best_artwork_url

__all__ = ["Downloader", "MediaSelector", "best_artwork_url"]
