"""
SoundCloud API Layer.

This package handles all communication with the SoundCloud api-v2 endpoints.
"""

from .client import SoundCloudAPIClient
from .http import HttpClient
from .rate_limiter import FixedDelayThrottle

__all__ = ["FixedDelayThrottle", "HttpClient", "SoundCloudAPIClient"]
