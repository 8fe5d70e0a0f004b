"""
Defines custom exceptions for the application to allow for more specific error handling.
"""

from typing import Any


class SoundCloudDlError(Exception):
    """Base exception for all application-specific errors."""


class ConfigError(SoundCloudDlError):
    """Raised when required configuration is missing or fails validation."""


class ResolutionError(SoundCloudDlError):
    """Raised when a profile URL cannot be mapped to a user."""


class NetworkError(SoundCloudDlError):
    """
    Raised for any failed HTTP request: timeouts, connection failures,
    non-success statuses and undecodable responses.
    """

    def __init__(
        self, message: str, status: int | None = None, body: Any = None
    ) -> None:
        super().__init__(message)
        self.status = status
        self.body = body


class TransferError(SoundCloudDlError):
    """Raised when streaming a remote file to disk fails partway."""
