"""
Pydantic model for application configuration.
Provides robust validation for all settings.
"""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_API_BASE_URL = "https://api-v2.soundcloud.com"
DEFAULT_USER_AGENT = "soundcloud-dl/1.0"


class DownloadConfig(BaseModel):
    """A validated configuration model for the application."""

    model_config = ConfigDict(validate_assignment=True, str_strip_whitespace=True)

    # Credentials & source
    client_id: str = Field(..., repr=False)
    profile_url: str

    # Output
    out_dir: Path = Path("downloads")
    name_max_length: int = 120

    # HTTP
    api_base_url: str = DEFAULT_API_BASE_URL
    user_agent: str = DEFAULT_USER_AGENT
    request_timeout: float = 30.0
    page_size: int = 200

    # Self-imposed throttling, in seconds
    page_delay: float = 0.3
    artwork_delay: float = 0.2
    audio_delay: float = 0.4

    # Behaviour
    no_artwork: bool = False
    dry_run: bool = False

    @field_validator("client_id")
    @classmethod
    def validate_client_id(cls, v: str) -> str:
        if not v:
            raise ValueError("CLIENT_ID is required.")
        return v

    @field_validator("profile_url")
    @classmethod
    def validate_profile_url(cls, v: str) -> str:
        """Ensures the profile reference is an absolute http(s) URL."""
        if not v:
            raise ValueError("PROFILE_URL is required.")
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Profile URL must start with http(s)://, got: {v}")
        return v

    @field_validator("api_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("page_size")
    @classmethod
    def validate_page_size(cls, v: int) -> int:
        if v < 1 or v > 200:
            raise ValueError("Page size must be between 1 and 200.")
        return v

    @field_validator("request_timeout", "page_delay", "artwork_delay", "audio_delay")
    @classmethod
    def validate_non_negative(cls, v: float) -> float:
        if v < 0:
            raise ValueError("Timeouts and delays cannot be negative.")
        return v

    @property
    def audio_dir(self) -> Path:
        return self.out_dir / "audio"

    @property
    def artwork_dir(self) -> Path:
        return self.out_dir / "artwork"
