"""
Pydantic models for the SoundCloud API records the downloader consumes.

Only the fields the downloader reads are declared; everything else in the
API payload is kept as extra data and ignored. The API sends explicit
``null`` for absent nested objects, so those are read as the field default.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class _ApiRecord(BaseModel):
    model_config = ConfigDict(extra="allow", frozen=True)

    @classmethod
    def _default_for_null(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return cls.model_fields[info.field_name].get_default(
                call_default_factory=True
            )
        return value


class User(_ApiRecord):
    """A resolved SoundCloud user."""

    id: int
    username: str = ""
    permalink_url: Optional[str] = None
    avatar_url: Optional[str] = None
    track_count: Optional[int] = None


class TranscodingFormat(_ApiRecord):
    protocol: str = ""
    mime_type: str = ""

    @field_validator("protocol", "mime_type", mode="before")
    @classmethod
    def null_as_empty(cls, value: Any, info: ValidationInfo) -> Any:
        return cls._default_for_null(value, info)


class Transcoding(_ApiRecord):
    """
    One encoding of a track. ``url`` is a metadata endpoint that returns the
    signed media URL, not the media itself.
    """

    url: Optional[str] = None
    format: TranscodingFormat = Field(default_factory=TranscodingFormat)

    @field_validator("format", mode="before")
    @classmethod
    def null_as_empty(cls, value: Any, info: ValidationInfo) -> Any:
        return cls._default_for_null(value, info)

    @property
    def is_progressive_mp3(self) -> bool:
        return (
            self.format.protocol == "progressive"
            and "audio/mpeg" in self.format.mime_type
        )


class Media(_ApiRecord):
    transcodings: list[Transcoding] = Field(default_factory=list)

    @field_validator("transcodings", mode="before")
    @classmethod
    def null_as_empty(cls, value: Any, info: ValidationInfo) -> Any:
        return cls._default_for_null(value, info)


class TrackOwner(_ApiRecord):
    id: Optional[int] = None
    username: Optional[str] = None
    avatar_url: Optional[str] = None


class Track(_ApiRecord):
    """An immutable snapshot of a track as returned by the API."""

    id: int
    title: Optional[str] = None
    artwork_url: Optional[str] = None
    downloadable: bool = False
    download_url: Optional[str] = None
    media: Media = Field(default_factory=Media)
    user: TrackOwner = Field(default_factory=TrackOwner)

    @field_validator("downloadable", "media", "user", mode="before")
    @classmethod
    def null_as_empty(cls, value: Any, info: ValidationInfo) -> Any:
        return cls._default_for_null(value, info)
