"""
Utilities for deriving destination file names and paths.
"""

from pathlib import Path

from pathvalidate import sanitize_filename

from soundcloud_dl.models.catalog import Track

DEFAULT_MAX_NAME_LENGTH = 120


def create_dir(directory_path: Path) -> None:
    """Creates a directory if it does not already exist."""
    directory_path.mkdir(parents=True, exist_ok=True)


def safe_name(track: Track, max_length: int = DEFAULT_MAX_NAME_LENGTH) -> str:
    """
    Builds the file base name ``"<title> - <id>"`` for a track.

    The id keeps names unique even when titles collide or are missing, so
    long titles are shortened rather than the id suffix.
    """
    suffix = f" - {track.id}"
    title = sanitize_filename(track.title, platform="universal") if track.title else ""
    title = title.strip()[: max(max_length - len(suffix), 0)].rstrip() or "untitled"
    return f"{title}{suffix}"


def artwork_path(artwork_dir: Path, name: str, extension: str) -> Path:
    return artwork_dir / f"{name}.{extension}"


def audio_path(audio_dir: Path, name: str) -> Path:
    return audio_dir / f"{name}.mp3"


def destination_exists(path: Path) -> bool:
    """An existing destination is treated as already downloaded."""
    return path.is_file()
