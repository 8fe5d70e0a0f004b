from soundcloud_dl.models.catalog import Track
from soundcloud_dl.utils.path import (
    artwork_path,
    audio_path,
    destination_exists,
    safe_name,
)


def test_safe_name_strips_reserved_characters() -> None:
    name = safe_name(Track(id=42, title="My/Song:Title"))
    assert "/" not in name
    assert ":" not in name
    assert name.endswith("- 42")
    assert name.startswith("MySongTitle")


def test_safe_name_without_title_uses_placeholder() -> None:
    assert safe_name(Track(id=5, title=None)) == "untitled - 5"
    assert safe_name(Track(id=6, title="")) == "untitled - 6"


def test_long_titles_are_truncated_keeping_the_id() -> None:
    name = safe_name(Track(id=1, title="x" * 300))
    assert len(name) == 120
    assert name.endswith("x - 1")
    assert safe_name(Track(id=1, title="abcdef"), max_length=8) == "abcd - 1"


def test_title_made_only_of_reserved_characters() -> None:
    assert safe_name(Track(id=3, title="//:")) == "untitled - 3"


def test_same_title_different_ids_do_not_collide() -> None:
    a = safe_name(Track(id=1, title="Intro"))
    b = safe_name(Track(id=2, title="Intro"))
    assert a != b


def test_destination_paths(tmp_path) -> None:
    assert artwork_path(tmp_path / "artwork", "a - 1", "png") == (
        tmp_path / "artwork" / "a - 1.png"
    )
    assert audio_path(tmp_path / "audio", "a - 1") == tmp_path / "audio" / "a - 1.mp3"


def test_destination_exists_is_a_pure_filesystem_check(tmp_path) -> None:
    target = tmp_path / "song - 1.mp3"
    assert not destination_exists(target)
    target.write_bytes(b"")
    assert destination_exists(target)
    assert not destination_exists(tmp_path)
