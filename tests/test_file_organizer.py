"""Tests for FileOrganizer -- pattern expansion, moves, renames, collisions."""

from __future__ import annotations

from pathlib import Path

import pytest

from autogenre.core.exceptions import DestinationExistsError
from autogenre.core.file_organizer import FileOrganizer
from autogenre.models.metadata import Metadata


@pytest.fixture
def organizer() -> FileOrganizer:
    return FileOrganizer()


@pytest.fixture
def tmp_lib(tmp_path: Path) -> Path:
    """Return a temporary library root directory."""
    lib = tmp_path / "library"
    lib.mkdir()
    return lib


def _make_audio_file(tmp_path: Path, name: str = "test.mp3") -> Path:
    """Create a dummy audio file for testing."""
    p = tmp_path / name
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_bytes(b"\x00" * 128)
    return p


# ------------------------------------------------------------------
# Pattern expansion
# ------------------------------------------------------------------


class TestExpandPattern:
    def test_all_placeholders(self, organizer: FileOrganizer):
        md = Metadata(genre="House", artist="Daft Punk", album="Discovery", title="Voyager", year=2001)
        result = organizer.expand_pattern("{genre}/{artist}/{year} - {album}/{title}", md)
        assert result == "House/Daft Punk/2001 - Discovery/Voyager"

    def test_absent_values_become_unknown(self, organizer: FileOrganizer):
        assert organizer.expand_pattern("{genre}/{year}", Metadata()) == "Unknown/Unknown"

    def test_values_are_sanitized(self, organizer: FileOrganizer):
        md = Metadata(genre="Drum & Bass", artist="AC/DC")
        assert organizer.expand_pattern("{genre}/{artist}", md) == "Drum _ Bass/AC_DC"

    def test_literal_text_kept(self, organizer: FileOrganizer):
        assert organizer.expand_pattern("Sorted/{genre}", Metadata(genre="Techno")) == "Sorted/Techno"


# ------------------------------------------------------------------
# organize
# ------------------------------------------------------------------


class TestOrganize:
    def test_moves_into_genre_folder(self, organizer: FileOrganizer, tmp_path: Path, tmp_lib: Path):
        src = _make_audio_file(tmp_path / "incoming", "song.mp3")
        dest = organizer.organize(src, Metadata(genre="House"), tmp_lib, "{genre}")
        assert dest == tmp_lib / "House" / "song.mp3"
        assert dest.exists()
        assert not src.exists()

    def test_missing_genre_uses_unknown_folder(self, organizer: FileOrganizer, tmp_path: Path, tmp_lib: Path):
        src = _make_audio_file(tmp_path / "incoming", "song.mp3")
        dest = organizer.organize(src, Metadata(), tmp_lib, "{genre}")
        assert dest == tmp_lib / "Unknown" / "song.mp3"

    def test_creates_nested_folders(self, organizer: FileOrganizer, tmp_path: Path, tmp_lib: Path):
        src = _make_audio_file(tmp_path / "incoming", "song.flac")
        md = Metadata(genre="House", artist="Daft Punk")
        dest = organizer.organize(src, md, tmp_lib, "{genre}/{artist}")
        assert dest == tmp_lib / "House" / "Daft Punk" / "song.flac"

    def test_collision_leaves_both_files(self, organizer: FileOrganizer, tmp_path: Path, tmp_lib: Path):
        src = _make_audio_file(tmp_path / "incoming", "song.mp3")
        existing = _make_audio_file(tmp_lib / "House", "song.mp3")
        existing.write_bytes(b"original")

        with pytest.raises(DestinationExistsError):
            organizer.organize(src, Metadata(genre="House"), tmp_lib, "{genre}")

        assert src.exists()
        assert existing.read_bytes() == b"original"

    def test_collision_is_a_file_exists_error(self, organizer: FileOrganizer, tmp_path: Path, tmp_lib: Path):
        src = _make_audio_file(tmp_path / "incoming", "song.mp3")
        _make_audio_file(tmp_lib / "Unknown", "song.mp3")
        with pytest.raises(FileExistsError):
            organizer.organize(src, Metadata(), tmp_lib, "{genre}")

    def test_missing_source(self, organizer: FileOrganizer, tmp_path: Path, tmp_lib: Path):
        with pytest.raises(FileNotFoundError):
            organizer.organize(tmp_path / "ghost.mp3", Metadata(), tmp_lib, "{genre}")

    def test_preview_does_not_touch_disk(self, organizer: FileOrganizer, tmp_path: Path, tmp_lib: Path):
        src = _make_audio_file(tmp_path / "incoming", "song.mp3")
        dest = organizer.preview_organize(src, Metadata(genre="Jazz"), tmp_lib, "{genre}")
        assert dest == tmp_lib / "Jazz" / "song.mp3"
        assert src.exists()
        assert not (tmp_lib / "Jazz").exists()


# ------------------------------------------------------------------
# rename
# ------------------------------------------------------------------


class TestBuildFilename:
    def test_artist_and_title(self, organizer: FileOrganizer):
        md = Metadata(artist="Daft Punk", title="One More Time")
        assert organizer.build_filename(Path("x.mp3"), md) == "Daft Punk - One More Time.mp3"

    def test_missing_parts(self, organizer: FileOrganizer):
        assert organizer.build_filename(Path("x.flac"), Metadata()) == "Unknown Artist - Unknown Title.flac"

    def test_dots_kept_slashes_replaced(self, organizer: FileOrganizer):
        md = Metadata(artist="Mr. Oizo", title="Flat/Beat")
        assert organizer.build_filename(Path("x.mp3"), md) == "Mr. Oizo - Flat_Beat.mp3"

    def test_extension_case_preserved(self, organizer: FileOrganizer):
        md = Metadata(artist="A", title="B")
        assert organizer.build_filename(Path("x.MP3"), md) == "A - B.MP3"

    def test_no_extension_raises(self, organizer: FileOrganizer):
        with pytest.raises(ValueError):
            organizer.build_filename(Path("noext"), Metadata(artist="A", title="B"))


class TestRenameFile:
    def test_renames_in_place(self, organizer: FileOrganizer, tmp_path: Path):
        src = _make_audio_file(tmp_path, "track01.mp3")
        dest = organizer.rename_file(src, Metadata(artist="Daft Punk", title="Digital Love"))
        assert dest == tmp_path / "Daft Punk - Digital Love.mp3"
        assert dest.exists()
        assert not src.exists()

    def test_already_named(self, organizer: FileOrganizer, tmp_path: Path):
        src = _make_audio_file(tmp_path, "A - B.mp3")
        assert organizer.rename_file(src, Metadata(artist="A", title="B")) == src
        assert src.exists()

    def test_collision(self, organizer: FileOrganizer, tmp_path: Path):
        src = _make_audio_file(tmp_path, "track01.mp3")
        taken = _make_audio_file(tmp_path, "A - B.mp3")
        taken.write_bytes(b"keep")

        with pytest.raises(DestinationExistsError):
            organizer.rename_file(src, Metadata(artist="A", title="B"))

        assert src.exists()
        assert taken.read_bytes() == b"keep"

    def test_missing_source(self, organizer: FileOrganizer, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            organizer.rename_file(tmp_path / "ghost.mp3", Metadata(artist="A", title="B"))
