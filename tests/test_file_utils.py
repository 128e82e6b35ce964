"""Tests for autogenre/utils/file_utils.py -- extension checks, sanitizing, safe moves."""

from pathlib import Path

import pytest

from autogenre.core.exceptions import DestinationExistsError
from autogenre.utils.file_utils import (
    extension_of,
    is_audio_file,
    move_no_overwrite,
    sanitize_component,
)

# ---------------------------------------------------------------------------
# extension_of / is_audio_file
# ---------------------------------------------------------------------------


class TestExtensionOf:
    def test_lowercased_without_dot(self):
        assert extension_of(Path("Song.FLAC")) == "flac"

    def test_only_last_suffix(self):
        assert extension_of("mix.v2.mp3") == "mp3"

    def test_no_extension(self):
        assert extension_of("README") == ""


class TestIsAudioFile:
    @pytest.mark.parametrize("name", ["a.mp3", "a.flac", "a.wav", "a.m4a", "a.aiff", "a.ogg", "A.MP3"])
    def test_supported(self, name: str):
        assert is_audio_file(Path(name))

    @pytest.mark.parametrize("name", ["a.txt", "a.jpg", "a.aif", "a.wma", "mp3"])
    def test_unsupported(self, name: str):
        assert not is_audio_file(Path(name))


# ---------------------------------------------------------------------------
# sanitize_component
# ---------------------------------------------------------------------------


class TestSanitizeComponent:
    def test_keeps_alnum_space_hyphen(self):
        assert sanitize_component("Hip-Hop 90s") == "Hip-Hop 90s"

    def test_replaces_everything_else(self):
        assert sanitize_component("R&B/Soul!") == "R_B_Soul_"

    def test_length_preserved(self):
        value = "a/b\\c:d*e?f"
        assert len(sanitize_component(value)) == len(value)

    def test_extra_allowed(self):
        assert sanitize_component("Mr. Oizo", extra_allowed=".") == "Mr. Oizo"
        assert sanitize_component("Mr. Oizo") == "Mr_ Oizo"

    def test_unicode_letters_kept(self):
        assert sanitize_component("Beyoncé") == "Beyoncé"


# ---------------------------------------------------------------------------
# move_no_overwrite
# ---------------------------------------------------------------------------


class TestMoveNoOverwrite:
    def test_moves(self, tmp_path: Path):
        src = tmp_path / "a.mp3"
        src.write_bytes(b"data")
        dst = tmp_path / "b.mp3"
        assert move_no_overwrite(src, dst) == dst
        assert dst.read_bytes() == b"data"
        assert not src.exists()

    def test_refuses_existing_destination(self, tmp_path: Path):
        src = tmp_path / "a.mp3"
        src.write_bytes(b"new")
        dst = tmp_path / "b.mp3"
        dst.write_bytes(b"old")

        with pytest.raises(DestinationExistsError):
            move_no_overwrite(src, dst)

        assert src.read_bytes() == b"new"
        assert dst.read_bytes() == b"old"

    def test_missing_source(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            move_no_overwrite(tmp_path / "missing.mp3", tmp_path / "b.mp3")
