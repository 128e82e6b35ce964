"""Tests for the data models."""

from __future__ import annotations

from pathlib import Path

import pytest

from autogenre.models import AppSettings, AudioFileEntry, Confidence, Metadata, MetadataSuggestion


class TestMetadata:
    def test_defaults_are_absent(self):
        assert Metadata().is_empty
        assert not Metadata(year=0).is_empty

    def test_merged_with_overrides_set_fields_only(self):
        current = Metadata(title="T", artist="A", genre="Rock")
        merged = current.merged_with(Metadata(genre="House"))
        assert merged == Metadata(title="T", artist="A", genre="House")

    def test_frozen(self):
        with pytest.raises(AttributeError):
            Metadata().title = "x"  # type: ignore[misc]

    def test_from_dict_ignores_unknown_and_missing(self):
        assert Metadata.from_dict({"genre": "Jazz", "mood": "calm"}) == Metadata(genre="Jazz")

    def test_from_dict_bpm_int_becomes_float(self):
        assert Metadata.from_dict({"bpm": 128}).bpm == 128.0

    @pytest.mark.parametrize(
        "data",
        [
            {"title": 5},
            {"year": "2001"},
            {"year": True},
            {"year": 2001.5},
            {"bpm": "fast"},
        ],
    )
    def test_from_dict_rejects_wrong_types(self, data: dict):
        with pytest.raises(ValueError):
            Metadata.from_dict(data)


class TestAudioFileEntry:
    def test_from_path(self):
        entry = AudioFileEntry.from_path("/music/Song.FLAC")
        assert entry.filename == "Song.FLAC"
        assert entry.extension == "flac"
        assert entry.current_metadata is None

    def test_with_path_keeps_metadata(self):
        md = Metadata(title="x")
        moved = AudioFileEntry.from_path("/a/b.mp3", md).with_path("/c/d.mp3")
        assert moved.path == Path("/c/d.mp3")
        assert moved.filename == "d.mp3"
        assert moved.current_metadata is md

    def test_display_name(self):
        entry = AudioFileEntry.from_path("/a/b.mp3", Metadata(artist="A", title="T"))
        assert entry.display_name == "A - T"
        assert entry.with_metadata(None).display_name == "b.mp3"

    def test_to_dict(self):
        data = AudioFileEntry.from_path("/a/b.mp3", Metadata(genre="G")).to_dict()
        assert data["extension"] == "mp3"
        assert data["current_metadata"]["genre"] == "G"


class TestMetadataSuggestion:
    def test_to_metadata(self):
        suggestion = MetadataSuggestion("House", "Daft Punk", Confidence.HIGH, "Spotify")
        assert suggestion.to_metadata() == Metadata(genre="House", artist="Daft Punk")
        assert suggestion.is_match

    def test_no_match(self):
        suggestion = MetadataSuggestion(None, "X", Confidence.LOW, "Spotify (No match)")
        assert not suggestion.is_match
        assert suggestion.to_dict()["confidence"] == "Low"


class TestAppSettings:
    def test_defaults(self):
        settings = AppSettings()
        assert settings.folder_pattern == "{genre}"
        assert settings.backup_before_changes is True
        assert settings.organize_files is False
        assert settings.rename_files is False

    def test_from_dict_ignores_unknown_and_none(self):
        settings = AppSettings.from_dict({"folder_pattern": "{artist}", "log_file": None, "theme": "dark"})
        assert settings.folder_pattern == "{artist}"
        assert settings.log_file is None

    def test_round_trip(self):
        settings = AppSettings(rename_files=True, provider_timeout=3.0)
        assert AppSettings.from_dict(settings.to_dict()) == settings
