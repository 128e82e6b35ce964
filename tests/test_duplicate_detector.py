"""Tests for duplicate detection by normalized artist/title."""

from __future__ import annotations

from pathlib import Path

from autogenre.core.duplicate_detector import DuplicateDetector, find_duplicates, normalize_key
from autogenre.models.metadata import AudioFileEntry, Metadata


def _entry(name: str, artist: str | None = None, title: str | None = None) -> AudioFileEntry:
    metadata = None if artist is None and title is None else Metadata(artist=artist, title=title)
    return AudioFileEntry.from_path(Path("/music") / name, metadata)


class TestNormalizeKey:
    def test_trims_and_lowercases(self):
        assert normalize_key(Metadata(artist=" Daft Punk ", title="ONE More Time")) == (
            "daft punk",
            "one more time",
        )

    def test_missing_part_gives_no_key(self):
        assert normalize_key(Metadata(artist="Daft Punk")) is None
        assert normalize_key(Metadata(title="Da Funk")) is None
        assert normalize_key(None) is None

    def test_whitespace_only_gives_no_key(self):
        assert normalize_key(Metadata(artist="   ", title="Da Funk")) is None


class TestFindDuplicates:
    def test_three_copies_make_one_group(self):
        entries = [_entry(f"{i}.mp3", "A", "T") for i in range(3)]
        assert find_duplicates(entries) == [[0, 1, 2]]

    def test_case_and_whitespace_insensitive(self):
        entries = [
            _entry("a.mp3", "Daft Punk", " one more time "),
            _entry("b.flac", "daft punk", "One More Time"),
        ]
        assert find_duplicates(entries) == [[0, 1]]

    def test_untagged_entries_never_grouped(self):
        entries = [_entry("a.mp3"), _entry("b.mp3"), _entry("c.mp3", "A", None)]
        assert find_duplicates(entries) == []

    def test_singletons_excluded(self):
        entries = [_entry("a.mp3", "A", "One"), _entry("b.mp3", "A", "Two")]
        assert find_duplicates(entries) == []

    def test_multiple_groups_in_first_seen_order(self):
        entries = [
            _entry("0.mp3", "B", "Song"),
            _entry("1.mp3", "A", "Song"),
            _entry("2.mp3", "B", "Song"),
            _entry("3.mp3", "A", "Song"),
            _entry("4.mp3", "C", "Other"),
        ]
        assert DuplicateDetector().find_duplicates(entries) == [[0, 2], [1, 3]]

    def test_each_entry_in_at_most_one_group(self):
        entries = [_entry(f"{i}.mp3", "A", "T") for i in range(5)]
        groups = find_duplicates(entries)
        flat = [i for g in groups for i in g]
        assert len(flat) == len(set(flat))

    def test_empty_inventory(self):
        assert find_duplicates([]) == []
