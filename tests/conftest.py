"""Shared fixtures: tiny audio files mutagen can open and tag."""

from __future__ import annotations

from pathlib import Path

import pytest

from tests.helpers import make_flac, make_m4a, make_mp3, make_ogg, make_wav


@pytest.fixture
def mp3_file(tmp_path: Path) -> Path:
    return make_mp3(tmp_path / "track.mp3")


@pytest.fixture
def flac_file(tmp_path: Path) -> Path:
    return make_flac(tmp_path / "track.flac")


@pytest.fixture
def wav_file(tmp_path: Path) -> Path:
    return make_wav(tmp_path / "track.wav")


@pytest.fixture
def ogg_file(tmp_path: Path) -> Path:
    return make_ogg(tmp_path / "track.ogg")


@pytest.fixture
def m4a_file(tmp_path: Path) -> Path:
    return make_m4a(tmp_path / "track.m4a")


@pytest.fixture
def corrupt_flac(tmp_path: Path) -> Path:
    p = tmp_path / "broken.flac"
    p.write_bytes(b"this is not a flac file at all" * 4)
    return p
