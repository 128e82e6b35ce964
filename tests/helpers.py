"""Helpers that write tiny audio files mutagen can open and tag."""

from __future__ import annotations

import struct
import wave
from pathlib import Path

from mutagen.ogg import OggPage


def make_mp3(path: Path) -> Path:
    """Write an untagged MP3: one MPEG1 Layer3 128kbps/44100 frame of silence."""
    path.parent.mkdir(parents=True, exist_ok=True)
    frame_header = bytes([0xFF, 0xFB, 0x90, 0x00])
    path.write_bytes(frame_header + b"\x00" * 417)
    return path


def make_flac(path: Path) -> Path:
    """Write an untagged FLAC: fLaC marker + a single STREAMINFO block."""
    path.parent.mkdir(parents=True, exist_ok=True)
    flac_data = b"fLaC"
    # STREAMINFO: block type 0, last=1, length=34
    flac_data += bytes([0x80, 0x00, 0x00, 0x22])
    flac_data += b"\x10\x00\x10\x00\x00\x00\x00\x00\x00\x00"
    flac_data += b"\x0a\xc4\x42\xf0\x00\x00\x00\x00\x00\x00"
    flac_data += b"\x00" * 10
    flac_data += b"\x00" * 4
    path.write_bytes(flac_data)
    return path


def make_wav(path: Path) -> Path:
    """Write an untagged mono 16-bit WAV with a few frames of silence."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with wave.open(str(path), "wb") as w:
        w.setnchannels(1)
        w.setsampwidth(2)
        w.setframerate(44100)
        w.writeframes(b"\x00\x00" * 100)
    return path




def _ogg_page(packets: list[bytes], sequence: int, position: int, first: bool = False, last: bool = False) -> bytes:
    page = OggPage()
    page.packets = packets
    page.serial = 1
    page.sequence = sequence
    page.position = position
    page.first = first
    page.last = last
    return page.write()


def make_ogg(path: Path, framing: bool = True) -> Path:
    """Write an Ogg Vorbis file with an empty comment header.

    The three Vorbis header packets are real enough for mutagen; the audio
    page holds no decodable data. With ``framing=False`` the comment header
    is cut short before its framing byte.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    ident = b"\x01vorbis" + struct.pack("<IBIiiiBB", 0, 1, 44100, 0, 128000, 0, 0xB8, 1)
    vendor = b"autogenre-tests"
    comment = b"\x03vorbis" + struct.pack("<I", len(vendor)) + vendor + struct.pack("<I", 0)
    if framing:
        comment += b"\x01"
    setup = b"\x05vorbis" + b"\x00" * 16
    data = (
        _ogg_page([ident], sequence=0, position=0, first=True)
        + _ogg_page([comment, setup], sequence=1, position=0)
        + _ogg_page([b"\x00" * 32], sequence=2, position=4410, last=True)
    )
    path.write_bytes(data)
    return path


def _atom(name: bytes, payload: bytes) -> bytes:
    return struct.pack(">I4s", len(payload) + 8, name) + payload


def make_m4a(path: Path) -> Path:
    """Write an untagged M4A: ftyp plus a moov with one 'soun' track."""
    path.parent.mkdir(parents=True, exist_ok=True)
    full_header = b"\x00\x00\x00\x00"
    mvhd = _atom(b"mvhd", full_header + b"\x00" * 8 + struct.pack(">2I", 1000, 1000) + b"\x00" * 80)
    mdhd = _atom(b"mdhd", full_header + b"\x00" * 8 + struct.pack(">2I", 44100, 44100) + b"\x00" * 4)
    hdlr = _atom(b"hdlr", full_header + b"\x00" * 4 + b"soun" + b"\x00" * 12 + b"\x00")
    trak = _atom(b"trak", _atom(b"mdia", mdhd + hdlr))
    data = (
        _atom(b"ftyp", b"M4A " + b"\x00\x00\x02\x00" + b"M4A isom")
        + _atom(b"moov", mvhd + trak)
        + _atom(b"mdat", b"\x00" * 16)
    )
    path.write_bytes(data)
    return path
