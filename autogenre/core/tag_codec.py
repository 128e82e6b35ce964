"""Tag codec -- reads and writes Metadata through mutagen, one codec per format.

Every supported extension maps to a ``TagCodec``. MP3 files go through the
ID3 codec directly; the other containers share ``ContainerCodec`` and only
differ in the mutagen file class and the ``TagDialect`` used for their
native tag block.
"""

from __future__ import annotations

import re
import struct
from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import Any, ClassVar, Iterator

import mutagen
from mutagen.apev2 import APENoHeaderError, APEv2
from mutagen.flac import FLAC
from mutagen.id3 import ID3, ID3NoHeaderError, TALB, TCON, TDRC, TIT2, TPE1
from mutagen.mp4 import MP4
from mutagen.oggvorbis import OggVorbis
from mutagen.wave import WAVE

from autogenre.core.exceptions import (
    TagError,
    TagFormatError,
    TagNotFoundError,
    TagWriteError,
    UnsupportedFormatError,
)
from autogenre.models.metadata import Metadata
from autogenre.utils.constants import (
    ID3_ENCODING_UTF8,
    ID3_MAX_YEAR,
    ID3_WRITE_VERSION,
    UINT32_MAX,
)
from autogenre.utils.file_utils import extension_of
from autogenre.utils.logger import get_logger

logger = get_logger("core.tag_codec")

_TEXT_FIELDS = ("title", "artist", "album", "genre")
_LEADING_YEAR = re.compile(r"^\s*(\d+)")


def _first_text(values: Any) -> str | None:
    """Return the first value of a native tag as text, or None if it is empty."""
    if not values:
        return None
    if isinstance(values, (list, tuple)):
        values = values[0]
    text = str(values)
    return text or None


def _parse_year(raw: str | None) -> int | None:
    """Parse the leading integer of a date string ('2024', '2024-03-15')."""
    if not raw:
        return None
    match = _LEADING_YEAR.match(raw)
    return int(match.group(1)) if match else None


# ------------------------------------------------------------------
# Dialects: native tag mapping <-> Metadata
# ------------------------------------------------------------------


class TagDialect(ABC):
    """Translates between one native tag mapping and Metadata."""

    name: ClassVar[str] = ""
    max_year: ClassVar[int] = UINT32_MAX

    @abstractmethod
    def get_text(self, tags: Any, field: str) -> str | None:
        """Return the first text value for a Metadata field name."""

    @abstractmethod
    def set_text(self, tags: Any, field: str, value: str) -> None:
        """Replace the native value for a Metadata field name."""

    def format_year(self, year: int) -> str:
        return str(year)

    def coerce_year(self, year: int | None) -> int | None:
        """Check that *year* fits this dialect's native integer width.

        Raises:
            ValueError: If the year is out of range.
        """
        if year is None:
            return None
        if not 0 <= year <= self.max_year:
            raise ValueError(
                f"Year {year} does not fit {self.name} tags (0-{self.max_year})"
            )
        return int(year)

    def read_fields(self, tags: Any) -> Metadata:
        values = {field: self.get_text(tags, field) for field in _TEXT_FIELDS}
        return Metadata(year=_parse_year(self.get_text(tags, "year")), **values)

    def apply_fields(self, tags: Any, metadata: Metadata) -> None:
        """Set every present field of *metadata*; absent fields are left alone."""
        for field in _TEXT_FIELDS:
            value = getattr(metadata, field)
            if value is not None:
                self.set_text(tags, field, value)
        year = self.coerce_year(metadata.year)
        if year is not None:
            self.set_text(tags, "year", self.format_year(year))


class VorbisCommentDialect(TagDialect):
    """Vorbis comments (FLAC, Ogg Vorbis). Keys are case-insensitive."""

    name = "Vorbis comment"
    _KEYS = {
        "title": "title",
        "artist": "artist",
        "album": "album",
        "genre": "genre",
        "year": "date",
    }

    def get_text(self, tags: Any, field: str) -> str | None:
        return _first_text(tags.get(self._KEYS[field]))

    def set_text(self, tags: Any, field: str, value: str) -> None:
        tags[self._KEYS[field]] = [value]


class Id3Dialect(TagDialect):
    """ID3v2 frames (MP3, WAV id3 chunk)."""

    name = "ID3"
    max_year = ID3_MAX_YEAR
    _FRAMES = {
        "title": TIT2,
        "artist": TPE1,
        "album": TALB,
        "genre": TCON,
        "year": TDRC,
    }

    def get_text(self, tags: Any, field: str) -> str | None:
        frame_cls = self._FRAMES[field]
        frame = tags.get(frame_cls.__name__)
        if frame is None:
            return None
        if frame_cls is TCON:
            # Resolves numeric ID3v1 references such as "(17)" -> "Rock"
            return _first_text(frame.genres)
        return _first_text([str(text) for text in frame.text])

    def set_text(self, tags: Any, field: str, value: str) -> None:
        # add() replaces any existing frame with the same hash key
        tags.add(self._FRAMES[field](encoding=ID3_ENCODING_UTF8, text=[value]))

    def format_year(self, year: int) -> str:
        # ID3 timestamps need a four-digit year to parse
        return f"{year:04d}"


class Mp4Dialect(TagDialect):
    """iTunes-style MP4 ilst atoms (M4A)."""

    name = "MP4"
    _KEYS = {
        "title": "\xa9nam",
        "artist": "\xa9ART",
        "album": "\xa9alb",
        "genre": "\xa9gen",
        "year": "\xa9day",
    }

    def get_text(self, tags: Any, field: str) -> str | None:
        return _first_text(tags.get(self._KEYS[field]))

    def set_text(self, tags: Any, field: str, value: str) -> None:
        tags[self._KEYS[field]] = [value]


class ApeDialect(TagDialect):
    """APEv2 tags, read as a fallback when an MP3 has no ID3 block."""

    name = "APEv2"
    _KEYS = {
        "title": "Title",
        "artist": "Artist",
        "album": "Album",
        "genre": "Genre",
        "year": "Year",
    }

    def get_text(self, tags: Any, field: str) -> str | None:
        value = tags.get(self._KEYS[field])
        if value is None:
            return None
        # Multi-valued APE text items are NUL-separated
        return _first_text(str(value).split("\0"))

    def set_text(self, tags: Any, field: str, value: str) -> None:
        tags[self._KEYS[field]] = value


# ------------------------------------------------------------------
# Codecs
# ------------------------------------------------------------------


def _io_cause(error: BaseException) -> OSError | None:
    """Find the OSError mutagen wrapped into a MutagenError, if any."""
    candidates = [error.__cause__, error.__context__, *error.args]
    for candidate in candidates:
        if isinstance(candidate, OSError):
            return candidate
    return None


# mutagen lets a few low-level errors escape its parsers on damaged input
_PARSE_ERRORS = (
    mutagen.MutagenError,
    ValueError,
    IndexError,
    KeyError,
    TypeError,
    EOFError,
    struct.error,
)


@contextmanager
def _translate_errors(
    path: Path, error_cls: type[TagError], message: str
) -> Iterator[None]:
    """Turn mutagen failures into TagErrors, re-raising wrapped I/O errors verbatim."""
    try:
        yield
    except _PARSE_ERRORS as e:
        if isinstance(e, TagError):
            raise
        io_error = _io_cause(e)
        if io_error is not None:
            raise io_error from e
        raise error_cls(path, f"{message} ({e})") from e


def _existing_file(path: Path | str) -> Path:
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Audio file not found: {path}")
    return path


class TagCodec(ABC):
    """Reads and writes Metadata for one file format.

    Subclasses pick the tag block to use; reading and writing rules are
    shared:

    - ``read`` raises ``TagNotFoundError`` when the file has no tag block,
      and returns an all-``None`` Metadata for a block with no fields set.
    - ``write`` inserts an empty block of the codec's dialect when the file
      has none, then sets only the fields present in the Metadata. Frames
      it does not manage are preserved. Writes are not atomic.
    """

    extension: ClassVar[str] = ""
    dialect: ClassVar[TagDialect]

    def read(self, path: Path | str) -> Metadata:
        """Read the primary tag block of *path*.

        Raises:
            FileNotFoundError: If the file does not exist.
            TagNotFoundError: If the file has no tag block.
            TagFormatError: If the container is malformed.
        """
        path = _existing_file(path)
        with _translate_errors(path, TagFormatError, "Failed to read tags"):
            located = self._locate_tags(path)
        if located is None:
            raise TagNotFoundError(path)

        tags, dialect = located
        metadata = dialect.read_fields(tags)
        logger.debug(
            "Read %s tags for: %s -> %s - %s",
            dialect.name, path.name, metadata.artist, metadata.title,
        )
        return metadata

    def write(self, path: Path | str, metadata: Metadata) -> None:
        """Write every present field of *metadata* into *path*.

        Raises:
            FileNotFoundError: If the file does not exist.
            TagFormatError: If the container cannot be parsed.
            TagWriteError: If a value does not fit the format or saving fails.
        """
        path = _existing_file(path)
        try:
            self.dialect.coerce_year(metadata.year)
        except ValueError as e:
            raise TagWriteError(path, str(e)) from e

        with _translate_errors(path, TagFormatError, "Failed to open for writing"):
            handle, tags = self._open_for_write(path)

        self.dialect.apply_fields(tags, metadata)

        with _translate_errors(path, TagWriteError, "Failed to write tags"):
            self._save(handle, path)
        logger.debug("Wrote %s tags: %s", self.dialect.name, path.name)

    @abstractmethod
    def _locate_tags(self, path: Path) -> tuple[Any, TagDialect] | None:
        """Return the tag block to read and its dialect, or None if there is none."""

    @abstractmethod
    def _open_for_write(self, path: Path) -> tuple[Any, Any]:
        """Return ``(handle_to_save, tag_mapping)``, creating an empty block if needed."""

    @abstractmethod
    def _save(self, handle: Any, path: Path) -> None:
        """Persist the modified tags."""


class Id3Codec(TagCodec):
    """MP3: ID3v2 is the primary block, APEv2 the fallback for reading."""

    extension = "mp3"
    dialect = Id3Dialect()
    fallback_dialect = ApeDialect()

    def _locate_tags(self, path: Path) -> tuple[Any, TagDialect] | None:
        try:
            return ID3(path), self.dialect
        except ID3NoHeaderError:
            pass
        try:
            tags = APEv2(path)
        except APENoHeaderError:
            return None
        logger.debug("No ID3 tag, using APEv2 tag: %s", path.name)
        return tags, self.fallback_dialect

    def _open_for_write(self, path: Path) -> tuple[Any, Any]:
        try:
            tags = ID3(path)
        except ID3NoHeaderError:
            logger.debug("No ID3 tag, creating one: %s", path.name)
            tags = ID3()
        return tags, tags

    def _save(self, handle: Any, path: Path) -> None:
        handle.save(path, v2_version=ID3_WRITE_VERSION)


class ContainerCodec(TagCodec):
    """Shared codec for containers that mutagen opens as a single FileType."""

    file_type: ClassVar[type[mutagen.FileType]]

    def _locate_tags(self, path: Path) -> tuple[Any, TagDialect] | None:
        audio = self.file_type(path)
        if audio.tags is None:
            return None
        return audio.tags, self.dialect

    def _open_for_write(self, path: Path) -> tuple[Any, Any]:
        audio = self.file_type(path)
        if audio.tags is None:
            logger.debug("No %s tag, creating one: %s", self.dialect.name, path.name)
            audio.add_tags()
        return audio, audio.tags

    def _save(self, handle: Any, path: Path) -> None:
        handle.save()


class FlacCodec(ContainerCodec):
    extension = "flac"
    file_type = FLAC
    dialect = VorbisCommentDialect()


class WaveCodec(ContainerCodec):
    extension = "wav"
    file_type = WAVE
    dialect = Id3Dialect()


class OggVorbisCodec(ContainerCodec):
    extension = "ogg"
    file_type = OggVorbis
    dialect = VorbisCommentDialect()


class Mp4Codec(ContainerCodec):
    extension = "m4a"
    file_type = MP4
    dialect = Mp4Dialect()


_CODECS: dict[str, TagCodec] = {
    codec.extension: codec
    for codec in (Id3Codec(), FlacCodec(), WaveCodec(), OggVorbisCodec(), Mp4Codec())
}


def supported_codec_extensions() -> frozenset[str]:
    """Extensions (lowercase, no dot) that have a tag codec."""
    return frozenset(_CODECS)


def codec_for_extension(extension: str) -> TagCodec:
    """Return the codec for an extension such as ``"MP3"`` or ``".flac"``.

    Raises:
        UnsupportedFormatError: If no codec handles the extension.
    """
    ext = extension.lstrip(".").lower()
    codec = _CODECS.get(ext)
    if codec is None:
        raise UnsupportedFormatError(ext)
    return codec


def get_codec(path: Path | str) -> TagCodec:
    """Return the codec for a file path, selected by its extension."""
    return codec_for_extension(extension_of(path))


def read_metadata(path: Path | str) -> Metadata:
    """Read Metadata from *path* with the codec for its extension."""
    return get_codec(path).read(path)


def write_metadata(path: Path | str, metadata: Metadata) -> None:
    """Write Metadata to *path* with the codec for its extension."""
    get_codec(path).write(path, metadata)
