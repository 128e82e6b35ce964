"""Metadata model -- the canonical descriptive fields of a track."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

_TEXT_FIELDS = ("title", "artist", "album", "genre")


@dataclass(frozen=True)
class Metadata:
    """Descriptive tag fields shared by every supported format.

    ``None`` always means "absent". Codecs turn empty native strings into
    ``None`` on read, so an empty string never reaches this model from a file.

    Attributes:
        title: Track title.
        artist: Track artist.
        album: Album name.
        genre: Genre name.
        year: Release year.
        bpm: Beats per minute. Reserved; no codec reads or writes it.
    """

    title: str | None = None
    artist: str | None = None
    album: str | None = None
    genre: str | None = None
    year: int | None = None
    bpm: float | None = None

    @property
    def is_empty(self) -> bool:
        """True when every field is absent."""
        return all(getattr(self, f.name) is None for f in fields(self))

    def merged_with(self, other: Metadata) -> Metadata:
        """Return a copy where every field set on *other* overrides this one."""
        changes = {
            f.name: getattr(other, f.name)
            for f in fields(other)
            if getattr(other, f.name) is not None
        }
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-friendly mapping (absent fields become null)."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Metadata:
        """Build Metadata from a mapping such as a decoded backup document.

        Unknown keys are ignored and missing keys are treated as absent.

        Raises:
            ValueError: If a value has the wrong type.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Expected a mapping, got {type(data).__name__}")

        values: dict[str, Any] = {}
        for name in _TEXT_FIELDS:
            value = data.get(name)
            if value is not None and not isinstance(value, str):
                raise ValueError(f"'{name}' must be a string, got {value!r}")
            values[name] = value

        year = data.get("year")
        # bool is an int subclass; reject it explicitly
        if year is not None and (isinstance(year, bool) or not isinstance(year, int)):
            raise ValueError(f"'year' must be an integer, got {year!r}")
        values["year"] = year

        bpm = data.get("bpm")
        if bpm is not None:
            if isinstance(bpm, bool) or not isinstance(bpm, (int, float)):
                raise ValueError(f"'bpm' must be a number, got {bpm!r}")
            bpm = float(bpm)
        values["bpm"] = bpm

        return cls(**values)


@dataclass(frozen=True)
class AudioFileEntry:
    """One audio file discovered by a directory scan.

    Entries are immutable: writing tags or moving the file produces a new
    entry (see ``with_metadata`` / ``with_path``) rather than editing this one.

    Attributes:
        path: Location of the file; unique within one scan.
        filename: Final path component.
        extension: Lowercased extension without the dot.
        current_metadata: Parsed tags, or None if unreadable or untagged.
    """

    path: Path
    filename: str
    extension: str
    current_metadata: Metadata | None = None

    @classmethod
    def from_path(cls, path: Path | str, metadata: Metadata | None = None) -> AudioFileEntry:
        """Create an entry, deriving filename and extension from *path*."""
        path = Path(path)
        return cls(
            path=path,
            filename=path.name,
            extension=path.suffix.lstrip(".").lower(),
            current_metadata=metadata,
        )

    def with_metadata(self, metadata: Metadata | None) -> AudioFileEntry:
        return replace(self, current_metadata=metadata)

    def with_path(self, path: Path | str) -> AudioFileEntry:
        return AudioFileEntry.from_path(path, self.current_metadata)

    @property
    def display_name(self) -> str:
        """``Artist - Title`` when both are known, else the filename."""
        md = self.current_metadata
        if md and md.artist and md.title:
            return f"{md.artist} - {md.title}"
        return self.filename

    def to_dict(self) -> dict[str, Any]:
        """Serialize the entry (for JSON output)."""
        return {
            "path": str(self.path),
            "filename": self.filename,
            "extension": self.extension,
            "current_metadata": (
                self.current_metadata.to_dict() if self.current_metadata else None
            ),
        }
