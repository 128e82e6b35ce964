"""Suggestion models for metadata provider lookups."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from autogenre.models.metadata import Metadata


class Confidence(Enum):
    """How much a provider trusts its own suggestion."""

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


@dataclass
class MetadataSuggestion:
    """A candidate genre/artist returned by a suggestion provider.

    A "no match" outcome is still a suggestion: ``confidence`` is LOW,
    ``genre`` is None and ``source`` ends with ``(No match)``.

    Attributes:
        genre: Suggested genre, if the provider had one.
        artist: Artist name as resolved by the provider.
        confidence: Provider-assigned confidence level.
        source: Human-readable provider label.
    """

    genre: str | None
    artist: str | None
    confidence: Confidence
    source: str

    @property
    def is_match(self) -> bool:
        return not self.source.endswith("(No match)")

    def to_metadata(self) -> Metadata:
        """Partial Metadata carrying only the suggested genre and artist."""
        return Metadata(genre=self.genre or None, artist=self.artist or None)

    def to_dict(self) -> dict:
        return {
            "genre": self.genre,
            "artist": self.artist,
            "confidence": self.confidence.value,
            "source": self.source,
        }
