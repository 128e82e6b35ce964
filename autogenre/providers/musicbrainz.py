"""MusicBrainz provider -- community tags on recordings, no credentials needed."""

from __future__ import annotations

import musicbrainzngs

from autogenre.core.exceptions import ProviderError
from autogenre.models.suggestion import Confidence, MetadataSuggestion
from autogenre.providers.base import SuggestionProvider
from autogenre.utils.constants import (
    MUSICBRAINZ_APP_NAME,
    MUSICBRAINZ_APP_VERSION,
    MUSICBRAINZ_CONTACT,
)
from autogenre.utils.logger import get_logger

logger = get_logger("providers.musicbrainz")


def _best_tag(tags: list[dict]) -> str | None:
    """Most-voted tag name; the first one wins ties."""
    best_name, best_count = None, -1
    for tag in tags:
        try:
            count = int(tag.get("count", 0))
        except (TypeError, ValueError):
            count = 0
        if tag.get("name") and count > best_count:
            best_name, best_count = tag["name"], count
    return best_name


def _credited_artist(recording: dict) -> str | None:
    phrase = recording.get("artist-credit-phrase")
    if phrase:
        return phrase
    for credit in recording.get("artist-credit", []):
        # Credits interleave artist dicts with join-phrase strings
        if isinstance(credit, dict):
            return credit.get("name") or credit.get("artist", {}).get("name")
    return None


class MusicBrainzProvider(SuggestionProvider):
    """Recording search on MusicBrainz.

    musicbrainzngs enforces the one-request-per-second rate limit itself.
    A tag gives MEDIUM confidence; a recording without tags gives LOW.
    """

    name = "MusicBrainz"

    def __init__(self) -> None:
        # Required by the MusicBrainz terms of service
        musicbrainzngs.set_useragent(
            MUSICBRAINZ_APP_NAME,
            MUSICBRAINZ_APP_VERSION,
            MUSICBRAINZ_CONTACT,
        )

    def _search(self, artist: str, title: str) -> MetadataSuggestion:
        try:
            result = musicbrainzngs.search_recordings(
                artist=artist, recording=title, limit=1,
            )
        except musicbrainzngs.MusicBrainzError as e:
            raise ProviderError(self.name, f"search failed: {e}") from e

        recordings = result.get("recording-list", [])
        if not recordings:
            logger.debug("MusicBrainz: no match for %s - %s", artist, title)
            return self.no_match(artist)

        recording = recordings[0]
        genre = _best_tag(recording.get("tag-list", []))
        return MetadataSuggestion(
            genre=genre,
            artist=_credited_artist(recording) or artist,
            confidence=Confidence.MEDIUM if genre else Confidence.LOW,
            source=self.name,
        )
