"""Spotify Web API provider -- artist genres via client-credentials auth."""

from __future__ import annotations

import requests

from autogenre.core.exceptions import ProviderAuthError
from autogenre.models.suggestion import Confidence, MetadataSuggestion
from autogenre.providers.base import SuggestionProvider
from autogenre.providers.token_cache import TokenCache
from autogenre.utils.constants import (
    DEFAULT_PROVIDER_TIMEOUT_SECONDS,
    SPOTIFY_ARTIST_URL,
    SPOTIFY_SEARCH_URL,
    SPOTIFY_TOKEN_LIFETIME_SECONDS,
    SPOTIFY_TOKEN_URL,
)
from autogenre.utils.logger import get_logger

logger = get_logger("providers.spotify")

_HTTP_UNAUTHORIZED = 401


def _quote_if_multiword(value: str) -> str:
    return f'"{value}"' if " " in value else value


class SpotifyProvider(SuggestionProvider):
    """Spotify track search followed by an artist lookup for genres.

    Spotify has no per-track genre; the first genre of the track's first
    artist is used. A genre gives HIGH confidence, an artist without genres
    (or a failed artist lookup) gives MEDIUM.
    """

    name = "Spotify"

    def __init__(
        self,
        client_id: str | None,
        client_secret: str | None,
        token_cache: TokenCache,
        session: requests.Session | None = None,
        timeout: float = DEFAULT_PROVIDER_TIMEOUT_SECONDS,
    ) -> None:
        self._client_id = client_id or None
        self._client_secret = client_secret or None
        self._tokens = token_cache
        self._session = session or requests.Session()
        self._timeout = timeout

    @property
    def is_configured(self) -> bool:
        return bool(self._client_id and self._client_secret)

    def _fetch_token(self) -> tuple[str, float]:
        response = self._session.post(
            SPOTIFY_TOKEN_URL,
            data={"grant_type": "client_credentials"},
            auth=(self._client_id, self._client_secret),
            timeout=self._timeout,
        )
        if not response.ok:
            raise ProviderAuthError(self.name, f"auth failed: HTTP {response.status_code}")
        return response.json()["access_token"], SPOTIFY_TOKEN_LIFETIME_SECONDS

    def _search(self, artist: str, title: str) -> MetadataSuggestion:
        if not self.is_configured:
            raise ProviderAuthError(self.name, "API credentials not configured")

        token = self._tokens.get_or_refresh("spotify", self._fetch_token)
        headers = {"Authorization": f"Bearer {token}"}

        query = f"artist:{_quote_if_multiword(artist)} track:{_quote_if_multiword(title)}"
        response = self._session.get(
            SPOTIFY_SEARCH_URL,
            params={"q": query, "type": "track", "limit": "1"},
            headers=headers,
            timeout=self._timeout,
        )
        if response.status_code == _HTTP_UNAUTHORIZED:
            self._tokens.invalidate("spotify")
            raise ProviderAuthError(self.name, "access token rejected")
        self._check_response(response)

        items = response.json()["tracks"]["items"]
        if not items:
            logger.debug("Spotify: no match for %s - %s", artist, title)
            return self.no_match(artist)

        first_artist = items[0]["artists"][0]
        artist_name = first_artist["name"]

        details = self._session.get(
            SPOTIFY_ARTIST_URL.format(artist_id=first_artist["id"]),
            headers=headers,
            timeout=self._timeout,
        )
        if not details.ok:
            logger.debug(
                "Spotify artist lookup failed (HTTP %d) for %s",
                details.status_code, artist_name,
            )
            return MetadataSuggestion(
                genre=None,
                artist=artist_name,
                confidence=Confidence.MEDIUM,
                source=self.name,
            )

        genres = details.json().get("genres") or []
        genre = genres[0] if genres else None
        return MetadataSuggestion(
            genre=genre,
            artist=artist_name,
            confidence=Confidence.HIGH if genre else Confidence.MEDIUM,
            source=self.name,
        )
