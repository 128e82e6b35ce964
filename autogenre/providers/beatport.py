"""Beatport catalog provider -- electronic genres and sub-genres."""

from __future__ import annotations

import requests

from autogenre.core.exceptions import ProviderAuthError
from autogenre.models.suggestion import Confidence, MetadataSuggestion
from autogenre.providers.base import SuggestionProvider
from autogenre.providers.token_cache import TokenCache
from autogenre.utils.constants import (
    BEATPORT_CLIENT_ID,
    BEATPORT_DEFAULT_EXPIRES_IN,
    BEATPORT_EXPIRY_MARGIN_SECONDS,
    BEATPORT_SEARCH_URL,
    BEATPORT_TOKEN_URL,
    DEFAULT_PROVIDER_TIMEOUT_SECONDS,
)
from autogenre.utils.logger import get_logger

logger = get_logger("providers.beatport")


class BeatportProvider(SuggestionProvider):
    """Beatport v4 catalog search with password-grant authentication.

    The sub-genre is preferred over the genre when both exist.
    """

    name = "Beatport"

    def __init__(
        self,
        username: str | None,
        password: str | None,
        token_cache: TokenCache,
        session: requests.Session | None = None,
        timeout: float = DEFAULT_PROVIDER_TIMEOUT_SECONDS,
    ) -> None:
        self._username = username or None
        self._password = password or None
        self._tokens = token_cache
        self._session = session or requests.Session()
        self._timeout = timeout

    @property
    def is_configured(self) -> bool:
        return bool(self._username and self._password)

    def _fetch_token(self) -> tuple[str, float]:
        response = self._session.post(
            BEATPORT_TOKEN_URL,
            data={
                "grant_type": "password",
                "client_id": BEATPORT_CLIENT_ID,
                "username": self._username,
                "password": self._password,
            },
            timeout=self._timeout,
        )
        if not response.ok:
            raise ProviderAuthError(
                self.name, f"auth failed ({response.status_code}): {response.text}"
            )
        payload = response.json()
        expires_in = payload.get("expires_in") or BEATPORT_DEFAULT_EXPIRES_IN
        return payload["access_token"], expires_in - BEATPORT_EXPIRY_MARGIN_SECONDS

    def _search(self, artist: str, title: str) -> MetadataSuggestion:
        if not self.is_configured:
            raise ProviderAuthError(self.name, "credentials not configured")

        token = self._tokens.get_or_refresh("beatport", self._fetch_token)
        response = self._session.get(
            BEATPORT_SEARCH_URL,
            params={"q": f"{artist} {title}", "per_page": "1"},
            headers={"Authorization": f"Bearer {token}"},
            timeout=self._timeout,
        )
        self._check_response(response)

        results = response.json()["results"]
        if not results:
            logger.debug("Beatport: no match for %s - %s", artist, title)
            return self.no_match(artist)

        track = results[0]
        artists = track.get("artists") or []
        artist_name = artists[0]["name"] if artists else artist

        chosen = track.get("sub_genre") or track.get("genre")
        genre = chosen["name"] if chosen else None
        return MetadataSuggestion(
            genre=genre,
            artist=artist_name,
            confidence=Confidence.HIGH if genre else Confidence.LOW,
            source=self.name,
        )
