"""Fan-out lookups across all configured suggestion providers."""

from __future__ import annotations

import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Sequence

import requests

from autogenre.core.exceptions import ProviderError
from autogenre.models.config import AppSettings
from autogenre.models.suggestion import MetadataSuggestion
from autogenre.providers.base import SuggestionProvider
from autogenre.providers.beatport import BeatportProvider
from autogenre.providers.musicbrainz import MusicBrainzProvider
from autogenre.providers.spotify import SpotifyProvider
from autogenre.providers.token_cache import TokenCache
from autogenre.utils.constants import DEFAULT_MAX_PROVIDER_WORKERS
from autogenre.utils.logger import get_logger

logger = get_logger("providers.aggregator")


class SuggestionAggregator:
    """Queries every provider concurrently for one (artist, title) pair.

    A provider that raises (``ProviderError`` or anything unexpected) is
    logged and left out; the remaining results come back in provider
    order, not completion order.
    """

    def __init__(
        self,
        providers: Sequence[SuggestionProvider],
        max_workers: int = DEFAULT_MAX_PROVIDER_WORKERS,
    ) -> None:
        self._providers = list(providers)
        self._max_workers = max(1, max_workers)

    @property
    def providers(self) -> list[SuggestionProvider]:
        return list(self._providers)

    def collect(self, artist: str, title: str) -> list[MetadataSuggestion]:
        """Look up (artist, title) on all providers.

        Returns:
            One suggestion per provider that answered, possibly empty.
        """
        if not self._providers:
            return []

        results: dict[int, MetadataSuggestion] = {}
        with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
            future_to_index = {
                pool.submit(provider.search_track, artist, title): index
                for index, provider in enumerate(self._providers)
            }
            for future in as_completed(future_to_index):
                index = future_to_index[future]
                provider = self._providers[index]
                try:
                    results[index] = future.result()
                except ProviderError as e:
                    logger.warning("Provider %s failed: %s", provider.name, e)
                except Exception as e:
                    logger.exception("Provider %s crashed: %s", provider.name, e)

        logger.debug(
            "Collected %d/%d suggestions for %s - %s",
            len(results), len(self._providers), artist, title,
        )
        return [results[i] for i in sorted(results)]


def build_default_providers(
    settings: AppSettings,
    token_cache: TokenCache,
    session: requests.Session | None = None,
) -> list[SuggestionProvider]:
    """Build the stock provider list: Spotify, Beatport, MusicBrainz.

    Credentials come from the environment first (``SPOTIFY_CLIENT_ID``,
    ``SPOTIFY_CLIENT_SECRET``, ``BEATPORT_USERNAME``, ``BEATPORT_PASSWORD``),
    then from *settings*. Providers without credentials are skipped.
    """
    session = session or requests.Session()
    providers: list[SuggestionProvider] = []

    spotify = SpotifyProvider(
        os.environ.get("SPOTIFY_CLIENT_ID") or settings.spotify_client_id,
        os.environ.get("SPOTIFY_CLIENT_SECRET") or settings.spotify_client_secret,
        token_cache,
        session=session,
        timeout=settings.provider_timeout,
    )
    if spotify.is_configured:
        providers.append(spotify)
    else:
        logger.info("Spotify credentials not set; skipping Spotify lookups")

    beatport = BeatportProvider(
        os.environ.get("BEATPORT_USERNAME"),
        os.environ.get("BEATPORT_PASSWORD"),
        token_cache,
        session=session,
        timeout=settings.provider_timeout,
    )
    if beatport.is_configured:
        providers.append(beatport)
    else:
        logger.info("Beatport credentials not set; skipping Beatport lookups")

    providers.append(MusicBrainzProvider())
    return providers
