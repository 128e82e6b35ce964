"""Online metadata suggestion providers."""

from autogenre.providers.aggregator import SuggestionAggregator, build_default_providers
from autogenre.providers.base import SuggestionProvider
from autogenre.providers.beatport import BeatportProvider
from autogenre.providers.musicbrainz import MusicBrainzProvider
from autogenre.providers.spotify import SpotifyProvider
from autogenre.providers.token_cache import TokenCache

__all__ = [
    "BeatportProvider",
    "MusicBrainzProvider",
    "SpotifyProvider",
    "SuggestionAggregator",
    "SuggestionProvider",
    "TokenCache",
    "build_default_providers",
]
