"""Base class for metadata suggestion providers."""

from __future__ import annotations

from abc import ABC, abstractmethod

import requests

from autogenre.core.exceptions import ProviderError
from autogenre.models.suggestion import Confidence, MetadataSuggestion


class SuggestionProvider(ABC):
    """Looks up a genre/artist suggestion for an (artist, title) pair.

    ``search_track`` returns a suggestion for a match *and* for "no match";
    only hard failures (credentials, network, unexpected payloads) raise
    ``ProviderError``. No call is retried.
    """

    #: Label used in suggestions and logs.
    name: str = ""

    def search_track(self, artist: str, title: str) -> MetadataSuggestion:
        """Look up (artist, title).

        Raises:
            ProviderError: On any hard failure.
        """
        try:
            return self._search(artist, title)
        except ProviderError:
            raise
        except requests.RequestException as e:
            raise ProviderError(self.name, f"request failed: {e}") from e
        except (AttributeError, KeyError, IndexError, TypeError, ValueError) as e:
            raise ProviderError(self.name, f"unexpected response: {e!r}") from e

    @abstractmethod
    def _search(self, artist: str, title: str) -> MetadataSuggestion:
        """Provider-specific lookup."""

    def no_match(self, artist: str) -> MetadataSuggestion:
        """The "searched fine, found nothing" result."""
        return MetadataSuggestion(
            genre=None,
            artist=artist,
            confidence=Confidence.LOW,
            source=f"{self.name} (No match)",
        )

    def _check_response(self, response: requests.Response) -> None:
        if not response.ok:
            raise ProviderError(self.name, f"HTTP {response.status_code}")
