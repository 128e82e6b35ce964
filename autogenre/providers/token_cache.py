"""Expiry-aware cache for provider access tokens."""

from __future__ import annotations

import threading
import time
from typing import Callable

from autogenre.utils.logger import get_logger

logger = get_logger("providers.token_cache")


class TokenCache:
    """Thread-safe token cache owned by the caller.

    One lock covers the whole read-check-refresh sequence, so concurrent
    lookups against the same provider trigger a single re-authentication.

    Usage:
        cache = TokenCache()
        token = cache.get_or_refresh("spotify", fetch_token)
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        """Initialize the cache.

        Args:
            clock: Returns the current time in seconds; only differences matter.
        """
        self._clock = clock
        self._tokens: dict[str, tuple[str, float]] = {}
        self._lock = threading.Lock()

    def get_or_refresh(self, key: str, fetch: Callable[[], tuple[str, float]]) -> str:
        """Return the cached token for *key*, fetching a new one if it expired.

        Args:
            key: Provider identifier.
            fetch: Called under the lock when a refresh is needed; returns
                ``(token, lifetime_seconds)``. Exceptions propagate and leave
                the cache unchanged.

        Returns:
            A token that was valid at the time of the call.
        """
        with self._lock:
            now = self._clock()
            cached = self._tokens.get(key)
            if cached is not None and cached[1] > now:
                return cached[0]

            logger.debug("Refreshing access token for %s", key)
            token, lifetime = fetch()
            self._tokens[key] = (token, self._clock() + lifetime)
            return token

    def invalidate(self, key: str) -> None:
        """Drop the cached token for *key* (e.g. after a 401)."""
        with self._lock:
            self._tokens.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._tokens.clear()
