"""Duplicate detection by normalized (artist, title) equality."""

from __future__ import annotations

from autogenre.models.metadata import AudioFileEntry, Metadata
from autogenre.utils.logger import get_logger

logger = get_logger("core.duplicate_detector")


def _normalize(value: str | None) -> str:
    return value.strip().lower() if value else ""


def normalize_key(metadata: Metadata | None) -> tuple[str, str] | None:
    """Return the (artist, title) comparison key, or None if either part is empty.

    Untagged tracks get no key so they are never grouped with each other.
    """
    if metadata is None:
        return None
    artist = _normalize(metadata.artist)
    title = _normalize(metadata.title)
    if not artist or not title:
        return None
    return artist, title


class DuplicateDetector:
    """Groups inventory entries whose normalized artist and title match.

    Grouping is first-seen-wins in inventory order: an entry joins the group
    of the earliest unvisited entry it matches and belongs to at most one
    group. Sort the inventory first if the grouping must be stable across
    scans.
    """

    def find_duplicates(self, entries: list[AudioFileEntry]) -> list[list[int]]:
        """Return groups of indices into *entries*, each of size >= 2.

        Args:
            entries: Scan inventory.

        Returns:
            List of groups; each group is ascending, first index is the
            representative.
        """
        keys = [normalize_key(entry.current_metadata) for entry in entries]
        visited = [False] * len(entries)
        groups: list[list[int]] = []

        for i, key_i in enumerate(keys):
            if visited[i] or key_i is None:
                continue

            group = [i]
            for j in range(i + 1, len(entries)):
                if not visited[j] and keys[j] == key_i:
                    group.append(j)
                    visited[j] = True

            if len(group) > 1:
                groups.append(group)

        logger.info(
            "Found %d duplicate groups among %d entries", len(groups), len(entries)
        )
        return groups


def find_duplicates(entries: list[AudioFileEntry]) -> list[list[int]]:
    """Module-level shortcut for ``DuplicateDetector().find_duplicates``."""
    return DuplicateDetector().find_duplicates(entries)
