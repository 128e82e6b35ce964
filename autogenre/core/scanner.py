"""File scanner -- discovers audio files and reads their tags into an inventory."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable, Generator

from autogenre.core.exceptions import TagError, UnsupportedFormatError
from autogenre.core.tag_codec import read_metadata
from autogenre.models.metadata import AudioFileEntry, Metadata
from autogenre.utils.file_utils import is_audio_file
from autogenre.utils.logger import get_logger

logger = get_logger("core.scanner")


class FileScanner:
    """Walks a directory tree (following symlinks) and builds AudioFileEntry objects.

    Usage:
        scanner = FileScanner()
        entries = scanner.scan("/path/to/music")
    """

    def __init__(
        self,
        progress_callback: Callable[[int, int, str], None] | None = None,
        metadata_reader: Callable[[Path], Metadata] = read_metadata,
    ) -> None:
        """Initialize the scanner.

        Args:
            progress_callback: Optional callback(current, total, filename)
                called for each file cataloged.
            metadata_reader: Function used to read tags from a file.
        """
        self._progress_callback = progress_callback
        self._read_metadata = metadata_reader

    def scan(self, root: Path | str) -> list[AudioFileEntry]:
        """Scan a directory tree and return an inventory in walk order.

        A file whose tags cannot be read still appears, with
        ``current_metadata=None``; one bad file never aborts the scan.

        Args:
            root: Root directory to scan.

        Returns:
            List of entries for every file with a scannable extension.

        Raises:
            FileNotFoundError: If root directory does not exist.
            NotADirectoryError: If root is not a directory.
        """
        root = Path(root)
        if not root.exists():
            raise FileNotFoundError(f"Directory not found: {root}")
        if not root.is_dir():
            raise NotADirectoryError(f"Not a directory: {root}")

        logger.info("Scanning directory: %s", root)

        # Collect first so progress reports an accurate total
        audio_files = list(self._discover_audio_files(root))
        total = len(audio_files)
        logger.info("Found %d audio files", total)

        entries: list[AudioFileEntry] = []
        for idx, file_path in enumerate(audio_files, start=1):
            entries.append(self._create_entry(file_path))
            if self._progress_callback:
                self._progress_callback(idx, total, file_path.name)

        untagged = sum(1 for e in entries if e.current_metadata is None)
        logger.info(
            "Scan complete: %d files cataloged (%d without readable tags)",
            len(entries), untagged,
        )
        return entries

    @staticmethod
    def format_breakdown(entries: list[AudioFileEntry]) -> dict[str, int]:
        """Count entries per extension, most common first."""
        breakdown: dict[str, int] = {}
        for entry in entries:
            breakdown[entry.extension] = breakdown.get(entry.extension, 0) + 1
        return dict(sorted(breakdown.items(), key=lambda x: x[1], reverse=True))

    def _discover_audio_files(self, root: Path) -> Generator[Path, None, None]:
        """Yield audio files under *root* in walk order.

        Symlinked directories are followed. A directory whose real path is
        one of its own ancestors on the current walk path is a link cycle and
        is not descended into; other aliases of the same directory are walked.
        """
        # dirpath -> real paths of the directories above it
        ancestors: dict[str, frozenset[str]] = {}

        def _on_walk_error(error: OSError) -> None:
            logger.warning("Skipping unreadable directory: %s", error)

        for dirpath, dirnames, filenames in os.walk(
            root, followlinks=True, onerror=_on_walk_error
        ):
            real = os.path.realpath(dirpath)
            chain = ancestors.pop(dirpath, frozenset())
            if real in chain:
                logger.debug("Symlink cycle, not descending into: %s", dirpath)
                dirnames[:] = []
                continue
            chain = chain | {real}
            for name in dirnames:
                ancestors[os.path.join(dirpath, name)] = chain

            for name in filenames:
                entry = Path(dirpath) / name
                if is_audio_file(entry) and entry.is_file():
                    yield entry

    def _create_entry(self, file_path: Path) -> AudioFileEntry:
        """Build an entry, downgrading any read failure to "no metadata"."""
        try:
            metadata = self._read_metadata(file_path)
        except (TagError, UnsupportedFormatError, OSError) as e:
            logger.debug("No readable tags for %s: %s", file_path.name, e)
            metadata = None
        return AudioFileEntry.from_path(file_path, metadata)
