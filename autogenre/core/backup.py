"""Metadata backups -- JSON snapshots stored beside the audio file."""

from __future__ import annotations

import json
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from autogenre.core.exceptions import BackupFormatError
from autogenre.core.tag_codec import write_metadata
from autogenre.models.metadata import Metadata
from autogenre.utils.constants import BACKUP_DIR_NAME, BACKUP_JSON_INDENT, BACKUP_SUFFIX
from autogenre.utils.logger import get_logger

logger = get_logger("core.backup")


@dataclass(frozen=True)
class BackupSnapshot:
    """One stored backup document.

    Attributes:
        path: Location of the JSON document.
        original_filename: Name of the audio file it was taken from.
        created_at: Unix timestamp (seconds) encoded in the document name.
        metadata: The snapshotted metadata.
    """

    path: Path
    original_filename: str
    created_at: int
    metadata: Metadata


def backup_dir_for(path: Path | str) -> Path:
    """Return the hidden backup directory used for *path*."""
    return Path(path).parent / BACKUP_DIR_NAME


def _parse_backup_name(name: str) -> tuple[str, int, int] | None:
    """Split ``<filename>.<timestamp>[-n].json`` into (filename, timestamp, n)."""
    if not name.endswith(BACKUP_SUFFIX):
        return None
    stem = name[: -len(BACKUP_SUFFIX)]
    original, sep, stamp = stem.rpartition(".")
    if not sep or not original:
        return None
    stamp, _, counter = stamp.partition("-")
    if not stamp.isdigit() or (counter and not counter.isdigit()):
        return None
    return original, int(stamp), int(counter or 0)


class BackupManager:
    """Creates and restores metadata snapshots.

    Backups live in ``<file dir>/.autogenre_backups/`` and are named
    ``<filename>.<unix timestamp>.json``. They are append-only: a name that
    is already taken gets a ``-<n>`` suffix, and nothing is ever pruned.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.time,
        writer: Callable[[Path, Metadata], None] = write_metadata,
    ) -> None:
        """Initialize the manager.

        Args:
            clock: Returns the current Unix time; used for backup names.
            writer: Function that writes Metadata onto an audio file.
        """
        self._clock = clock
        self._write_metadata = writer

    def backup(self, path: Path | str, metadata: Metadata) -> Path:
        """Write a snapshot of *metadata* for the audio file at *path*.

        Args:
            path: The audio file the snapshot belongs to.
            metadata: Metadata to snapshot (normally the file's current tags).

        Returns:
            Path of the new backup document.

        Raises:
            OSError: If the directory or the document cannot be written.
        """
        path = Path(path)
        backup_dir = backup_dir_for(path)
        backup_dir.mkdir(parents=True, exist_ok=True)

        timestamp = int(self._clock())
        document = json.dumps(metadata.to_dict(), indent=BACKUP_JSON_INDENT)

        counter = 0
        while True:
            suffix = f"{timestamp}" if counter == 0 else f"{timestamp}-{counter}"
            backup_path = backup_dir / f"{path.name}.{suffix}{BACKUP_SUFFIX}"
            try:
                # "x" mode: never replace an existing snapshot
                with open(backup_path, "x", encoding="utf-8") as f:
                    f.write(document)
                break
            except FileExistsError:
                counter += 1

        logger.info("Backed up metadata: %s -> %s", path.name, backup_path)
        return backup_path

    def load(self, backup_path: Path | str) -> BackupSnapshot:
        """Read a backup document.

        Raises:
            OSError: If the document cannot be read.
            BackupFormatError: If it is not a valid metadata snapshot.
        """
        backup_path = Path(backup_path)
        with open(backup_path, encoding="utf-8") as f:
            raw = f.read()

        try:
            metadata = Metadata.from_dict(json.loads(raw))
        except (json.JSONDecodeError, ValueError) as e:
            raise BackupFormatError(f"Invalid backup document {backup_path}: {e}") from e

        parsed = _parse_backup_name(backup_path.name)
        original, created_at = (parsed[0], parsed[1]) if parsed else (backup_path.name, 0)
        return BackupSnapshot(
            path=backup_path,
            original_filename=original,
            created_at=created_at,
            metadata=metadata,
        )

    def restore(self, backup_path: Path | str, original_path: Path | str) -> Metadata:
        """Write a snapshot back onto the audio file.

        Only fields present in the snapshot are written; the same partial
        write caveat as any tag write applies.

        Returns:
            The restored Metadata.
        """
        snapshot = self.load(backup_path)
        self._write_metadata(Path(original_path), snapshot.metadata)
        logger.info("Restored metadata: %s -> %s", Path(backup_path).name, original_path)
        return snapshot.metadata

    def list_backups(self, path: Path | str) -> list[BackupSnapshot]:
        """Return every readable snapshot for the audio file at *path*, oldest first."""
        path = Path(path)
        backup_dir = backup_dir_for(path)
        if not backup_dir.is_dir():
            return []

        found: list[tuple[int, int, BackupSnapshot]] = []
        for candidate in backup_dir.iterdir():
            parsed = _parse_backup_name(candidate.name)
            if parsed is None or parsed[0] != path.name:
                continue
            try:
                found.append((parsed[1], parsed[2], self.load(candidate)))
            except (OSError, BackupFormatError) as e:
                logger.warning("Skipping unreadable backup %s: %s", candidate.name, e)

        found.sort(key=lambda item: item[:2])
        return [snapshot for _, _, snapshot in found]
