"""Metadata updater -- backs up current tags, then writes new ones.

The write is refused unless a requested backup fully succeeded.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

from autogenre.core.backup import BackupManager
from autogenre.core.exceptions import (
    BackupFailedError,
    TagError,
    TagNotFoundError,
    UnsupportedFormatError,
)
from autogenre.core.file_organizer import FileOrganizer
from autogenre.core.tag_codec import TagCodec, get_codec
from autogenre.models.config import AppSettings
from autogenre.models.metadata import AudioFileEntry, Metadata
from autogenre.utils.logger import get_logger

logger = get_logger("core.metadata_updater")


class MetadataUpdater:
    """Applies new metadata to files, honouring the backup/rename/organize toggles.

    Usage:
        updater = MetadataUpdater()
        updater.update(path, Metadata(genre="House"))
    """

    def __init__(
        self,
        backup_manager: BackupManager | None = None,
        organizer: FileOrganizer | None = None,
        codec_lookup: Callable[[Path], TagCodec] = get_codec,
    ) -> None:
        self._backups = backup_manager or BackupManager()
        self._organizer = organizer or FileOrganizer()
        self._codec_lookup = codec_lookup

    def update(self, path: Path | str, metadata: Metadata, backup: bool = True) -> Path | None:
        """Write *metadata* onto *path*, snapshotting the current tags first.

        Args:
            path: Audio file to update.
            metadata: New values; absent fields keep their current value.
            backup: If True, the current tags are backed up before writing.

        Returns:
            The backup document path, or None if no backup was requested.

        Raises:
            UnsupportedFormatError: If the format has no tag codec.
            BackupFailedError: If the backup was requested but could not be
                made. The file is not modified.
            TagError / OSError: If the write itself fails.
        """
        path = Path(path)
        codec = self._codec_lookup(path)

        backup_path = None
        if backup:
            backup_path = self._backup_current(codec, path)

        codec.write(path, metadata)
        logger.info("Updated metadata: %s", path.name)
        return backup_path

    def apply(
        self,
        entry: AudioFileEntry,
        metadata: Metadata,
        settings: AppSettings,
        base_folder: Path | str | None = None,
    ) -> Path:
        """Write tags, then rename and/or organize the file per *settings*.

        The rename and the organize step both use the merged metadata (the
        entry's current tags overlaid with *metadata*).

        Args:
            entry: Inventory entry for the file.
            metadata: New metadata to apply.
            settings: Toggles and folder pattern.
            base_folder: Root for organized folders; required when
                ``settings.organize_files`` is enabled.

        Returns:
            The file's final path.

        Raises:
            ValueError: If organizing is enabled without a base folder.
        """
        if settings.organize_files and base_folder is None:
            raise ValueError("organize_files is enabled but no base folder was given")

        self.update(entry.path, metadata, backup=settings.backup_before_changes)

        current = entry.current_metadata or Metadata()
        effective = current.merged_with(metadata)
        path = entry.path

        if settings.rename_files:
            path = self._organizer.rename_file(path, effective)
        if settings.organize_files:
            path = self._organizer.organize(
                path, effective, base_folder, settings.folder_pattern
            )
        return path

    def _backup_current(self, codec: TagCodec, path: Path) -> Path:
        try:
            current = codec.read(path)
        except TagNotFoundError:
            # Untagged file: the snapshot records that every field was absent
            logger.debug("No tags to back up for %s, storing empty snapshot", path.name)
            current = Metadata()
        except (TagError, UnsupportedFormatError, OSError) as e:
            logger.error("Cannot read current metadata for backup of %s: %s", path.name, e)
            raise BackupFailedError(
                f"Cannot read current metadata for backup: {path}"
            ) from e

        try:
            return self._backups.backup(path, current)
        except OSError as e:
            logger.error("Backup failed for %s: %s", path.name, e)
            raise BackupFailedError(f"Backup failed for {path}: {e}") from e
