"""File organizer -- pattern-based folder moves and metadata-based renames."""

from __future__ import annotations

from pathlib import Path

from autogenre.core.exceptions import DestinationExistsError
from autogenre.models.metadata import Metadata
from autogenre.utils.constants import (
    UNKNOWN_ARTIST,
    UNKNOWN_FOLDER_VALUE,
    UNKNOWN_TITLE,
)
from autogenre.utils.file_utils import move_no_overwrite, sanitize_component
from autogenre.utils.logger import get_logger

logger = get_logger("core.file_organizer")


class FileOrganizer:
    """Moves and renames audio files based on their metadata.

    Pattern folders (``organize``):
        <base>/<expanded pattern>/<original filename>

    Renames (``rename_file``):
        <same directory>/<Artist> - <Title>.<ext>

    Neither operation ever overwrites: an existing destination raises
    ``DestinationExistsError`` and the source is left where it was. Both
    use a single filesystem rename, so they are atomic at the directory
    entry level when source and destination share a volume.
    """

    def expand_pattern(self, pattern: str, metadata: Metadata) -> str:
        """Substitute the ``{genre}``, ``{artist}``, ``{album}``, ``{title}``
        and ``{year}`` placeholders in *pattern*.

        Values are sanitized (anything but alphanumerics, spaces and hyphens
        becomes ``_``); absent values become ``Unknown``. Any other text in
        the pattern, including ``/`` separators, is kept as-is.
        """

        def _text(value: str | None) -> str:
            return sanitize_component(value) if value is not None else UNKNOWN_FOLDER_VALUE

        year = str(metadata.year) if metadata.year is not None else UNKNOWN_FOLDER_VALUE
        return (
            pattern
            .replace("{genre}", _text(metadata.genre))
            .replace("{artist}", _text(metadata.artist))
            .replace("{album}", _text(metadata.album))
            .replace("{title}", _text(metadata.title))
            .replace("{year}", year)
        )

    def preview_organize(
        self,
        path: Path | str,
        metadata: Metadata,
        base_folder: Path | str,
        pattern: str,
    ) -> Path:
        """Return where ``organize`` would move *path*, without touching disk."""
        path = Path(path)
        return Path(base_folder) / self.expand_pattern(pattern, metadata) / path.name

    def organize(
        self,
        path: Path | str,
        metadata: Metadata,
        base_folder: Path | str,
        pattern: str,
    ) -> Path:
        """Move a file into the folder derived from *pattern* under *base_folder*.

        The target folder (and any missing parents) is created first. The
        original filename is preserved.

        Args:
            path: File to move.
            metadata: Metadata used to expand the pattern.
            base_folder: Root folder for the organized layout.
            pattern: Folder pattern, e.g. ``"{genre}/{artist}"``.

        Returns:
            The new path of the file.

        Raises:
            FileNotFoundError: If *path* does not exist.
            DestinationExistsError: If a file already exists at the destination.
            OSError: If the folder cannot be created or the rename fails.
        """
        path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(f"Cannot organize: file not found: {path}")

        dest = self.preview_organize(path, metadata, base_folder, pattern)
        if dest.exists():
            logger.warning("Not organizing %s: %s already exists", path.name, dest)
            raise DestinationExistsError(dest)

        dest.parent.mkdir(parents=True, exist_ok=True)
        move_no_overwrite(path, dest)
        logger.info("Organized: %s -> %s", path, dest)
        return dest

    def build_filename(self, path: Path | str, metadata: Metadata) -> str:
        """Return ``"<Artist> - <Title>.<ext>"`` for *path*.

        Sanitization keeps alphanumerics, spaces, hyphens and dots. The
        original extension is kept with its case.

        Raises:
            ValueError: If *path* has no extension.
        """
        extension = Path(path).suffix.lstrip(".")
        if not extension:
            raise ValueError(f"Cannot determine file extension: {path}")

        artist = (
            sanitize_component(metadata.artist, extra_allowed=".")
            if metadata.artist is not None
            else UNKNOWN_ARTIST
        )
        title = (
            sanitize_component(metadata.title, extra_allowed=".")
            if metadata.title is not None
            else UNKNOWN_TITLE
        )
        return f"{artist} - {title}.{extension}"

    def preview_rename(self, path: Path | str, metadata: Metadata) -> Path:
        """Return the path ``rename_file`` would produce, without touching disk."""
        path = Path(path)
        return path.parent / self.build_filename(path, metadata)

    def rename_file(self, path: Path | str, metadata: Metadata) -> Path:
        """Rename a file in place to ``"<Artist> - <Title>.<ext>"``.

        Returns:
            The new path (equal to *path* if the name is already correct).

        Raises:
            FileNotFoundError: If *path* does not exist.
            DestinationExistsError: If another file already has the new name.
            ValueError: If *path* has no extension.
        """
        path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(f"Cannot rename: file not found: {path}")

        dest = self.preview_rename(path, metadata)
        if dest == path:
            logger.debug("Already named correctly: %s", path.name)
            return path
        if dest.exists():
            logger.warning("Not renaming %s: %s already exists", path.name, dest.name)
            raise DestinationExistsError(dest)

        move_no_overwrite(path, dest)
        logger.info("Renamed: %s -> %s", path.name, dest.name)
        return dest
