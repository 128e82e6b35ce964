"""Path helpers and safe file operations for AutoGenre."""

from __future__ import annotations

from pathlib import Path

from autogenre.core.exceptions import DestinationExistsError
from autogenre.utils.constants import SUPPORTED_EXTENSIONS
from autogenre.utils.logger import get_logger

logger = get_logger("utils.file_utils")


def extension_of(path: Path | str) -> str:
    """Return the lowercased extension of *path* without the leading dot."""
    return Path(path).suffix.lstrip(".").lower()


def is_audio_file(path: Path) -> bool:
    """Check if a file has a supported audio extension.

    Args:
        path: Path to check.

    Returns:
        True if the file extension is a scannable audio format.
    """
    return extension_of(path) in SUPPORTED_EXTENSIONS


def sanitize_component(value: str, extra_allowed: str = "") -> str:
    """Replace every character that is not alphanumeric, space or hyphen with ``_``.

    Args:
        value: Raw metadata value.
        extra_allowed: Additional characters to keep as-is (e.g. ``"."``).

    Returns:
        The sanitized string. Length is preserved.
    """
    return "".join(
        c if c.isalnum() or c in " -" or c in extra_allowed else "_"
        for c in value
    )


def move_no_overwrite(src: Path, dst: Path) -> Path:
    """Move a file with a single rename, refusing to replace an existing file.

    The destination directory must already exist. Cross-volume moves are not
    handled: ``rename`` raises ``OSError`` and the source is left in place.

    Args:
        src: Source file path.
        dst: Destination file path.

    Returns:
        The destination path.

    Raises:
        FileNotFoundError: If the source does not exist.
        DestinationExistsError: If something already exists at *dst*.
        OSError: If the rename itself fails.
    """
    if not src.exists():
        raise FileNotFoundError(f"Source file not found: {src}")
    if dst.exists():
        raise DestinationExistsError(dst)

    src.rename(dst)
    logger.debug("Moved: %s -> %s", src, dst)
    return dst
