"""Exception hierarchy for AutoGenre.

I/O problems are not wrapped: callers receive the builtin ``OSError``
subclasses verbatim. Everything raised here derives from ``AutoGenreError``.
"""

from __future__ import annotations

from pathlib import Path


class AutoGenreError(Exception):
    """Base class for all AutoGenre errors."""


# --- Tag codec ---


class TagError(AutoGenreError):
    """Base class for tag reading/writing failures."""

    def __init__(self, path: Path | str, message: str) -> None:
        self.path = Path(path)
        super().__init__(f"{message}: {path}")


class TagNotFoundError(TagError):
    """The file contains no tag block at all."""

    def __init__(self, path: Path | str) -> None:
        super().__init__(path, "No tag block found")


class TagFormatError(TagError):
    """The container or its tag block is malformed."""


class TagWriteError(TagError):
    """Tags could not be encoded or saved."""


class UnsupportedFormatError(AutoGenreError, ValueError):
    """No tag codec exists for the file's extension."""

    def __init__(self, extension: str) -> None:
        self.extension = extension
        super().__init__(f"Unsupported file format for tags: {extension or '(none)'}")


# --- File organization ---


class DestinationExistsError(AutoGenreError, FileExistsError):
    """A rename/move target already exists; nothing was overwritten."""

    def __init__(self, destination: Path | str) -> None:
        self.destination = Path(destination)
        super().__init__(f"File already exists at destination: {destination}")


# --- Backups ---


class BackupError(AutoGenreError):
    """Base class for backup/restore failures."""


class BackupFormatError(BackupError):
    """A backup document could not be parsed into Metadata."""


class BackupFailedError(BackupError):
    """A requested backup did not complete, so the dependent write was refused."""


# --- Suggestion providers ---


class ProviderError(AutoGenreError):
    """A metadata suggestion provider failed (network, HTTP, parsing)."""

    def __init__(self, provider: str, message: str) -> None:
        self.provider = provider
        super().__init__(f"{provider}: {message}")


class ProviderAuthError(ProviderError):
    """Provider credentials are missing or were rejected."""
