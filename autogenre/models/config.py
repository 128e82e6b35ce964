"""Typed settings model for AutoGenre.

Holds the folder-naming pattern, the behaviour toggles consumed by the
organizer/updater, and provider credentials.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass

from autogenre.utils.constants import (
    DEFAULT_BACKUP_BEFORE_CHANGES,
    DEFAULT_FOLDER_PATTERN,
    DEFAULT_LOG_LEVEL,
    DEFAULT_ORGANIZE_FILES,
    DEFAULT_PROVIDER_TIMEOUT_SECONDS,
    DEFAULT_RENAME_FILES,
)


@dataclass
class AppSettings:
    """Strongly-typed settings for AutoGenre.

    Attributes:
        spotify_client_id: Spotify API client ID (env ``SPOTIFY_CLIENT_ID`` wins).
        spotify_client_secret: Spotify API client secret
            (env ``SPOTIFY_CLIENT_SECRET`` wins).
        folder_pattern: Folder pattern for ``organize`` (supports
            ``{genre}``, ``{artist}``, ``{album}``, ``{title}``, ``{year}``).
        backup_before_changes: Snapshot current tags before every tag write.
        organize_files: Move files into pattern folders after tagging.
        rename_files: Rename files to ``Artist - Title.ext`` after tagging.
        provider_timeout: HTTP timeout in seconds for provider requests.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        log_file: Path to log file (None = console only).
    """

    # --- Credentials ---
    spotify_client_id: str = ""
    spotify_client_secret: str = ""

    # --- File Organization ---
    folder_pattern: str = DEFAULT_FOLDER_PATTERN
    backup_before_changes: bool = DEFAULT_BACKUP_BEFORE_CHANGES
    organize_files: bool = DEFAULT_ORGANIZE_FILES
    rename_files: bool = DEFAULT_RENAME_FILES

    # --- Providers ---
    provider_timeout: float = DEFAULT_PROVIDER_TIMEOUT_SECONDS

    # --- Logging ---
    log_level: str = DEFAULT_LOG_LEVEL
    log_file: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> AppSettings:
        """Create settings from a raw dictionary (e.g., from YAML).

        Unknown keys and null values are ignored so older settings files
        keep loading after fields are added or removed.
        """
        known_fields = set(cls.__dataclass_fields__)
        filtered = {k: v for k, v in data.items() if k in known_fields and v is not None}
        return cls(**filtered)

    def to_dict(self) -> dict:
        return asdict(self)
