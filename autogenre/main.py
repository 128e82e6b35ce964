"""AutoGenre -- command-line entry point."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from autogenre.config import load_settings
from autogenre.core.backup import BackupManager
from autogenre.core.duplicate_detector import DuplicateDetector
from autogenre.core.exceptions import AutoGenreError, TagNotFoundError
from autogenre.core.file_organizer import FileOrganizer
from autogenre.core.metadata_updater import MetadataUpdater
from autogenre.core.scanner import FileScanner
from autogenre.core.tag_codec import read_metadata
from autogenre.models.config import AppSettings
from autogenre.models.metadata import Metadata
from autogenre.providers.aggregator import SuggestionAggregator, build_default_providers
from autogenre.providers.token_cache import TokenCache
from autogenre.utils.constants import APP_NAME, APP_VERSION
from autogenre.utils.logger import get_logger, setup_logger

logger = get_logger("main")


def _metadata_from_args(args: argparse.Namespace) -> Metadata:
    return Metadata(
        title=args.title,
        artist=args.artist,
        album=args.album,
        genre=args.genre,
        year=args.year,
    )


def _current_metadata(path: Path) -> Metadata:
    try:
        return read_metadata(path)
    except TagNotFoundError:
        return Metadata()


def _cmd_scan(args: argparse.Namespace, settings: AppSettings) -> int:
    entries = FileScanner().scan(args.directory)
    if args.json:
        print(json.dumps([e.to_dict() for e in entries], indent=2))
        return 0

    for entry in entries:
        md = entry.current_metadata
        if md is None:
            print(f"{entry.path}\t(unreadable)")
        else:
            print(f"{entry.path}\t{md.artist or '-'}\t{md.title or '-'}\t{md.genre or '-'}")
    for ext, count in sorted(FileScanner.format_breakdown(entries).items()):
        print(f"{ext}: {count}")
    return 0


def _cmd_duplicates(args: argparse.Namespace, settings: AppSettings) -> int:
    entries = sorted(FileScanner().scan(args.directory), key=lambda e: str(e.path))
    groups = DuplicateDetector().find_duplicates(entries)
    for number, group in enumerate(groups, start=1):
        print(f"Group {number}:")
        for index in group:
            print(f"  {entries[index].path}")
    if not groups:
        print("No duplicates found.")
    return 0


def _cmd_suggest(args: argparse.Namespace, settings: AppSettings) -> int:
    providers = build_default_providers(settings, TokenCache())
    suggestions = SuggestionAggregator(providers).collect(args.artist, args.title)
    if args.json:
        print(json.dumps([s.to_dict() for s in suggestions], indent=2))
        return 0
    for suggestion in suggestions:
        print(
            f"{suggestion.source}: genre={suggestion.genre or '-'} "
            f"artist={suggestion.artist or '-'} ({suggestion.confidence.value})"
        )
    return 0


def _cmd_update(args: argparse.Namespace, settings: AppSettings) -> int:
    metadata = _metadata_from_args(args)
    if metadata.is_empty:
        logger.error("Nothing to update: pass at least one of --title/--artist/--album/--genre/--year")
        return 1

    backup = settings.backup_before_changes and not args.no_backup
    backup_path = MetadataUpdater().update(args.file, metadata, backup=backup)
    if backup_path is not None:
        print(f"Backup: {backup_path}")
    return 0


def _cmd_organize(args: argparse.Namespace, settings: AppSettings) -> int:
    pattern = args.pattern or settings.folder_pattern
    metadata = _current_metadata(args.file)
    organizer = FileOrganizer()
    if args.dry_run:
        print(organizer.preview_organize(args.file, metadata, args.base, pattern))
        return 0
    print(organizer.organize(args.file, metadata, args.base, pattern))
    return 0


def _cmd_rename(args: argparse.Namespace, settings: AppSettings) -> int:
    metadata = _current_metadata(args.file)
    organizer = FileOrganizer()
    if args.dry_run:
        print(organizer.preview_rename(args.file, metadata))
        return 0
    print(organizer.rename_file(args.file, metadata))
    return 0


def _cmd_restore(args: argparse.Namespace, settings: AppSettings) -> int:
    restored = BackupManager().restore(args.backup, args.file)
    print(json.dumps(restored.to_dict(), indent=2))
    return 0


def _cmd_backups(args: argparse.Namespace, settings: AppSettings) -> int:
    snapshots = BackupManager().list_backups(args.file)
    for snapshot in snapshots:
        print(f"{snapshot.created_at}\t{snapshot.path}")
    if not snapshots:
        print(f"No backups for {args.file}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="autogenre",
        description="Scan, tag, deduplicate and organize a local music library.",
    )
    parser.add_argument("--version", action="version", version=f"{APP_NAME} {APP_VERSION}")
    parser.add_argument("--config", type=Path, help="Path to settings.yaml")
    parser.add_argument("--log-level", help="Override the configured log level")
    sub = parser.add_subparsers(dest="command", required=True)

    scan = sub.add_parser("scan", help="List audio files and their tags")
    scan.add_argument("directory", type=Path)
    scan.add_argument("--json", action="store_true", help="Print the inventory as JSON")
    scan.set_defaults(handler=_cmd_scan)

    dupes = sub.add_parser("duplicates", help="Find files with the same artist and title")
    dupes.add_argument("directory", type=Path)
    dupes.set_defaults(handler=_cmd_duplicates)

    suggest = sub.add_parser("suggest", help="Ask online providers for a genre")
    suggest.add_argument("artist")
    suggest.add_argument("title")
    suggest.add_argument("--json", action="store_true")
    suggest.set_defaults(handler=_cmd_suggest)

    update = sub.add_parser("update", help="Write tags (backing up the current ones)")
    update.add_argument("file", type=Path)
    update.add_argument("--title")
    update.add_argument("--artist")
    update.add_argument("--album")
    update.add_argument("--genre")
    update.add_argument("--year", type=int)
    update.add_argument("--no-backup", action="store_true", help="Skip the backup snapshot")
    update.set_defaults(handler=_cmd_update)

    organize = sub.add_parser("organize", help="Move a file into its pattern folder")
    organize.add_argument("file", type=Path)
    organize.add_argument("base", type=Path, help="Root folder for the organized layout")
    organize.add_argument("--pattern", help="Folder pattern, e.g. '{genre}/{artist}'")
    organize.add_argument("--dry-run", action="store_true")
    organize.set_defaults(handler=_cmd_organize)

    rename = sub.add_parser("rename", help="Rename a file to 'Artist - Title.ext'")
    rename.add_argument("file", type=Path)
    rename.add_argument("--dry-run", action="store_true")
    rename.set_defaults(handler=_cmd_rename)

    restore = sub.add_parser("restore", help="Write a backup snapshot back onto a file")
    restore.add_argument("backup", type=Path)
    restore.add_argument("file", type=Path)
    restore.set_defaults(handler=_cmd_restore)

    backups = sub.add_parser("backups", help="List backup snapshots for a file")
    backups.add_argument("file", type=Path)
    backups.set_defaults(handler=_cmd_backups)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, load settings, set up logging and run one command."""
    args = build_parser().parse_args(argv)

    settings = load_settings(args.config)
    setup_logger(
        log_level=args.log_level or settings.log_level,
        log_file=settings.log_file,
    )
    logger.debug("%s v%s: %s", APP_NAME, APP_VERSION, args.command)

    try:
        return args.handler(args, settings)
    except (AutoGenreError, OSError) as e:
        logger.error("%s failed: %s", args.command, e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
