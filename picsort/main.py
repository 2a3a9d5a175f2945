import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from . import config
from .core import PicsortApp
from .exceptions import ConfigError, DatabaseError, DirectoryCreateError

def setup_logging(log_dir: Optional[Path], verbose: bool):
    """Sets up logging to the console and, when log_dir is given, a file in it."""
    log_level = logging.DEBUG if verbose else logging.INFO

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_dir is not None:
        # Create the archive root if it doesn't exist so we can log there
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_dir / config.LOG_FILE_NAME, encoding='utf-8'))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=handlers,
        force=True,
    )

    # Silence chatty libraries
    logging.getLogger("exifread").setLevel(logging.ERROR)

def parse_args(argv=None):
    p = argparse.ArgumentParser(description="picsort: sort photos into a dated archive by event")

    p.add_argument("src", type=Path, help="Directory of unsorted pictures")
    p.add_argument("archive", type=Path, help="Archive root")

    p.add_argument("--structure", default=config.DEFAULT_ARCHIVE_STRUCTURE,
                   help="Date folders under the archive, e.g. 'year/month' or 'year/month/day'")
    p.add_argument("--event-hours", type=float, default=config.DEFAULT_EVENT_LENGTH / 3600,
                   help="Warn about a new event when pictures are this many hours apart (default: 2)")
    p.add_argument("--ext", default=None,
                   help="Comma separated extensions to sort (default: common photo and video types)")
    p.add_argument("--db", type=Path, nargs="?", const=True, default=None,
                   help=f"SQLite event database; remembers event time ranges between runs "
                        f"(without a path: ARCHIVE/{config.DB_FILE_NAME})")
    p.add_argument("--event-range-hours", type=float, default=config.DEFAULT_EVENT_RANGE / 3600,
                   help="Slack around stored events when matching a picture to one (requires --db)")
    p.add_argument("--allow-partial-dates", action="store_true",
                   help="Sort pictures that carry only one of the two EXIF dates instead of skipping them")
    p.add_argument("-y", "--yes", action="store_true", help="Accept every suggested event name without prompting")
    p.add_argument("--dry-run", action="store_true", help="Simulate actions without modifying disk")
    p.add_argument("--skip-dirs-file", type=Path, default=None, help="File containing paths to ignore")
    p.add_argument("--report-csv", type=Path, default=None, help="Write a CSV of what happened to each file")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    return p.parse_args(argv)

def load_skip_dirs(skip_file: Path) -> set[Path]:
    if not skip_file or not skip_file.exists():
        return set()

    skips = set()
    with skip_file.open("r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith("#"):
                skips.add(Path(line))
    return skips

def build_settings(args) -> config.Settings:
    archive_root = args.archive.resolve()
    if args.db is True:
        db_path = archive_root / config.DB_FILE_NAME
    else:
        db_path = args.db.resolve() if args.db else None

    extensions = config.normalize_extensions(args.ext) if args.ext is not None else frozenset(config.SUPPORTED_EXTS)
    settings = config.Settings(
        src_root=args.src.resolve(),
        archive_root=archive_root,
        template=config.parse_template(args.structure),
        event_length=int(args.event_hours * 3600),
        event_range=int(args.event_range_hours * 3600),
        extensions=extensions,
        skip_dirs=frozenset(load_skip_dirs(args.skip_dirs_file)),
        dry_run=args.dry_run,
        assume_yes=args.yes,
        allow_partial_dates=args.allow_partial_dates,
        db_path=db_path,
        report_csv=args.report_csv,
    )
    settings.validate()
    return settings

def main(argv=None):
    args = parse_args(argv)

    try:
        settings = build_settings(args)
    except ConfigError as e:
        setup_logging(None, args.verbose)
        logging.error(f"Invalid configuration: {e}")
        sys.exit(1)

    try:
        setup_logging(None if settings.dry_run else settings.archive_root, args.verbose)
    except OSError as e:
        setup_logging(None, args.verbose)
        logging.critical(f"FAIL: cannot create archive root {settings.archive_root} (Permission denied?): {e}")
        sys.exit(1)

    logging.info("=== picsort Started ===")
    logging.info(f"Source:  {settings.src_root}")
    logging.info(f"Archive: {settings.archive_root}")

    app = PicsortApp(settings)

    try:
        app.sort()
    except KeyboardInterrupt:
        logging.warning("Operation cancelled by user. Files already sorted stay in the archive.")
        sys.exit(1)
    except DirectoryCreateError as e:
        logging.critical(f"{e}. Stopping so no files are left half sorted.")
        sys.exit(1)
    except DatabaseError as e:
        logging.critical(f"Event database error: {e}")
        sys.exit(1)
    except Exception:
        logging.exception("Fatal error during sorting.")
        sys.exit(1)

if __name__ == "__main__":
    main()
