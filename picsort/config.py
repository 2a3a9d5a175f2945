"""
Configuration constants and run settings for picsort.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet, Optional

from .exceptions import ConfigError
from .models import ArchiveTemplate

# --- File Type Definitions ---
IMAGE_EXTS = {'.jpg', '.jpeg', '.jpe', '.gif', '.tif', '.tiff', '.heic',
              '.cr2', '.nef', '.arw', '.orf', '.rw2', '.dng'}
VIDEO_EXTS = {'.mov', '.mpg', '.mpeg', '.3g2', '.3gp', '.mp4', '.m4v', '.mts', '.m2ts', '.avi'}
SUPPORTED_EXTS = IMAGE_EXTS | VIDEO_EXTS

# --- Metadata Parsing ---
# Both are required by default. Applied in this order; a later usable tag
# overwrites an earlier one.
MODIFIED_DATE_TAG = 'Image DateTime'
ORIGINAL_DATE_TAG = 'EXIF DateTimeOriginal'
DATE_TAGS = [MODIFIED_DATE_TAG, ORIGINAL_DATE_TAG]

# --- Events ---
DEFAULT_EVENT_LENGTH = 60 * 60 * 2  # 2 hours
# Slack applied around stored event ranges when looking up an event by time.
DEFAULT_EVENT_RANGE = 0
# Used when a file has no parent directory name to suggest from.
DEFAULT_EVENT_NAME = "unsorted"

# --- Organization ---
DEFAULT_ARCHIVE_STRUCTURE = "year/month"

LOG_FILE_NAME = "picsort.log"
DB_FILE_NAME = "picsort_events.db"


def parse_template(structure: str) -> ArchiveTemplate:
    try:
        return ArchiveTemplate.parse(structure)
    except ValueError as e:
        raise ConfigError(str(e)) from e


def normalize_extensions(raw: str) -> FrozenSet[str]:
    """Turns 'jpg, .JPEG,mov' into {'.jpg', '.jpeg', '.mov'}."""
    exts = set()
    for part in raw.split(','):
        part = part.strip().lower()
        if not part:
            continue
        exts.add(part if part.startswith('.') else f'.{part}')
    return frozenset(exts)


@dataclass(frozen=True)
class Settings:
    """
    Static configuration for a single sorting run.
    Loaded once at startup and never mutated.
    """
    src_root: Path
    archive_root: Path
    template: ArchiveTemplate = field(default_factory=lambda: ArchiveTemplate.parse(DEFAULT_ARCHIVE_STRUCTURE))
    event_length: int = DEFAULT_EVENT_LENGTH
    event_range: int = DEFAULT_EVENT_RANGE
    extensions: FrozenSet[str] = frozenset(SUPPORTED_EXTS)
    video_extensions: FrozenSet[str] = frozenset(VIDEO_EXTS)
    skip_dirs: FrozenSet[Path] = frozenset()
    dry_run: bool = False
    assume_yes: bool = False
    allow_partial_dates: bool = False
    db_path: Optional[Path] = None
    report_csv: Optional[Path] = None

    def validate(self):
        if not self.src_root.is_dir():
            raise ConfigError(f"Source directory {self.src_root} does not exist.")
        if self.archive_root.exists() and not self.archive_root.is_dir():
            raise ConfigError(f"Archive root {self.archive_root} is not a directory.")
        if self.event_length <= 0:
            raise ConfigError("Event length must be a positive number of seconds.")
        if self.event_range < 0:
            raise ConfigError("Event range cannot be negative.")
        if not self.extensions:
            raise ConfigError("At least one file extension must be allowed.")

    def is_video(self, path: Path) -> bool:
        return path.suffix.lower() in self.video_extensions
