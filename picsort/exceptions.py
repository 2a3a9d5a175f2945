"""
Custom exception hierarchy for picsort.

Per-file problems (FileSkipped, MoveError) are recoverable and handled at the
single-file boundary. DirectoryCreateError, ConfigError and DatabaseError stop
the run.
"""
from pathlib import Path

from .models import SkipReason


class PicsortError(Exception):
    """Base exception for all picsort errors."""
    pass


class ConfigError(PicsortError):
    """Raised when the run configuration is invalid."""
    pass


class FileSkipped(PicsortError):
    """Raised when a file cannot be sorted and should be left in place."""
    reason: SkipReason

    def __init__(self, path: Path, message: str = ""):
        self.path = path
        super().__init__(message or f"{path}: {self.reason.value}")


class NotAFileError(FileSkipped):
    """Raised when a traversed entry is no longer a regular file."""
    reason = SkipReason.NOT_A_FILE


class NoMetadataError(FileSkipped):
    """Raised when no EXIF data can be read from a file."""
    reason = SkipReason.NO_METADATA


class MissingDateFieldsError(FileSkipped):
    """Raised when EXIF data is present but holds no usable date."""
    reason = SkipReason.MISSING_DATE_FIELDS


class DirectoryCreateError(PicsortError):
    """Raised when an archive directory cannot be created. Fatal."""
    pass


class MoveError(PicsortError):
    """Raised when a file cannot be moved into the archive."""
    pass


class DatabaseError(PicsortError):
    """Raised when event store operations fail."""
    pass
