import calendar
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple


class SkipReason(Enum):
    NOT_A_FILE = "not a file"
    NO_METADATA = "no metadata"
    MISSING_DATE_FIELDS = "missing date fields"


class DateField(Enum):
    YEAR = "year"
    MONTH = "month"
    DAY = "day"
    HOUR = "hour"
    MINUTE = "minute"
    SECOND = "second"


@dataclass(frozen=True)
class CaptureDate:
    """
    Calendar breakdown of the moment a photo was taken, to the second.
    """
    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0
    second: int = 0

    def __post_init__(self):
        # Let datetime do the range checking (month 0, Feb 30, hour 24...)
        self.to_datetime()

    @classmethod
    def from_datetime(cls, dt: datetime) -> "CaptureDate":
        return cls(dt.year, dt.month, dt.day, dt.hour, dt.minute, dt.second)

    def to_datetime(self) -> datetime:
        return datetime(self.year, self.month, self.day, self.hour, self.minute, self.second)

    @property
    def instant(self) -> int:
        """Epoch seconds, reading the fields as UTC so gaps ignore DST shifts."""
        return calendar.timegm((self.year, self.month, self.day, self.hour, self.minute, self.second))

    def component(self, field: DateField) -> int:
        return getattr(self, field.value)

    def pretty(self) -> str:
        return f"{self.year}/{self.month:02d}/{self.day:02d} {self.hour:02d}:{self.minute:02d}:{self.second:02d}"


@dataclass(frozen=True)
class ArchiveTemplate:
    """Ordered date components that make up the folders under the archive root."""
    fields: Tuple[DateField, ...]

    @classmethod
    def parse(cls, structure: str) -> "ArchiveTemplate":
        """
        Parses a structure such as 'year/month' or 'year/month/day'.
        Raises ValueError on unknown or missing selectors.
        """
        names = [part.strip().lower() for part in structure.split('/') if part.strip()]
        if not names:
            raise ValueError("Archive structure needs at least one date field.")

        fields = []
        for name in names:
            try:
                fields.append(DateField(name))
            except ValueError:
                valid = ", ".join(f.value for f in DateField)
                raise ValueError(f"Unknown date field '{name}' in archive structure (expected one of: {valid})") from None
        return cls(tuple(fields))

    def __str__(self) -> str:
        return "/".join(f.value for f in self.fields)


@dataclass
class EventState:
    """
    What the tracker remembers about the last file it committed.
    """
    last_capture: Optional[CaptureDate] = None
    last_location: Optional[str] = None
    last_event_name: Optional[str] = None

    @property
    def last_instant(self) -> Optional[int]:
        return self.last_capture.instant if self.last_capture else None

    @property
    def is_empty(self) -> bool:
        return self.last_capture is None and self.last_location is None


@dataclass(frozen=True)
class Event:
    """A named span of time stored in the event database."""
    name: str
    begin_instant: int
    end_instant: int

    def __post_init__(self):
        if self.begin_instant > self.end_instant:
            raise ValueError(f"Event '{self.name}' begins after it ends.")

    def encloses(self, instant: int, slack: int = 0) -> bool:
        return self.begin_instant - slack <= instant <= self.end_instant + slack


@dataclass(frozen=True)
class EventSignal:
    """Result of observing a file: boundary advice plus a name suggestion."""
    suggestion: str
    default_name: str
    gap_seconds: Optional[int] = None
    boundary_warning: bool = False
    stored_event: Optional[Event] = None


@dataclass
class FileOutcome:
    """
    What happened to a single file during a run. Used for reporting.
    """
    source: Path
    status: str               # sorted/skipped/failed/dry-run
    capture: Optional[CaptureDate] = None
    event_name: Optional[str] = None
    destination: Optional[Path] = None
    detail: str = ""
