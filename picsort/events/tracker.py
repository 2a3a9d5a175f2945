"""
Event inference.

Files arrive in sorted order. The tracker remembers the last committed file
and uses it to flag long gaps between captures and to suggest an event name
for the next file.
"""
import logging
from datetime import timedelta
from pathlib import Path
from typing import Optional

from .. import config
from ..database.ops import EventStore
from ..models import CaptureDate, EventSignal, EventState


def location_of(path: Path) -> str:
    """Directory portion of a traversed path, as it is compared between files."""
    return str(path.parent)


def default_event_name(path: Path) -> str:
    """Immediate parent directory of the file, e.g. 'Party' for 'Party/img1.jpg'."""
    return path.parent.name or config.DEFAULT_EVENT_NAME


class EventTracker:
    def __init__(self,
                 event_length: int = config.DEFAULT_EVENT_LENGTH,
                 event_store: Optional[EventStore] = None,
                 event_range: int = config.DEFAULT_EVENT_RANGE,
                 persist_events: bool = True):
        self.event_length = event_length
        self.event_store = event_store
        self.event_range = event_range
        self.persist_events = persist_events
        self.state = EventState()

    @property
    def last_capture(self) -> Optional[CaptureDate]:
        return self.state.last_capture

    def observe(self, capture: CaptureDate, path: Path) -> EventSignal:
        """
        Looks at the next file without changing any state.

        Returns the gap since the last committed capture, whether that gap
        crosses the event length, and the suggested event name.
        """
        gap = None
        warn = False
        last_instant = self.state.last_instant
        if last_instant is not None:
            gap = capture.instant - last_instant
            if gap >= self.event_length:
                warn = True
                logging.warning(f"!!! NEW EVENT? {timedelta(seconds=gap)} since last picture "
                                f"(threshold {timedelta(seconds=self.event_length)})")

        default_name = default_event_name(path)
        suggestion = default_name
        stored_event = None

        if self._is_sticky(path, default_name):
            suggestion = self.state.last_event_name
        elif self.event_store is not None:
            stored_event = self.event_store.find_enclosing(capture.instant, slack=self.event_range)
            if stored_event:
                logging.debug(f"Capture falls within stored event '{stored_event.name}'")
                suggestion = stored_event.name

        return EventSignal(
            suggestion=suggestion,
            default_name=default_name,
            gap_seconds=gap,
            boundary_warning=warn,
            stored_event=stored_event,
        )

    def confirm(self, capture: CaptureDate, path: Path, event_name: str, update_instant: bool = True):
        """
        Commits a file after it has been moved into the archive.

        Videos pass update_instant=False: they borrow the previous photo's
        capture date and must not move the clock forward.
        """
        if update_instant:
            self.state.last_capture = capture
            if self.event_store is not None and self.persist_events:
                self.event_store.widen(event_name, capture.instant)
        self.state.last_location = location_of(path)
        self.state.last_event_name = event_name

    def _is_sticky(self, path: Path, default_name: str) -> bool:
        """Same source directory as last time, and a different name was confirmed there."""
        last_name = self.state.last_event_name
        return (
            location_of(path) == self.state.last_location
            and bool(last_name)
            and last_name != default_name
        )
