import logging
from pathlib import Path
from typing import Optional

from tqdm import tqdm

from .config import Settings
from .database.db import DBManager
from .database.ops import EventStore
from .events.tracker import EventTracker
from .exceptions import FileSkipped, MoveError, NoMetadataError, NotAFileError
from .metadata.extract import TimestampResolver
from .models import CaptureDate, FileOutcome
from .organization.mover import ArchiveWriter
from .organization.prompt import AutoAccept, ConsolePrompt
from .organization.rules import build_path
from .reporting import RunReport
from .scanning.filesystem import DirectoryWalker

class PicsortApp:
    def __init__(self,
                 settings: Settings,
                 prompt=None,
                 resolver: Optional[TimestampResolver] = None,
                 writer: Optional[ArchiveWriter] = None):
        self.settings = settings
        if prompt is None:
            prompt = AutoAccept() if settings.assume_yes else ConsolePrompt()
        self.prompt = prompt
        self.resolver = resolver or TimestampResolver(allow_partial_dates=settings.allow_partial_dates)
        self.writer = writer or ArchiveWriter(dry_run=settings.dry_run)

    def sort(self) -> RunReport:
        """
        Sorts every supported file under the source root into the archive.

        Files are handled one at a time in traversal order:
        1. Resolve the capture date (skip the file if there is none)
        2. Observe it (gap warning + event name suggestion)
        3. Confirm the event name with the operator
        4. Move it to archive_root/<date path>/<event name>/

        Raises:
            DirectoryCreateError: an archive folder could not be created.
                Nothing after the failing file is processed.
        """
        s = self.settings
        logging.info(f"Sorting {s.src_root} -> {s.archive_root} (structure={s.template}, DryRun={s.dry_run})")

        report = RunReport()
        walker = DirectoryWalker(s.extensions, self._skip_dirs())

        if s.db_path and s.dry_run and not s.db_path.exists():
            logging.info(f"[DRY RUN] Event database {s.db_path} does not exist yet, not creating it")
            self._run(walker, report, None)
        elif s.db_path:
            # A dry run may look up stored events but never writes them
            with DBManager(s.db_path, read_only=s.dry_run) as conn:
                self._run(walker, report, EventStore(conn))
        else:
            self._run(walker, report, None)

        report.log_summary()
        if s.report_csv:
            report.write_csv(s.report_csv)
        return report

    def _skip_dirs(self) -> set[Path]:
        skip = set(self.settings.skip_dirs)
        # Never re-visit files we have just sorted
        archive = self.settings.archive_root.resolve()
        if archive.is_relative_to(self.settings.src_root.resolve()):
            skip.add(archive)
        return skip

    def _run(self, walker: DirectoryWalker, report: RunReport, event_store: Optional[EventStore]):
        tracker = EventTracker(
            event_length=self.settings.event_length,
            event_store=event_store,
            event_range=self.settings.event_range,
            persist_events=not self.settings.dry_run,
        )

        paths = walker.walk(self.settings.src_root)
        # A progress bar would fight with the prompt, so only show it for unattended runs
        for path in tqdm(paths, desc="Sorting", unit="file", disable=not self.settings.assume_yes):
            report.add(self._sort_one(path, tracker))

    def _sort_one(self, path: Path, tracker: EventTracker) -> FileOutcome:
        """Handles a single file. Only fatal errors escape."""
        is_video = self.settings.is_video(path)
        try:
            capture = self._resolve(path, tracker, is_video)
        except FileSkipped as e:
            logging.warning(f"!!! Skipping: {e}")
            return FileOutcome(path, "skipped", detail=e.reason.value)

        borrowed = " (date of previous photo)" if is_video else ""
        logging.info(f"---- {capture.pretty()} {path}{borrowed}")

        signal = tracker.observe(capture, path)
        event_name = self.prompt.confirm(signal.suggestion)

        date_path = build_path(capture, self.settings.template)
        logging.info(f" -> {self.settings.archive_root / date_path / event_name}")

        try:
            dest = self.writer.place(path, self.settings.archive_root, date_path, event_name)
        except MoveError as e:
            logging.error(f"!!! {e}")
            return FileOutcome(path, "failed", capture, event_name, detail=str(e))

        tracker.confirm(capture, path, event_name, update_instant=not is_video)

        notes = []
        if signal.boundary_warning:
            notes.append("new event? long gap since previous picture")
        if is_video:
            notes.append("video dated from previous photo")
        return FileOutcome(
            path,
            "dry-run" if self.settings.dry_run else "sorted",
            capture,
            event_name,
            dest,
            detail="; ".join(notes),
        )

    def _resolve(self, path: Path, tracker: EventTracker, is_video: bool) -> CaptureDate:
        if not is_video:
            return self.resolver.resolve(path)

        if not path.is_file():
            raise NotAFileError(path, f"{path} not a file.")
        if tracker.last_capture is None:
            raise NoMetadataError(path, f"No earlier photo to date video {path} from")
        return tracker.last_capture
