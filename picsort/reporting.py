import csv
import logging
from collections import Counter
from pathlib import Path
from typing import List

from .models import FileOutcome

class RunReport:
    """
    Collects what happened to each file in a run.
    """
    HEADERS = [
        "Source Path",
        "Status",
        "Capture Date",
        "Event",
        "Destination Path",
        "Notes",
    ]

    def __init__(self):
        self.outcomes: List[FileOutcome] = []

    def add(self, outcome: FileOutcome):
        self.outcomes.append(outcome)

    def counts(self) -> Counter:
        return Counter(o.status for o in self.outcomes)

    def log_summary(self):
        counts = self.counts()
        if not self.outcomes:
            logging.info("No files to sort.")
            return
        logging.info(
            f"Processed {len(self.outcomes)} files: "
            f"{counts['sorted']} sorted, {counts['dry-run']} planned (dry run), "
            f"{counts['skipped']} skipped, {counts['failed']} failed."
        )

    def write_csv(self, output_csv: Path):
        logging.info(f"Writing run report -> {output_csv}")
        output_csv.parent.mkdir(parents=True, exist_ok=True)

        with open(output_csv, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(self.HEADERS)
            for o in self.outcomes:
                writer.writerow([
                    str(o.source),
                    o.status,
                    o.capture.pretty() if o.capture else "",
                    o.event_name or "",
                    str(o.destination) if o.destination else "",
                    o.detail,
                ])
