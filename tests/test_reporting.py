import csv
import logging
from pathlib import Path

from picsort.models import CaptureDate, FileOutcome
from picsort.reporting import RunReport


def _report():
    report = RunReport()
    report.add(FileOutcome(Path("/src/A/a.jpg"), "sorted", CaptureDate(2024, 3, 7, 10, 0, 0),
                           "Birthday", Path("/archive/2024/03/Birthday/a.jpg")))
    report.add(FileOutcome(Path("/src/A/b.jpg"), "skipped", detail="missing date fields"))
    report.add(FileOutcome(Path("/src/A/c.jpg"), "failed", CaptureDate(2024, 3, 7, 10, 5, 0),
                           "Birthday", detail="already exists"))
    return report

def test_counts():
    counts = _report().counts()
    assert counts["sorted"] == 1
    assert counts["skipped"] == 1
    assert counts["failed"] == 1
    assert counts["dry-run"] == 0

def test_write_csv(tmp_path):
    out = tmp_path / "reports" / "run.csv"
    _report().write_csv(out)

    with open(out, newline="", encoding="utf-8") as f:
        rows = list(csv.reader(f))

    assert rows[0] == RunReport.HEADERS
    assert len(rows) == 4
    assert rows[1] == [str(Path("/src/A/a.jpg")), "sorted", "2024/03/07 10:00:00", "Birthday",
                       str(Path("/archive/2024/03/Birthday/a.jpg")), ""]
    assert rows[2][1] == "skipped"
    assert rows[2][2] == ""
    assert rows[2][5] == "missing date fields"

def test_log_summary(caplog):
    with caplog.at_level(logging.INFO):
        _report().log_summary()
    assert "1 sorted" in caplog.text
    assert "1 skipped" in caplog.text

def test_log_summary_empty_run(caplog):
    with caplog.at_level(logging.INFO):
        RunReport().log_summary()
    assert "No files to sort" in caplog.text
