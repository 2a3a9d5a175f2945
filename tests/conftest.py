import pytest
import sqlite3
from pathlib import Path

from picsort.config import Settings
from picsort.database.schema import init_schema
from picsort.database.ops import EventStore
from picsort.models import CaptureDate

@pytest.fixture
def conn():
    """Returns an in-memory SQLite connection with the schema initialized."""
    c = sqlite3.connect(":memory:")
    init_schema(c)
    try:
        yield c
    finally:
        c.close()

@pytest.fixture
def event_store(conn):
    """Returns an EventStore attached to the in-memory DB."""
    return EventStore(conn)

@pytest.fixture
def dirs(tmp_path):
    """Separate unsorted and archive directories."""
    src = tmp_path / "unsorted"
    archive = tmp_path / "archive"
    src.mkdir()
    return src, archive

@pytest.fixture
def settings(dirs):
    src, archive = dirs
    return Settings(src_root=src, archive_root=archive)


class ScriptedPrompt:
    """Stands in for the operator. Answers in order; '' accepts the suggestion."""
    def __init__(self, answers=None):
        self.answers = list(answers or [])
        self.suggestions = []

    def confirm(self, suggestion):
        self.suggestions.append(suggestion)
        answer = self.answers.pop(0) if self.answers else ""
        return answer or suggestion


class FakeResolver:
    """Maps file names to capture dates instead of reading EXIF."""
    def __init__(self, dates):
        self.dates = dates

    def resolve(self, path: Path) -> CaptureDate:
        from picsort.exceptions import MissingDateFieldsError, NotAFileError
        if not path.is_file():
            raise NotAFileError(path)
        if path.name not in self.dates:
            raise MissingDateFieldsError(path)
        return self.dates[path.name]


@pytest.fixture
def make_prompt():
    return ScriptedPrompt

@pytest.fixture
def make_resolver():
    return FakeResolver
