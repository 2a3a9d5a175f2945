import pytest
from datetime import datetime

from picsort.models import ArchiveTemplate, CaptureDate, DateField, Event, EventState


def test_capture_date_from_datetime_round_trip():
    dt = datetime(2024, 3, 7, 18, 5, 9)
    cap = CaptureDate.from_datetime(dt)
    assert cap == CaptureDate(2024, 3, 7, 18, 5, 9)
    assert cap.to_datetime() == dt

def test_capture_date_rejects_impossible_dates():
    with pytest.raises(ValueError):
        CaptureDate(2024, 0, 1)
    with pytest.raises(ValueError):
        CaptureDate(2023, 2, 29)
    with pytest.raises(ValueError):
        CaptureDate(2024, 1, 1, 24, 0, 0)

def test_instant_differences_are_in_seconds():
    a = CaptureDate(2024, 3, 7, 10, 0, 0)
    b = CaptureDate(2024, 3, 7, 12, 0, 0)
    assert b.instant - a.instant == 7200
    assert CaptureDate(1970, 1, 1).instant == 0

def test_instant_crosses_midnight_and_months():
    a = CaptureDate(2024, 2, 29, 23, 30, 0)
    b = CaptureDate(2024, 3, 1, 0, 30, 0)
    assert b.instant - a.instant == 3600

def test_component_and_pretty():
    cap = CaptureDate(2024, 3, 7, 8, 5, 0)
    assert cap.component(DateField.YEAR) == 2024
    assert cap.component(DateField.MONTH) == 3
    assert cap.component(DateField.SECOND) == 0
    assert cap.pretty() == "2024/03/07 08:05:00"

def test_template_parse():
    t = ArchiveTemplate.parse("year/month")
    assert t.fields == (DateField.YEAR, DateField.MONTH)
    assert str(t) == "year/month"

    t = ArchiveTemplate.parse(" Year / month / day ")
    assert t.fields == (DateField.YEAR, DateField.MONTH, DateField.DAY)

@pytest.mark.parametrize("bad", ["", "/", "year/fortnight", "decade"])
def test_template_parse_rejects_bad_structures(bad):
    with pytest.raises(ValueError):
        ArchiveTemplate.parse(bad)

def test_event_state_starts_empty():
    state = EventState()
    assert state.is_empty
    assert state.last_instant is None

    state.last_capture = CaptureDate(1970, 1, 1, 0, 1, 0)
    assert state.last_instant == 60
    assert not state.is_empty

def test_event_range_invariant():
    with pytest.raises(ValueError):
        Event("Backwards", 100, 50)

    ev = Event("Party", 100, 200)
    assert ev.encloses(100)
    assert ev.encloses(200)
    assert not ev.encloses(201)
    assert ev.encloses(250, slack=50)
    assert not ev.encloses(40, slack=50)
