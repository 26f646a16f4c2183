"""
Pytest configuration and shared fixtures.
"""

import pytest


def make_event(summary: str | None, dtstart: str | None, dtend: str | None, uid: str = "uid") -> str:
    lines = ["BEGIN:VEVENT", f"UID:{uid}", "DTSTAMP:20240101T000000Z"]
    if summary is not None:
        lines.append(f"SUMMARY:{summary}")
    if dtstart is not None:
        lines.append(f"DTSTART:{dtstart}")
    if dtend is not None:
        lines.append(f"DTEND:{dtend}")
    lines.append("END:VEVENT")
    return "\r\n".join(lines)


def make_calendar(*events: str) -> str:
    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        "PRODID:-//ics2csv tests//EN",
        *events,
        "END:VCALENDAR",
    ]
    return "\r\n".join(lines) + "\r\n"


@pytest.fixture
def write_ics(tmp_path):
    """Write calendar text to a file and return its path."""
    def _write(content: str, name: str = "calendar.ics"):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8", newline="")
        return path
    return _write


@pytest.fixture
def day_ics(write_ics):
    """Lunch listed before Standup, both on the same day."""
    return write_ics(make_calendar(
        make_event("Lunch", "20240105T120000", "20240105T130000", uid="lunch"),
        make_event("Standup", "20240105T090000", "20240105T091500", uid="standup"),
    ))


@pytest.fixture
def week_ics(write_ics):
    return write_ics(make_calendar(
        make_event("Review", "20240110T160000", "20240110T170000", uid="a"),
        make_event("Standup", "20240108T090000", "20240108T091500", uid="b"),
        make_event("Standup", "20240109T090000", "20240109T091500", uid="c"),
        make_event("Planning", "20240108T083000", "20240108T100000", uid="d"),
        make_event("standup", "20240108T093000", "20240108T094500", uid="e"),
    ))


@pytest.fixture(name="make_event")
def make_event_fixture():
    return make_event


@pytest.fixture(name="make_calendar")
def make_calendar_fixture():
    return make_calendar
