from datetime import datetime, timezone

from baka.schemas import ScheduleEntry, Streams
from baka.utils.formatting import (
    UNKNOWN_TITLE,
    format_day_label,
    format_description,
    format_streams,
    format_title,
)


def test_short_title_is_padded():
    assert format_title(ScheduleEntry(title="  Show A "), width=10) == "Show A    "


def test_blank_title_falls_back():
    assert format_title(ScheduleEntry(title="   ")).strip() == UNKNOWN_TITLE


def test_long_title_wraps_at_break_char():
    title = "The Apothecary Diaries: Season Two Special Edition"
    lines = format_title(ScheduleEntry(title=title), width=30).split("\n")

    assert lines[0] == "The Apothecary Diaries:".ljust(30)
    assert lines[1] == "Season Two Special Edition".ljust(30)
    assert all(len(line) == 30 for line in lines)


def test_long_title_without_breaks_is_cut_hard():
    lines = format_title(ScheduleEntry(title="x" * 25), width=10).split("\n")
    assert lines == ["x" * 10, "x" * 10, "x" * 5 + " " * 5]


def test_description():
    entry = ScheduleEntry(
        title="Show",
        episode_number=7,
        episode_date=datetime(2025, 1, 2, 15, 4, tzinfo=timezone.utc),
        air_type="sub",
    )
    assert format_description(entry) == "Episode 7 • Jan 2, 15:04 • sub"


def test_day_label_width():
    assert format_day_label("Monday") == "Monday   "
    assert format_day_label("Wednesday") == "Wednesday"


def test_streams_listing():
    entry = ScheduleEntry(streams=Streams(hidive="https://hidive.example/a", netflix="https://nf.example/a"))
    assert format_streams(entry) == "hidive: https://hidive.example/a\nnetflix: https://nf.example/a"
    assert format_streams(ScheduleEntry()) == "No streams listed"
