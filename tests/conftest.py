from datetime import datetime, timedelta, timezone

import pytest

from baka.schemas import ScheduleEntry
from baka.services.cache_service import ScheduleCacheStore


# 2025-10-06 is a Monday
MONDAY = datetime(2025, 10, 6, tzinfo=timezone.utc)


def entry_on(day_offset: int, title: str, hour: int = 12, **extra) -> ScheduleEntry:
    """Entry airing day_offset days after MONDAY at hour:00 UTC."""
    return ScheduleEntry(
        title=title,
        episode_date=MONDAY + timedelta(days=day_offset, hours=hour),
        episode_number=extra.pop("episode_number", 1),
        air_type=extra.pop("air_type", "sub"),
        **extra,
    )


@pytest.fixture
def make_entry():
    return entry_on


@pytest.fixture
def sample_entries():
    return [
        entry_on(0, "Show B", hour=20),
        entry_on(1, "Show C", hour=9),
        entry_on(0, "Show A", hour=8),
    ]


@pytest.fixture
def cache_store(tmp_path):
    return ScheduleCacheStore(path=tmp_path / "cache" / "anime_schedule.json")
