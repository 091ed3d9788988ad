"""
Shared dataclasses used across the schedule loading pipeline.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from baka.schemas import ScheduleEntry


@dataclass(slots=True, frozen=True)
class FetchOptions:
    """Request options for one timetable fetch."""
    air_type: str
    timezone: str
    week: int | None = None
    year: int | None = None

    @property
    def targets_current_week(self) -> bool:
        return not self.week and not self.year

    def query_params(self) -> dict[str, str]:
        params: dict[str, str] = {}
        if self.week and self.week > 0:
            params["week"] = str(self.week)
        if self.year and self.year > 0:
            params["year"] = str(self.year)
        if self.timezone:
            params["tz"] = self.timezone
        return params


@dataclass(slots=True)
class LoadResult:
    """Entries obtained for the session and where they came from."""
    entries: list[ScheduleEntry]
    source: Literal["cache", "network"]
    warning: str | None = None
    options: FetchOptions | None = field(default=None, repr=False)


__all__ = ["FetchOptions", "LoadResult"]
