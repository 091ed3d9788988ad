"""
Schedule Index

Partitions the fetched entries into seven weekday buckets.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from datetime import datetime
from enum import IntEnum

from baka.schemas import ScheduleEntry


logger = logging.getLogger(__name__)


class Weekday(IntEnum):
    """Calendar weekday, numbered like datetime.weekday()."""
    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @property
    def label(self) -> str:
        return self.name.capitalize()

    def next(self) -> Weekday:
        return Weekday((self + 1) % 7)

    def previous(self) -> Weekday:
        return Weekday((self - 1) % 7)

    @classmethod
    def of(cls, moment: datetime) -> Weekday:
        """Weekday of moment in its own (local) offset."""
        return cls(moment.weekday())

    @classmethod
    def today(cls) -> Weekday:
        return cls.of(datetime.now())


class ScheduleIndex:
    """Immutable weekday view over a session's entries."""

    def __init__(self, entries: Sequence[ScheduleEntry], buckets: dict[Weekday, tuple[ScheduleEntry, ...]]):
        self._entries = tuple(entries)
        self._buckets = buckets

    @classmethod
    def build(cls, entries: Iterable[ScheduleEntry]) -> ScheduleIndex:
        """
        Bucket entries by the weekday of their episode date

        Every weekday gets a bucket, empty or not. Entries with an unset
        timestamp are kept and land on the weekday of the zero instant.
        Buckets are ordered by episode date; ties keep fetch order.
        """
        entries = list(entries)
        grouped: dict[Weekday, list[ScheduleEntry]] = {day: [] for day in Weekday}
        unset = 0

        for entry in entries:
            if not entry.has_timestamp:
                unset += 1
            grouped[Weekday.of(entry.episode_date)].append(entry)

        buckets = {
            day: tuple(sorted(items, key=lambda e: e.episode_date))
            for day, items in grouped.items()
        }

        if unset:
            logger.warning(f"{unset} entries have no episode date and were bucketed on the zero-date weekday")
        logger.debug(
            "Indexed %s entries: %s",
            len(entries),
            ", ".join(f"{day.label[:3]}={len(items)}" for day, items in buckets.items()),
        )
        return cls(entries, buckets)

    def entries_for(self, day: Weekday) -> list[ScheduleEntry]:
        return list(self._buckets[day])

    def all_entries(self) -> list[ScheduleEntry]:
        """All entries in fetch order."""
        return list(self._entries)

    def counts(self) -> dict[Weekday, int]:
        return {day: len(items) for day, items in self._buckets.items()}

    def __len__(self) -> int:
        return len(self._entries)
