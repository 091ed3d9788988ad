"""
Schedule Cache Store

Persists the last fetched timetable as a single JSON snapshot. Freshness is
judged from the file's modification time, never from its contents.
"""
from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from datetime import timedelta
from pathlib import Path

from platformdirs import user_cache_dir
from pydantic import TypeAdapter, ValidationError

from baka.config import APP_NAME
from baka.exceptions import CacheReadError, CacheWriteError
from baka.schemas import ScheduleEntry
from baka.utils.file_operations import delete_file, read_file, write_file_atomic


logger = logging.getLogger(__name__)

CACHE_FILE_NAME = "anime_schedule.json"
CACHE_MAX_AGE = timedelta(hours=1)

_entries_adapter = TypeAdapter(list[ScheduleEntry])


def default_cache_path() -> Path:
    return Path(user_cache_dir(APP_NAME)) / CACHE_FILE_NAME


class ScheduleCacheStore:
    """Reads and writes the timetable snapshot at a fixed path."""

    def __init__(self, path: Path | None = None, max_age: timedelta = CACHE_MAX_AGE) -> None:
        self.path = path or default_cache_path()
        self.max_age = max_age

    def age(self, now: float | None = None) -> timedelta | None:
        """Age of the snapshot, or None when it cannot be stat'ed."""
        try:
            mtime = self.path.stat().st_mtime
        except OSError:
            return None
        current = time.time() if now is None else now
        return timedelta(seconds=current - mtime)

    def is_valid(self, now: float | None = None) -> bool:
        """True iff the snapshot exists and is younger than max_age."""
        age = self.age(now)
        if age is None:
            return False
        valid = age < self.max_age
        logger.debug(
            "Cache %s is %s (age %.0fs, limit %.0fs)",
            self.path,
            "fresh" if valid else "stale",
            age.total_seconds(),
            self.max_age.total_seconds(),
        )
        return valid

    async def load(self) -> list[ScheduleEntry]:
        """
        Load the snapshot

        Returns:
            All cached entries, in stored order

        Raises:
            CacheReadError: If the file is absent, unreadable or does not match the entry schema
        """
        try:
            data = await read_file(self.path)
        except OSError as exc:
            raise CacheReadError(f"cannot read cache {self.path}: {exc}") from exc

        try:
            entries = _entries_adapter.validate_json(data)
        except (ValidationError, ValueError) as exc:
            raise CacheReadError(f"invalid cache contents in {self.path}: {exc}") from exc

        logger.info(f"Loaded {len(entries)} entries from cache {self.path}")
        return entries

    async def save(self, entries: Sequence[ScheduleEntry]) -> None:
        """
        Replace the snapshot with entries

        Raises:
            CacheWriteError: If the snapshot could not be written
        """
        payload = _entries_adapter.dump_json(list(entries), indent=2, by_alias=True)
        try:
            await write_file_atomic(self.path, payload)
        except OSError as exc:
            raise CacheWriteError(f"failed to save cache {self.path}: {exc}") from exc

        logger.info(f"Saved {len(entries)} entries to cache {self.path}")

    def clear(self) -> bool:
        """Remove the snapshot so the next session fetches from the network."""
        return delete_file(self.path, label="cache snapshot")
