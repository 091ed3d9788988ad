"""
Schedule Loader

Decides between the cached snapshot and a network fetch, and writes fresh
network results through to the cache.
"""
from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from baka.exceptions import CacheReadError, CacheWriteError, ConfigError
from baka.schemas import ScheduleEntry
from baka.services.cache_service import ScheduleCacheStore
from baka.services.fetch_types import FetchOptions, LoadResult
from baka.utils.logging_helpers import log_load_source, log_section_end, log_section_start
from baka.utils.timezone import resolve_timezone


logger = logging.getLogger(__name__)

Fetcher = Callable[[str, FetchOptions], Awaitable[list[ScheduleEntry]]]


async def load_schedule(
    *,
    cache: ScheduleCacheStore,
    fetcher: Fetcher,
    api_token: str | None,
    air_type: str = "sub",
    timezone: str | None = None,
    week: int | None = None,
    year: int | None = None,
    use_cache: bool = True,
) -> LoadResult:
    """
    Obtain the session's schedule entries

    A fresh cache is served without touching the network. Otherwise the
    fetcher is called and its result saved to the cache; a failed save is
    reported on the result but does not fail the load. The cache only holds
    the current week, so explicit week/year requests bypass it. Skipping the
    cache read still saves the fetched week.

    Args:
        cache: Snapshot store
        fetcher: Async callable (api_token, options) -> entries
        api_token: Bearer token; required only when fetching
        air_type: Air-type filter sent to the API
        timezone: Timezone identifier (resolved locally when omitted)
        week: Optional ISO week to request
        year: Optional year to request
        use_cache: False skips the cache read and forces a network fetch

    Returns:
        LoadResult with the entries, their source and any cache warning

    Raises:
        ConfigError: If a fetch is needed and no token is configured
        FetchError: If the fetch fails
    """
    log_section_start(logger, "schedule load")

    options = FetchOptions(
        air_type=air_type,
        timezone=timezone or resolve_timezone(),
        week=week,
        year=year,
    )
    if use_cache and options.targets_current_week and cache.is_valid():
        try:
            entries = await cache.load()
        except CacheReadError as exc:
            logger.warning(f"Ignoring unusable cache, fetching instead: {exc}")
        else:
            log_load_source(logger, "cache", len(entries))
            log_section_end(logger, "schedule load")
            return LoadResult(entries=entries, source="cache", options=options)

    if not api_token:
        raise ConfigError("ANIMESCHEDULE_TOKEN environment variable not set")

    entries = await fetcher(api_token, options)
    log_load_source(logger, "network", len(entries))

    warning = None
    if options.targets_current_week:
        try:
            await cache.save(entries)
        except CacheWriteError as exc:
            logger.warning(f"Failed to save cache: {exc}")
            warning = f"Failed to save cache: {exc}"

    log_section_end(logger, "schedule load")
    return LoadResult(entries=entries, source="network", warning=warning, options=options)
