"""
Schedule Fetcher

Retrieves the weekly timetable from the AnimeSchedule API.
"""
import logging

import httpx
from pydantic import TypeAdapter, ValidationError

from baka.config import DEFAULT_API_URL
from baka.exceptions import FetchError
from baka.schemas import ScheduleEntry
from baka.services.fetch_types import FetchOptions


logger = logging.getLogger(__name__)

_entries_adapter = TypeAdapter(list[ScheduleEntry])

# Error bodies are echoed to the user; keep them readable
_MAX_ERROR_BODY = 500


def build_timetable_url(base_url: str, options: FetchOptions) -> str:
    url = base_url.rstrip("/")
    if options.air_type:
        url = f"{url}/{options.air_type}"
    return url


async def fetch_timetables(
    api_token: str,
    options: FetchOptions,
    *,
    base_url: str = DEFAULT_API_URL,
    timeout: float = 10.0,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[ScheduleEntry]:
    """
    Fetch the timetable for the requested week

    Args:
        api_token: Bearer token for the API
        options: Air type, timezone and optional week/year
        base_url: Timetable endpoint
        timeout: HTTP timeout in seconds
        transport: Optional httpx transport (tests inject a mock)

    Returns:
        Entries in the order the API returned them

    Raises:
        FetchError: On transport failure, non-200 status or undecodable body
    """
    url = build_timetable_url(base_url, options)
    headers = {
        "Authorization": f"Bearer {api_token}",
        "Accept": "application/json",
    }
    params = options.query_params()
    logger.info(f"Fetching timetable from {url} (params: {params})")

    try:
        async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
            response = await client.get(url, params=params, headers=headers)
    except httpx.HTTPError as exc:
        logger.error(f"Timetable request failed: {type(exc).__name__}: {exc}")
        raise FetchError(f"request failed: {exc}") from exc

    if response.status_code != httpx.codes.OK:
        body = response.text[:_MAX_ERROR_BODY]
        logger.error(f"Timetable API returned HTTP {response.status_code}")
        raise FetchError(
            f"API request failed: {response.status_code} {response.reason_phrase}, response: {body}"
        )

    try:
        entries = _entries_adapter.validate_json(response.content)
    except (ValidationError, ValueError) as exc:
        logger.error(f"Failed to decode timetable response: {exc}")
        raise FetchError(f"failed to decode json response: {exc}") from exc

    logger.info(f"Fetched {len(entries)} timetable entries")
    return entries
