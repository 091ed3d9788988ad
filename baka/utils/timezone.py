"""
Timezone utilities

Resolves the local IANA timezone the schedule is requested in. The upstream
API normalizes every episode timestamp to this zone, so weekday bucketing
follows the user's local calendar.
"""
from collections.abc import Mapping
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
import logging
import os

logger = logging.getLogger(__name__)

TZ_ENV_VAR = "TZ"
LOCALTIME_LINK = Path("/etc/localtime")
TIMEZONE_FILE = Path("/etc/timezone")
DEFAULT_TIMEZONE = "Asia/Kolkata"

_ZONEINFO_MARKER = "zoneinfo/"


def _from_environment(environ: Mapping[str, str]) -> str | None:
    value = environ.get(TZ_ENV_VAR, "").strip()
    # POSIX allows a leading colon ("TZ=:Europe/Berlin")
    return value.lstrip(":") or None


def _from_localtime_link(link: Path) -> str | None:
    """Extract the zone name from a /etc/localtime symlink target"""
    try:
        target = os.readlink(link)
    except OSError:
        return None

    if _ZONEINFO_MARKER not in target:
        return None
    zone = target.split(_ZONEINFO_MARKER, 1)[1].strip("/")
    return zone or None


def _from_timezone_file(path: Path) -> str | None:
    try:
        value = path.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError):
        return None
    return value or None


def _is_known_zone(name: str) -> bool:
    try:
        ZoneInfo(name)
        return True
    except (ZoneInfoNotFoundError, ValueError):
        return False


def resolve_timezone(
    environ: Mapping[str, str] | None = None,
    localtime_link: Path = LOCALTIME_LINK,
    timezone_file: Path = TIMEZONE_FILE,
) -> str:
    """
    Determine the local timezone identifier

    Sources are consulted in priority order: the TZ environment variable,
    the /etc/localtime link target, the /etc/timezone descriptor. Falls back
    to DEFAULT_TIMEZONE when none yields a value.

    Args:
        environ: Environment mapping (defaults to os.environ)
        localtime_link: Path of the locality symlink
        timezone_file: Path of the locality descriptor file

    Returns:
        Timezone identifier string (never empty)
    """
    env = os.environ if environ is None else environ

    resolvers = (
        ("environment", lambda: _from_environment(env)),
        ("localtime link", lambda: _from_localtime_link(localtime_link)),
        ("timezone file", lambda: _from_timezone_file(timezone_file)),
    )
    for source, resolver in resolvers:
        zone = resolver()
        if zone:
            if not _is_known_zone(zone):
                logger.warning(f"Timezone '{zone}' from {source} is not a known IANA zone")
            logger.debug(f"Resolved timezone {zone} from {source}")
            return zone

    logger.info(f"No local timezone found, falling back to {DEFAULT_TIMEZONE}")
    return DEFAULT_TIMEZONE
