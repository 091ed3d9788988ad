"""
Command-line entry point

Parses options, configures logging and runs the schedule browser.
"""
import argparse
import logging
import sys
from functools import partial

from baka.config import AIR_TYPES, settings, setup_logging
from baka.services.cache_service import ScheduleCacheStore
from baka.services.fetch_service import fetch_timetables
from baka.services.schedule_loader import load_schedule
from baka.tui import ScheduleApp


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="baka",
        description="Browse this week's anime broadcast schedule in the terminal.",
    )
    parser.add_argument("--week", type=int, default=settings.schedule_week, help="ISO week to show (bypasses the cache)")
    parser.add_argument("--year", type=int, default=settings.schedule_year, help="Year of --week (bypasses the cache)")
    parser.add_argument(
        "--air-type",
        choices=sorted(AIR_TYPES),
        default=settings.air_type,
        help=f"Broadcast type to list (default: {settings.air_type})",
    )
    parser.add_argument("--refresh", action="store_true", help="Discard the cached schedule and fetch again")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=settings.log_level,
        help="Log level (default: %(default)s)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)
    logger.info("Starting schedule viewer")

    cache = ScheduleCacheStore()
    if args.refresh and cache.clear():
        logger.info(f"Cleared cached schedule at {cache.path}")

    fetcher = partial(
        fetch_timetables,
        base_url=settings.animeschedule_api_url,
        timeout=settings.request_timeout_sec,
    )
    loader = partial(
        load_schedule,
        cache=cache,
        fetcher=fetcher,
        api_token=settings.animeschedule_token,
        air_type=args.air_type,
        week=args.week,
        year=args.year,
        use_cache=not args.refresh,
    )

    app = ScheduleApp(loader=loader)
    try:
        app.run()
    except Exception as e:
        logger.error(f"Error running program: {e}", exc_info=True)
        print(f"Error running program: {e}", file=sys.stderr)
        return 1

    logger.info("Schedule viewer stopped")
    return app.return_code or 0


if __name__ == "__main__":
    sys.exit(main())
