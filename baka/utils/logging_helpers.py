"""
Structured logging helpers for consistent log formatting.
"""
import logging
from datetime import datetime, timezone


def log_section_start(logger: logging.Logger, section_name: str) -> None:
    """
    Log the start of a processing section.

    Args:
        logger: Logger instance
        section_name: Name of the section being started
    """
    logger.info(f"Starting: {section_name}")


def log_section_end(logger: logging.Logger, section_name: str) -> None:
    """
    Log the end of a processing section.

    Args:
        logger: Logger instance
        section_name: Name of the section being ended
    """
    logger.info(f"Completed: {section_name}")


def log_load_source(logger: logging.Logger, source: str, entries_count: int) -> None:
    """Log where the session's entries came from."""
    logger.info(
        f"Schedule loaded from {source}: {entries_count} entries "
        f"at {datetime.now(timezone.utc).isoformat()}"
    )


def log_transition(logger: logging.Logger, event_name: str, before: str, after: str) -> None:
    """
    Log a navigation state change.

    Args:
        logger: Logger instance
        event_name: Event that caused the change
        before: State description before the event
        after: State description after the event
    """
    if before != after:
        logger.debug(f"{event_name}: {before} -> {after}")
