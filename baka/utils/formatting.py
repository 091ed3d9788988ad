"""
Text helpers for rendering schedule entries in the terminal list.
"""
from baka.schemas import ScheduleEntry


UNKNOWN_TITLE = "Unknown Title"
TITLE_WIDTH = 50
DAY_LABEL_WIDTH = 9

_BREAK_CHARS = (" ", "-", ":")


def format_title(entry: ScheduleEntry, width: int = TITLE_WIDTH) -> str:
    """
    Title padded to width, wrapped onto extra lines when longer

    Lines break at the last space, dash or colon in the second half of the
    line, or hard at width when there is none.
    """
    title = entry.title.strip() or UNKNOWN_TITLE

    lines = []
    remaining = title
    while remaining:
        if len(remaining) <= width:
            lines.append(remaining.ljust(width))
            break

        break_point = width
        for position in range(width - 1, max(1, width // 2) - 1, -1):
            if remaining[position] in _BREAK_CHARS:
                break_point = position
                break

        lines.append(remaining[:break_point].ljust(width))
        remaining = remaining[break_point:].strip()

    return "\n".join(lines)


def format_description(entry: ScheduleEntry) -> str:
    """e.g. 'Episode 5 • Jan 2, 15:04 • sub'"""
    when = entry.episode_date
    return f"Episode {entry.episode_number} • {when:%b} {when.day}, {when:%H:%M} • {entry.air_type}"


def format_day_label(label: str) -> str:
    """Pad a day label so the title bar keeps a stable width"""
    return label.ljust(DAY_LABEL_WIDTH)


def format_streams(entry: ScheduleEntry) -> str:
    streams = entry.streams.available()
    if not streams:
        return "No streams listed"
    return "\n".join(f"{name}: {url}" for name, url in streams.items())
