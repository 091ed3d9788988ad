"""
Navigation State Machine

Owns the session cursor (mode, focused weekday, filter text, load error) and
the schedule index. Input arrives as discrete events; each event is looked up
in the transition table of the current mode and fully applied before the
next one is handled.
"""
from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace
from enum import Enum
from typing import Union

from baka.schemas import ScheduleEntry
from baka.services.fuzzy_match import rank
from baka.services.schedule_index import ScheduleIndex, Weekday
from baka.utils.logging_helpers import log_transition


logger = logging.getLogger(__name__)

ALL_DAYS_LABEL = "All Days"


class Mode(str, Enum):
    LOADING = "loading"
    BROWSING = "browsing"
    FILTERING = "filtering"


class Outcome(Enum):
    """What the driver should do after an event."""
    HANDLED = "handled"
    IGNORED = "ignored"
    DELEGATE = "delegate"
    QUIT = "quit"


@dataclass(slots=True, frozen=True)
class NavigationState:
    mode: Mode = Mode.LOADING
    focused_day: Weekday = Weekday.MONDAY
    filter_text: str = ""
    error: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.focused_day, Weekday):
            object.__setattr__(self, "focused_day", Weekday(self.focused_day))
        if self.filter_text and self.mode is not Mode.FILTERING:
            raise ValueError("filter text is only allowed while filtering")

    @property
    def load_failed(self) -> bool:
        return self.mode is Mode.LOADING and self.error is not None

    def describe(self) -> str:
        parts = [self.mode.value, self.focused_day.label]
        if self.filter_text:
            parts.append(repr(self.filter_text))
        if self.error:
            parts.append("error")
        return "/".join(parts)


# Events

@dataclass(slots=True, frozen=True)
class DataLoaded:
    entries: Sequence[ScheduleEntry]
    warning: str | None = None


@dataclass(slots=True, frozen=True)
class LoadFailed:
    error: str


@dataclass(slots=True, frozen=True)
class Quit:
    pass


@dataclass(slots=True, frozen=True)
class PreviousDay:
    pass


@dataclass(slots=True, frozen=True)
class NextDay:
    pass


@dataclass(slots=True, frozen=True)
class StartFilter:
    pass


@dataclass(slots=True, frozen=True)
class FilterTextChanged:
    text: str


@dataclass(slots=True, frozen=True)
class CancelFilter:
    pass


@dataclass(slots=True, frozen=True)
class PassThrough:
    """Input the engine does not interpret (list cursor movement, selection)."""
    key: str


@dataclass(slots=True, frozen=True)
class Tick:
    pass


@dataclass(slots=True, frozen=True)
class Resize:
    width: int
    height: int


Event = Union[
    DataLoaded,
    LoadFailed,
    Quit,
    PreviousDay,
    NextDay,
    StartFilter,
    FilterTextChanged,
    CancelFilter,
    PassThrough,
    Tick,
    Resize,
]

Handler = Callable[[Event], Outcome]


class NavigationMachine:
    """Single-writer owner of NavigationState and the ScheduleIndex."""

    def __init__(self, today: Weekday | None = None) -> None:
        self.state = NavigationState(focused_day=today if today is not None else Weekday.today())
        self.index: ScheduleIndex | None = None
        self.warning: str | None = None
        self._visible: list[ScheduleEntry] = []

        self._load_error_table: dict[type, Handler] = {
            Quit: self._quit,
            Resize: self._redraw,
        }
        self._tables: dict[Mode, dict[type, Handler]] = {
            Mode.LOADING: {
                DataLoaded: self._on_data_loaded,
                LoadFailed: self._on_load_failed,
                Quit: self._quit,
                Tick: self._redraw,
                Resize: self._redraw,
            },
            Mode.BROWSING: {
                Quit: self._quit,
                PreviousDay: self._on_previous_day,
                NextDay: self._on_next_day,
                StartFilter: self._on_start_filter,
                PassThrough: self._delegate,
                Resize: self._redraw,
            },
            Mode.FILTERING: {
                FilterTextChanged: self._on_filter_text_changed,
                CancelFilter: self._on_cancel_filter,
                PassThrough: self._delegate,
                Resize: self._redraw,
            },
        }

    def dispatch(self, event: Event) -> Outcome:
        """
        Apply one event

        Events without an entry in the current mode's table are ignored;
        this covers day navigation and quit keys while filtering.
        """
        before = self.state
        table = self._load_error_table if before.load_failed else self._tables[before.mode]
        handler = table.get(type(event))
        if handler is None:
            logger.debug(f"Ignoring {type(event).__name__} in {before.describe()}")
            return Outcome.IGNORED

        outcome = handler(event)
        log_transition(logger, type(event).__name__, before.describe(), self.state.describe())
        return outcome

    @property
    def mode(self) -> Mode:
        return self.state.mode

    @property
    def visible(self) -> list[ScheduleEntry]:
        return list(self._visible)

    @property
    def label(self) -> str:
        if self.state.mode is Mode.FILTERING:
            return ALL_DAYS_LABEL
        if self.state.mode is Mode.BROWSING:
            return self.state.focused_day.label
        return "Error" if self.state.error else "Loading"

    # Handlers

    def _quit(self, event: Event) -> Outcome:
        logger.info("Quit requested")
        return Outcome.QUIT

    def _redraw(self, event: Event) -> Outcome:
        return Outcome.HANDLED

    def _delegate(self, event: Event) -> Outcome:
        return Outcome.DELEGATE

    def _on_data_loaded(self, event: DataLoaded) -> Outcome:
        self.index = ScheduleIndex.build(event.entries)
        self.warning = event.warning
        self.state = replace(self.state, mode=Mode.BROWSING, error=None)
        self._show_focused_day()
        logger.info(
            f"Browsing {len(self.index)} entries, starting on {self.state.focused_day.label}"
        )
        return Outcome.HANDLED

    def _on_load_failed(self, event: LoadFailed) -> Outcome:
        logger.error(f"Schedule load failed: {event.error}")
        self.state = replace(self.state, error=event.error)
        return Outcome.HANDLED

    def _on_previous_day(self, event: PreviousDay) -> Outcome:
        self.state = replace(self.state, focused_day=self.state.focused_day.previous())
        self._show_focused_day()
        return Outcome.HANDLED

    def _on_next_day(self, event: NextDay) -> Outcome:
        self.state = replace(self.state, focused_day=self.state.focused_day.next())
        self._show_focused_day()
        return Outcome.HANDLED

    def _on_start_filter(self, event: StartFilter) -> Outcome:
        self.state = replace(self.state, mode=Mode.FILTERING, filter_text="")
        self._visible = self._require_index().all_entries()
        return Outcome.HANDLED

    def _on_filter_text_changed(self, event: FilterTextChanged) -> Outcome:
        if not event.text:
            return self._on_cancel_filter(CancelFilter())

        self.state = replace(self.state, filter_text=event.text)
        candidates = self._require_index().all_entries()
        ranked = rank(event.text, [entry.title for entry in candidates])
        self._visible = [candidates[position] for position, _ in ranked]
        logger.debug(f"Filter {event.text!r} matched {len(self._visible)}/{len(candidates)} entries")
        return Outcome.HANDLED

    def _on_cancel_filter(self, event: CancelFilter) -> Outcome:
        self.state = replace(self.state, mode=Mode.BROWSING, filter_text="")
        self._show_focused_day()
        return Outcome.HANDLED

    def _show_focused_day(self) -> None:
        self._visible = self._require_index().entries_for(self.state.focused_day)

    def _require_index(self) -> ScheduleIndex:
        if self.index is None:
            raise RuntimeError("Schedule index not built")
        return self.index


__all__ = [
    "ALL_DAYS_LABEL",
    "CancelFilter",
    "DataLoaded",
    "Event",
    "FilterTextChanged",
    "LoadFailed",
    "Mode",
    "NavigationMachine",
    "NavigationState",
    "NextDay",
    "Outcome",
    "PassThrough",
    "PreviousDay",
    "Quit",
    "Resize",
    "StartFilter",
    "Tick",
]
