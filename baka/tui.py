"""
Terminal front end

Thin textual driver around NavigationMachine: keys and the load worker are
turned into navigation events, and the machine's label and visible entries
are rendered after each handled event.
"""
from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.timer import Timer
from textual.widgets import Input, Label, ListItem, ListView, LoadingIndicator, Static

from baka.exceptions import ScheduleError
from baka.schemas import ScheduleEntry
from baka.services.fetch_types import LoadResult
from baka.services.navigation import (
    CancelFilter,
    DataLoaded,
    Event,
    FilterTextChanged,
    LoadFailed,
    Mode,
    NavigationMachine,
    NextDay,
    Outcome,
    PassThrough,
    PreviousDay,
    Quit,
    Resize,
    StartFilter,
    Tick,
)
from baka.services.schedule_index import Weekday
from baka.utils.formatting import format_day_label, format_description, format_streams, format_title


logger = logging.getLogger(__name__)

HELP_TEXT = "← → / h l: navigate days • ↑↓: select anime • /: search • enter: streams • q: quit"

Loader = Callable[[], Awaitable[LoadResult]]


class EntryItem(ListItem):
    """List row for one schedule entry."""

    def __init__(self, entry: ScheduleEntry) -> None:
        super().__init__()
        self.entry = entry

    def compose(self) -> ComposeResult:
        yield Label(format_title(self.entry), classes="entry-title")
        yield Label(format_description(self.entry), classes="entry-description")


class ScheduleApp(App):
    """Weekly anime schedule browser."""

    TITLE = "Anime Schedule"

    CSS = """
    #day-label {
        background: #25A065;
        color: #FFFDF5;
        padding: 0 1;
        margin: 1 2 0 2;
    }

    #entries {
        height: 1fr;
        margin: 0 2;
        border: round $accent;
    }

    #entries > EntryItem {
        padding: 0 1;
    }

    .entry-description {
        color: $text-muted;
    }

    #filter {
        margin: 0 2;
    }

    #status {
        width: 100%;
        height: 1fr;
        content-align: center middle;
    }

    #help {
        color: $text-muted;
        width: 100%;
        content-align: center middle;
    }
    """

    BINDINGS = [
        Binding("ctrl+c", "quit_session", "Quit", priority=True),
        Binding("q", "quit_session", "Quit"),
        Binding("escape", "escape", "Cancel/Quit"),
        Binding("left,h", "previous_day", "Previous day"),
        Binding("right,l", "next_day", "Next day"),
        Binding("slash", "start_filter", "Search"),
    ]

    def __init__(self, loader: Loader, today: Weekday | None = None) -> None:
        super().__init__()
        self.machine = NavigationMachine(today=today)
        self._loader = loader
        self._rendered: list[int] = []
        self._session_ready = False
        self._loading_seconds = 0
        self._ticker: Timer | None = None

    def compose(self) -> ComposeResult:
        yield Label("", id="day-label")
        yield LoadingIndicator(id="loading")
        yield Static("", id="status")
        yield Input(placeholder="Search all days…", id="filter")
        yield ListView(id="entries")
        yield Static(HELP_TEXT, id="help")

    def on_mount(self) -> None:
        self._session_ready = True
        self._sync()
        self._ticker = self.set_interval(1.0, self.advance_loading_clock)
        self.run_worker(self._load_schedule(), exclusive=True, name="schedule-load")

    async def _load_schedule(self) -> None:
        try:
            result = await self._loader()
        except ScheduleError as exc:
            self.apply_event(LoadFailed(str(exc)))
            return

        self.apply_event(DataLoaded(result.entries, warning=result.warning))
        if result.warning:
            self.notify(result.warning, title="Cache", severity="warning")

    def advance_loading_clock(self) -> Outcome:
        """Advance the loading clock; the timer stops once loading is over."""
        self._loading_seconds += 1
        outcome = self.apply_event(Tick())
        if outcome is Outcome.IGNORED and self._ticker is not None:
            self._ticker.stop()
            self._ticker = None
        return outcome

    def apply_event(self, event: Event) -> Outcome:
        """Apply a navigation event and refresh the screen when it changed anything."""
        outcome = self.machine.dispatch(event)
        if outcome is Outcome.QUIT:
            self.exit()
        elif outcome is Outcome.HANDLED:
            self._sync()
        return outcome

    def _sync(self) -> None:
        """Bring the widgets in line with the machine state."""
        state = self.machine.state
        loading = state.mode is Mode.LOADING

        self.query_one("#day-label", Label).update(format_day_label(self.machine.label))
        self.query_one("#loading", LoadingIndicator).display = loading and not state.error

        status = self.query_one("#status", Static)
        status.display = loading
        if state.error:
            status.update(f"Error: {state.error}\n\nPress q to quit")
        elif loading:
            status.update(f"Fetching anime timetable... {self._loading_seconds}s\n\nPress q to quit")

        filter_input = self.query_one("#filter", Input)
        list_view = self.query_one("#entries", ListView)
        filter_input.display = state.mode is Mode.FILTERING
        list_view.display = not loading

        if state.mode is Mode.BROWSING and filter_input.value:
            with filter_input.prevent(Input.Changed):
                filter_input.value = ""
        if state.mode is Mode.BROWSING and not list_view.has_focus:
            list_view.focus()

        self._render_entries(list_view)

    def _render_entries(self, list_view: ListView) -> None:
        visible = self.machine.visible
        keys = [id(entry) for entry in visible]
        if keys == self._rendered:
            return
        self._rendered = keys
        list_view.clear()
        list_view.extend(EntryItem(entry) for entry in visible)

    # Actions

    def action_quit_session(self) -> None:
        self.apply_event(Quit())

    def action_escape(self) -> None:
        if self.machine.mode is Mode.FILTERING:
            self.apply_event(CancelFilter())
        else:
            self.apply_event(Quit())

    def action_previous_day(self) -> None:
        self.apply_event(PreviousDay())

    def action_next_day(self) -> None:
        self.apply_event(NextDay())

    def action_start_filter(self) -> None:
        if self.apply_event(StartFilter()) is Outcome.HANDLED:
            self.query_one("#filter", Input).focus()

    # Messages

    def on_input_changed(self, event: Input.Changed) -> None:
        if self.machine.mode is Mode.FILTERING:
            self.apply_event(FilterTextChanged(event.value))

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        if self.apply_event(PassThrough("enter")) is not Outcome.DELEGATE:
            return
        item = event.item
        if isinstance(item, EntryItem):
            self.notify(format_streams(item.entry), title=item.entry.title or "Unknown Title")

    def on_resize(self, event: events.Resize) -> None:
        if not self._session_ready:
            return
        self.apply_event(Resize(event.size.width, event.size.height))
