import asyncio
from types import SimpleNamespace

import pytest

from baka.exceptions import FetchError
from baka.services.fetch_types import LoadResult
from baka.services.navigation import DataLoaded, Mode, Outcome, StartFilter
from baka.services.schedule_index import Weekday
from baka.tui import EntryItem, ScheduleApp


def loader_returning(entries, warning=None):
    async def loader():
        return LoadResult(entries=entries, source="network", warning=warning)
    return loader


async def settle(app, pilot):
    await app.workers.wait_for_complete()
    await pilot.pause()


@pytest.mark.asyncio
async def test_browse_and_filter(sample_entries):
    app = ScheduleApp(loader=loader_returning(sample_entries), today=Weekday.MONDAY)

    async with app.run_test() as pilot:
        await settle(app, pilot)
        assert app.machine.mode is Mode.BROWSING
        assert [item.entry.title for item in app.query(EntryItem)] == ["Show A", "Show B"]

        await pilot.press("right")
        await pilot.pause()
        assert app.machine.state.focused_day is Weekday.TUESDAY
        assert [item.entry.title for item in app.query(EntryItem)] == ["Show C"]

        await pilot.press("slash")
        await pilot.pause()
        assert app.machine.mode is Mode.FILTERING

        await pilot.press("c")
        await pilot.pause()
        assert app.machine.state.filter_text == "c"
        assert [item.entry.title for item in app.query(EntryItem)] == ["Show C"]

        await pilot.press("escape")
        await pilot.pause()
        assert app.machine.mode is Mode.BROWSING
        assert app.machine.state.focused_day is Weekday.TUESDAY


@pytest.mark.asyncio
async def test_load_failure_shows_error():
    async def loader():
        raise FetchError("request failed: offline")

    app = ScheduleApp(loader=loader, today=Weekday.MONDAY)

    async with app.run_test() as pilot:
        await settle(app, pilot)
        assert app.machine.state.load_failed
        assert app.machine.state.error == "request failed: offline"

        await pilot.press("right")
        await pilot.pause()
        assert app.machine.state.focused_day is Weekday.MONDAY


@pytest.mark.asyncio
async def test_loading_clock_ticks_until_data_arrives(sample_entries):
    released = asyncio.Event()

    async def loader():
        await released.wait()
        return LoadResult(entries=sample_entries, source="network")

    app = ScheduleApp(loader=loader, today=Weekday.MONDAY)

    async with app.run_test() as pilot:
        assert app.machine.mode is Mode.LOADING
        assert app.advance_loading_clock() is Outcome.HANDLED
        assert app._loading_seconds >= 1

        released.set()
        await settle(app, pilot)
        assert app.machine.mode is Mode.BROWSING
        assert app.advance_loading_clock() is Outcome.IGNORED
        assert app._ticker is None


@pytest.mark.asyncio
async def test_selection_shows_streams_only_once_loaded(sample_entries):
    app = ScheduleApp(loader=loader_returning(sample_entries), today=Weekday.MONDAY)
    shown = []
    app.notify = lambda message, **kwargs: shown.append((kwargs.get("title"), message))
    selected = SimpleNamespace(item=EntryItem(sample_entries[0]))

    app.on_list_view_selected(selected)
    assert shown == []

    app.machine.dispatch(DataLoaded(sample_entries))
    app.on_list_view_selected(selected)
    assert shown == [("Show B", "No streams listed")]

    app.machine.dispatch(StartFilter())
    app.on_list_view_selected(selected)
    assert len(shown) == 2
