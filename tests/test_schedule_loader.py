import pytest

from baka.exceptions import CacheWriteError, ConfigError, FetchError
from baka.services.schedule_loader import load_schedule


class FakeFetcher:
    def __init__(self, entries=None, error=None):
        self.entries = entries or []
        self.error = error
        self.calls = []

    async def __call__(self, api_token, options):
        self.calls.append((api_token, options))
        if self.error:
            raise self.error
        return list(self.entries)


@pytest.mark.asyncio
async def test_network_fetch_writes_through(cache_store, sample_entries):
    fetcher = FakeFetcher(sample_entries)

    result = await load_schedule(cache=cache_store, fetcher=fetcher, api_token="tok", timezone="Europe/Berlin")

    assert result.source == "network"
    assert result.entries == sample_entries
    assert result.warning is None
    token, options = fetcher.calls[0]
    assert token == "tok"
    assert options.air_type == "sub"
    assert options.timezone == "Europe/Berlin"
    assert await cache_store.load() == sample_entries


@pytest.mark.asyncio
async def test_fresh_cache_skips_network(cache_store, sample_entries):
    await cache_store.save(sample_entries)
    fetcher = FakeFetcher(error=AssertionError("network must not be used"))

    result = await load_schedule(cache=cache_store, fetcher=fetcher, api_token=None, timezone="UTC")

    assert result.source == "cache"
    assert result.entries == sample_entries
    assert fetcher.calls == []


@pytest.mark.asyncio
async def test_corrupt_cache_falls_through_to_network(cache_store, sample_entries):
    cache_store.path.parent.mkdir(parents=True)
    cache_store.path.write_text("garbage", encoding="utf-8")
    fetcher = FakeFetcher(sample_entries)

    result = await load_schedule(cache=cache_store, fetcher=fetcher, api_token="tok", timezone="UTC")

    assert result.source == "network"
    assert len(fetcher.calls) == 1
    assert await cache_store.load() == sample_entries


@pytest.mark.asyncio
async def test_missing_token_is_config_error(cache_store):
    with pytest.raises(ConfigError, match="ANIMESCHEDULE_TOKEN"):
        await load_schedule(cache=cache_store, fetcher=FakeFetcher(), api_token=None, timezone="UTC")


@pytest.mark.asyncio
async def test_fetch_error_propagates(cache_store):
    fetcher = FakeFetcher(error=FetchError("request failed: timeout"))

    with pytest.raises(FetchError):
        await load_schedule(cache=cache_store, fetcher=fetcher, api_token="tok", timezone="UTC")
    assert not cache_store.path.exists()


@pytest.mark.asyncio
async def test_cache_write_failure_is_a_warning(cache_store, sample_entries, monkeypatch):
    async def failing_save(entries):
        raise CacheWriteError("failed to save cache: read-only file system")

    monkeypatch.setattr(cache_store, "save", failing_save)

    result = await load_schedule(cache=cache_store, fetcher=FakeFetcher(sample_entries), api_token="tok", timezone="UTC")

    assert result.source == "network"
    assert result.entries == sample_entries
    assert "read-only" in result.warning


@pytest.mark.asyncio
async def test_explicit_week_bypasses_cache(cache_store, sample_entries, make_entry):
    await cache_store.save(sample_entries)
    other_week = [make_entry(2, "Older Show")]
    fetcher = FakeFetcher(other_week)

    result = await load_schedule(
        cache=cache_store, fetcher=fetcher, api_token="tok", timezone="UTC", week=10, year=2024
    )

    assert result.source == "network"
    assert fetcher.calls[0][1].week == 10
    assert await cache_store.load() == sample_entries


@pytest.mark.asyncio
async def test_use_cache_false_forces_fetch(cache_store, sample_entries, make_entry):
    await cache_store.save(sample_entries)
    fresh = [make_entry(3, "Fresh")]

    result = await load_schedule(
        cache=cache_store, fetcher=FakeFetcher(fresh), api_token="tok", timezone="UTC", use_cache=False
    )

    assert result.entries == fresh
    assert await cache_store.load() == fresh


@pytest.mark.asyncio
async def test_refresh_without_snapshot_still_saves(cache_store, sample_entries):
    assert not cache_store.path.exists()

    result = await load_schedule(
        cache=cache_store, fetcher=FakeFetcher(sample_entries), api_token="tok", timezone="UTC", use_cache=False
    )

    assert result.source == "network"
    assert cache_store.path.exists()
    assert await cache_store.load() == sample_entries


@pytest.mark.asyncio
async def test_timezone_resolved_when_not_given(cache_store, monkeypatch):
    monkeypatch.setattr("baka.services.schedule_loader.resolve_timezone", lambda: "America/Chicago")
    fetcher = FakeFetcher()

    await load_schedule(cache=cache_store, fetcher=fetcher, api_token="tok")

    assert fetcher.calls[0][1].timezone == "America/Chicago"
