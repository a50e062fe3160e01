import asyncio
import logging

import pytest

from media_stream_system.video.application.view_accounting import ViewAccountant
from media_stream_system.video.domain.interfaces import ViewCounter
from media_stream_system.video.infrastructure.counters import StorageViewCounter


class DelayedCounterStore(ViewCounter):
    """In-memory counter whose increments take a while to land"""

    def __init__(self, delay: float = 0.0):
        self.delay = delay
        self.counts = {}

    async def increment(self, media_id):
        await asyncio.sleep(self.delay)
        # No await between read and write
        self.counts[media_id] = self.counts.get(media_id, 0) + 1
        return self.counts[media_id]


class FailingCounter(ViewCounter):
    async def increment(self, media_id):
        raise OSError("index is read-only")


class MissingCounter(ViewCounter):
    async def increment(self, media_id):
        return None


@pytest.mark.asyncio
async def test_every_scheduled_view_reaches_the_counter():
    store = DelayedCounterStore(delay=0.01)
    accountant = ViewAccountant(store)

    for _ in range(50):
        accountant.record_view("clip")
    dropped = await accountant.drain(timeout=5)

    assert dropped == 0
    assert store.counts["clip"] == 50
    assert accountant.pending_count == 0


@pytest.mark.asyncio
async def test_concurrent_views_on_storage_counter_are_not_lost(store_media, storage_manager):
    media_id = store_media("clip.mp4", b"0123456789")
    accountant = ViewAccountant(StorageViewCounter(storage_manager))

    # Each increment runs in a worker thread against the shared index
    for _ in range(40):
        accountant.record_view(media_id)
    dropped = await accountant.drain(timeout=10)

    assert dropped == 0
    assert storage_manager.get_media(media_id)["views"] == 40


@pytest.mark.asyncio
async def test_record_view_does_not_wait_for_increment():
    store = DelayedCounterStore(delay=0.5)
    accountant = ViewAccountant(store)

    accountant.record_view("clip")

    assert store.counts == {}
    assert accountant.pending_count == 1
    await accountant.drain(timeout=5)
    assert store.counts == {"clip": 1}


@pytest.mark.asyncio
async def test_failed_increment_is_logged_not_raised(caplog):
    accountant = ViewAccountant(FailingCounter())

    with caplog.at_level(logging.ERROR):
        accountant.record_view("clip")
        await accountant.drain(timeout=5)

    assert "index is read-only" in caplog.text


@pytest.mark.asyncio
async def test_slow_increment_times_out(caplog):
    accountant = ViewAccountant(DelayedCounterStore(delay=5), increment_timeout_seconds=0.05)

    with caplog.at_level(logging.ERROR):
        accountant.record_view("clip")
        dropped = await accountant.drain(timeout=5)

    assert dropped == 0
    assert "timed out" in caplog.text


@pytest.mark.asyncio
async def test_increment_for_unknown_record_is_logged(caplog):
    accountant = ViewAccountant(MissingCounter())

    with caplog.at_level(logging.WARNING):
        accountant.record_view("nope")
        await accountant.drain(timeout=5)

    assert "matched no record" in caplog.text


@pytest.mark.asyncio
async def test_drain_drops_increments_past_timeout(caplog):
    store = DelayedCounterStore(delay=5)
    accountant = ViewAccountant(store, increment_timeout_seconds=10)

    accountant.record_view("a")
    accountant.record_view("b")
    with caplog.at_level(logging.WARNING):
        dropped = await accountant.drain(timeout=0.05)

    assert dropped == 2
    assert store.counts == {}
    assert "Dropped in-flight increment record-view-a" in caplog.text
    assert accountant.pending_count == 0


@pytest.mark.asyncio
async def test_drain_with_nothing_pending():
    assert await ViewAccountant(DelayedCounterStore()).drain(timeout=0.1) == 0


@pytest.mark.asyncio
async def test_disabled_accounting_schedules_nothing():
    store = DelayedCounterStore()
    accountant = ViewAccountant(store, enabled=False)

    accountant.record_view("clip")
    await accountant.drain(timeout=1)

    assert accountant.pending_count == 0
    assert store.counts == {}


def test_record_view_without_event_loop_does_not_raise(caplog):
    accountant = ViewAccountant(DelayedCounterStore())

    with caplog.at_level(logging.ERROR):
        accountant.record_view("clip")

    assert accountant.pending_count == 0
    assert "no running event loop" in caplog.text
