# tests/test_singleflight/test_behaviour.py
import asyncio
import threading
import pytest

from promisecache.cache import AsyncValueCache
from promisecache.exceptions import ExecutionContextError
from promisecache.promise import Promise
from promisecache.singleflight import SingleFlightListener
from promisecache.singleflight.manager import SingleFlightManager


@pytest.mark.asyncio
async def test_promise_is_cached_before_work_starts():
    cache = AsyncValueCache()
    manager = SingleFlightManager(cache=cache, name="ordering")
    seen_in_cache = []

    def start(promise: Promise) -> None:
        seen_in_cache.append(cache.get_current_value() is promise)
        promise.fulfill("ok")

    promise = manager(start)
    assert seen_in_cache == [True]
    assert await promise == "ok"


@pytest.mark.asyncio
async def test_start_raising_clears_slot_and_propagates():
    manager = SingleFlightManager()

    def start(promise: Promise) -> None:
        raise OSError("cannot start")

    with pytest.raises(OSError):
        manager(start)
    assert manager.cache.get_current_value() is None

    started = []
    promise = manager(lambda p: (started.append(p), p.fulfill(1)))
    assert started == [promise]
    assert await promise == 1


@pytest.mark.asyncio
async def test_stale_rejection_keeps_newer_flight():
    manager = SingleFlightManager()
    old = manager(lambda p: None)

    manager.invalidate()
    new = manager(lambda p: None)
    assert new is not old

    old.reject(RuntimeError("late failure"))
    with pytest.raises(RuntimeError):
        await old
    await asyncio.sleep(0)

    assert manager.cache.get_current_value() is new
    new.fulfill("fresh")
    assert await new == "fresh"


@pytest.mark.asyncio
async def test_rejection_clears_slot_exactly_once():
    class ClearCounter(SingleFlightListener):
        cleared = 0

        def on_cache_cleared(self, flight) -> None:
            self.cleared += 1

    listener = ClearCounter()
    manager = SingleFlightManager(event_dispatcher=listener)

    promise = manager(lambda p: None)
    promise.reject(RuntimeError("boom"))
    with pytest.raises(RuntimeError):
        await promise
    await asyncio.sleep(0)

    assert listener.cleared == 1
    assert manager.cache.get_current_value() is None


@pytest.mark.asyncio
async def test_call_from_another_loop_thread_is_refused():
    manager = SingleFlightManager()
    promise = manager(lambda p: p.fulfill("main"))
    await promise

    errors = []

    def other_loop() -> None:
        async def call() -> None:
            manager(lambda p: p.fulfill("other"))

        try:
            asyncio.run(call())
        except ExecutionContextError as e:
            errors.append(e)

    thread = threading.Thread(target=other_loop)
    thread.start()
    thread.join()

    assert len(errors) == 1


@pytest.mark.asyncio
async def test_start_raising_reports_cache_cleared():
    class EventLog(SingleFlightListener):
        def __init__(self) -> None:
            self.events = []

        def on_flight_started(self, flight, promise) -> None:
            self.events.append("started")

        def on_flight_rejected(self, flight, error) -> None:
            self.events.append("rejected")

        def on_cache_cleared(self, flight) -> None:
            self.events.append("cleared")

    listener = EventLog()
    manager = SingleFlightManager(event_dispatcher=listener)

    def start(promise: Promise) -> None:
        raise OSError("cannot start")

    with pytest.raises(OSError):
        manager(start)
    await asyncio.sleep(0)

    assert listener.events == ["started", "cleared", "rejected"]
