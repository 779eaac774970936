# tests/test_promise/test_dispatch.py
import asyncio
import threading
import pytest

from promisecache.promise import Promise, dispatch_background


@pytest.mark.asyncio
async def test_work_runs_on_worker_and_settles_on_loop_thread():
    loop_thread = threading.get_ident()
    threads = {}

    def work(x):
        threads["work"] = threading.get_ident()
        return x * 2

    promise = dispatch_background(work, 21)
    promise.then(lambda _: threads.setdefault("observer", threading.get_ident()))

    assert await promise == 42
    await asyncio.sleep(0)
    assert threads["work"] != loop_thread
    assert threads["observer"] == loop_thread


@pytest.mark.asyncio
async def test_settlement_waits_for_delay():
    loop = asyncio.get_running_loop()
    began = loop.time()

    assert await dispatch_background(lambda: "late", delay=0.05) == "late"
    assert loop.time() - began >= 0.05


@pytest.mark.asyncio
async def test_worker_exception_rejects_promise():
    def broken():
        raise ConnectionError("down")

    promise = dispatch_background(broken, delay=0.01)
    with pytest.raises(ConnectionError):
        await promise
    assert promise.is_rejected


@pytest.mark.asyncio
async def test_settles_the_given_promise():
    target = Promise()
    assert dispatch_background(lambda: 1, promise=target) is target
    assert await target == 1


@pytest.mark.asyncio
async def test_negative_delay_is_rejected():
    with pytest.raises(ValueError):
        dispatch_background(lambda: None, delay=-1)
