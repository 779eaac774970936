import asyncio
import functools
import logging
from concurrent.futures import Executor
from typing import Any, Callable, Optional, TypeVar

from promisecache.promise.exceptions import PromiseCancelled
from promisecache.promise.handle import Promise

_logger = logging.getLogger(__name__)

T = TypeVar("T")


def dispatch_background(
    func: Callable[..., T],
    *args: Any,
    delay: float = 0.0,
    executor: Optional[Executor] = None,
    promise: Optional[Promise[T]] = None,
) -> Promise[T]:
    """
    Run func(*args) on a worker thread and settle the promise on the event loop.

    The outcome is delivered `delay` seconds after the worker finishes, always on the loop thread
    that owns the promise, so observers never run on the worker. There is no cancellation.
    """
    if delay < 0:
        raise ValueError("delay must be >= 0")

    target: Promise[T] = promise if promise is not None else Promise()
    loop = target.loop
    background = loop.run_in_executor(executor, functools.partial(func, *args))

    def _deliver(done: asyncio.Future) -> None:
        if done.cancelled():
            loop.call_later(delay, target.reject, PromiseCancelled())
            return
        error = done.exception()
        if error is not None:
            _logger.debug(f"Background call {getattr(func, '__name__', func)!s} failed: {error!r}")
            loop.call_later(delay, target.reject, error)
        else:
            loop.call_later(delay, target.fulfill, done.result())

    background.add_done_callback(_deliver)
    return target
