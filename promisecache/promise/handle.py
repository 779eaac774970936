import asyncio
from enum import Enum
from typing import Any, Callable, Coroutine, Generator, Generic, Optional, TypeVar

from promisecache.promise.exceptions import PromiseAlreadySettled, PromiseCancelled, PromiseNotSettled

T = TypeVar("T")


class PromiseState(str, Enum):
    PENDING = "pending"
    FULFILLED = "fulfilled"
    REJECTED = "rejected"


class Promise(Generic[T]):
    """
    Handle to a value that is not known yet.

    Backed by an asyncio future on the loop that created it. The handle settles at most once,
    either fulfilled with a value or rejected with an exception. Observers registered with
    then/catch/always run on that loop, once each, in registration order, even when they are
    attached after the handle settled.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop or asyncio.get_running_loop()
        self._future: asyncio.Future = self._loop.create_future()

    @classmethod
    def resolved(cls, value: T, loop: Optional[asyncio.AbstractEventLoop] = None) -> "Promise[T]":
        promise: Promise[T] = cls(loop)
        promise.fulfill(value)
        return promise

    @classmethod
    def failed(cls, error: BaseException, loop: Optional[asyncio.AbstractEventLoop] = None) -> "Promise[Any]":
        promise: Promise[Any] = cls(loop)
        promise.reject(error)
        return promise

    @classmethod
    def from_coroutine(
        cls,
        coro: Coroutine[Any, Any, T],
        promise: Optional["Promise[T]"] = None,
    ) -> "Promise[T]":
        """Run coro as a task on the running loop and settle the promise with its outcome."""
        target: Promise[T] = promise if promise is not None else cls()
        task = target._loop.create_task(coro)

        def _settle(done: asyncio.Task) -> None:
            if done.cancelled():
                target.reject(PromiseCancelled())
                return
            error = done.exception()
            if error is not None:
                target.reject(error)
            else:
                target.fulfill(done.result())

        task.add_done_callback(_settle)
        return target

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop

    @property
    def state(self) -> PromiseState:
        if not self._future.done():
            return PromiseState.PENDING
        if self._future.exception() is not None:
            return PromiseState.REJECTED
        return PromiseState.FULFILLED

    @property
    def is_pending(self) -> bool:
        return self.state is PromiseState.PENDING

    @property
    def is_fulfilled(self) -> bool:
        return self.state is PromiseState.FULFILLED

    @property
    def is_rejected(self) -> bool:
        return self.state is PromiseState.REJECTED

    @property
    def value(self) -> T:
        if not self._future.done():
            raise PromiseNotSettled()
        return self._future.result()

    @property
    def error(self) -> Optional[BaseException]:
        if not self._future.done():
            raise PromiseNotSettled()
        return self._future.exception()

    def fulfill(self, value: T) -> None:
        if self._future.done():
            raise PromiseAlreadySettled(f"cannot fulfill a {self.state.value} promise")
        self._future.set_result(value)

    def reject(self, error: BaseException) -> None:
        if self._future.done():
            raise PromiseAlreadySettled(f"cannot reject a {self.state.value} promise")
        self._future.set_exception(error)

    def then(self, on_fulfilled: Callable[[T], Any]) -> "Promise[T]":
        def _observer(future: asyncio.Future) -> None:
            if future.exception() is None:
                on_fulfilled(future.result())

        self._future.add_done_callback(_observer)
        return self

    def catch(self, on_rejected: Callable[[BaseException], Any]) -> "Promise[T]":
        def _observer(future: asyncio.Future) -> None:
            error = future.exception()
            if error is not None:
                on_rejected(error)

        self._future.add_done_callback(_observer)
        return self

    def always(self, on_settled: Callable[[], Any]) -> "Promise[T]":
        self._future.add_done_callback(lambda _: on_settled())
        return self

    def __await__(self) -> Generator[Any, None, T]:
        # shielded so a cancelled waiter leaves the shared handle untouched
        return asyncio.shield(self._future).__await__()

    def __repr__(self) -> str:
        return f"<Promise {self.state.value}>"
