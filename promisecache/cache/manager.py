from typing import Generic, Optional, TypeVar

from promisecache.promise.handle import Promise

T = TypeVar("T")


class AsyncValueCache(Generic[T]):
    """
    AsyncValueCache holds at most one asynchronous computation, pending or settled.

    Presence in the slot says nothing about the handle's resolution state. The slot is a plain
    mutable cell: no locking, no eviction. Callers confine access to the event loop thread.
    """

    def __init__(self) -> None:
        self._slot: Optional[Promise[T]] = None

    @property
    def has_value(self) -> bool:
        return self._slot is not None

    def set_current_value(self, handle: Promise[T]) -> None:
        self._slot = handle

    def get_current_value(self) -> Optional[Promise[T]]:
        return self._slot

    def clear(self) -> None:
        self._slot = None

    def __repr__(self) -> str:
        return f"<AsyncValueCache {self._slot!r}>"
