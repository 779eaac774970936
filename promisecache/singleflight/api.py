import inspect
import functools
from typing import Any, Callable, Optional, Sequence

from promisecache.cache.manager import AsyncValueCache
from promisecache.events import EventDispatcher, get_default_name
from promisecache.promise.handle import Promise
from promisecache.singleflight.events import _SINGLEFLIGHT_LISTENERS, SingleFlightListener
from promisecache.singleflight.manager import SingleFlightManager
from promisecache.singleflight.typing import FuncT


class _WrappedFlight:
    """
    Calling the instance returns the shared Promise instead of a coroutine.
    The slot has a single implicit key: the arguments of the call that started a flight win,
    later calls join it whatever their arguments are.
    """

    def __init__(self, func: FuncT, manager: SingleFlightManager) -> None:
        self._original = func
        self._manager = manager
        functools.update_wrapper(self, func)

    def __call__(self, *args: Any, **kwargs: Any) -> Promise:
        return self._manager(lambda promise: Promise.from_coroutine(self._original(*args, **kwargs), promise))

    def clear(self) -> None:
        self._manager.invalidate()


def singleflight(
    *,
    name: Optional[str] = None,
    listeners: Optional[Sequence[SingleFlightListener]] = None,
    cache: Optional[AsyncValueCache] = None,
) -> Callable[[Callable], _WrappedFlight]:
    """
    The single-flight pattern coalesces concurrent calls into one in-flight execution
    and keeps its outcome until it fails.

    **Parameters:**
        * **name** - Optional name for the component (default: the function's qualified name)
        * **listeners** - Optional sequence of SingleFlightListener for event handling
        * **cache** - Optional AsyncValueCache to hold the promise (default: a private one)
    """
    def _decorator(func: FuncT) -> _WrappedFlight:
        if not inspect.iscoroutinefunction(func):
            raise TypeError("@singleflight requires an async function")
        event_dispatcher = EventDispatcher[SingleFlightManager, SingleFlightListener](
            listeners,
            _SINGLEFLIGHT_LISTENERS,
        )
        manager = SingleFlightManager(
            cache=cache,
            event_dispatcher=event_dispatcher.as_listener,
            name=name or get_default_name(func),
        )
        event_dispatcher.set_component(manager)
        return _WrappedFlight(func, manager)

    return _decorator
