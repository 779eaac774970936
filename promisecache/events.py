import inspect
import logging
from typing import Any, Callable, Generic, Iterator, Optional, Sequence, TypeVar, Union

_logger = logging.getLogger(__name__)

ComponentT = TypeVar("ComponentT")
ListenerT = TypeVar("ListenerT")

# A factory builds a listener bound to the component that emits the events.
ListenerFactoryT = Callable[[Any], Any]


def get_default_name(func: Callable) -> str:
    return f"{func.__module__}.{func.__qualname__}"


class ListenerRegistry(Generic[ComponentT, ListenerT]):
    """
    Process-wide collection of listeners (or listener factories) for one component type.
    Components created after a registration pick the listener up.
    """

    def __init__(self) -> None:
        self._listeners: list[Union[ListenerT, ListenerFactoryT]] = []

    def register(self, listener: Union[ListenerT, ListenerFactoryT]) -> None:
        self._listeners.append(listener)

    def clear(self) -> None:
        self._listeners.clear()

    def __iter__(self) -> Iterator[Union[ListenerT, ListenerFactoryT]]:
        return iter(tuple(self._listeners))

    def __len__(self) -> int:
        return len(self._listeners)


class _FanOutListener:
    """
    Calls the same hook on every listener, inline and in order.
    Hooks are plain functions: the components emitting them must not suspend.
    """

    def __init__(self, dispatcher: "EventDispatcher") -> None:
        self._dispatcher = dispatcher

    def __getattr__(self, hook: str) -> Callable[..., None]:
        if not hook.startswith("on_"):
            raise AttributeError(hook)

        def _emit(*args: Any, **kwargs: Any) -> None:
            for listener in self._dispatcher.listeners:
                getattr(listener, hook)(*args, **kwargs)

        return _emit


class EventDispatcher(Generic[ComponentT, ListenerT]):
    def __init__(
        self,
        local_listeners: Optional[Sequence[ListenerT]] = None,
        global_listeners: Optional[ListenerRegistry[ComponentT, ListenerT]] = None,
    ) -> None:
        self._local: tuple[ListenerT, ...] = tuple(local_listeners or ())
        self._global = global_listeners
        self._resolved: tuple[ListenerT, ...] = self._local
        self._component: Optional[ComponentT] = None

    @property
    def listeners(self) -> tuple[ListenerT, ...]:
        return self._resolved

    @property
    def as_listener(self) -> Any:
        return _FanOutListener(self)

    def set_component(self, component: ComponentT) -> None:
        """Bind the emitting component and build global listeners from their factories."""
        self._component = component
        resolved: list[ListenerT] = list(self._local)
        for entry in self._global or ():
            # Listener instances expose on_* hooks; anything else callable is a factory
            if _is_factory(entry):
                listener = _build_listener(entry, component)
                _logger.debug(f"Built listener {type(listener).__name__} for {component!r}")
                resolved.append(listener)
            else:
                resolved.append(entry)
        self._resolved = tuple(resolved)


def _is_factory(entry: Any) -> bool:
    if isinstance(entry, type):
        return True
    return callable(entry) and not any(name.startswith("on_") for name in dir(type(entry)))


def _build_listener(factory: Any, component: Any) -> Any:
    """Listener classes with a no-argument constructor are instantiated as is, other factories get the component."""
    if isinstance(factory, type):
        try:
            parameters = inspect.signature(factory).parameters
        except (TypeError, ValueError):
            parameters = {}
        if not parameters:
            return factory()
    return factory(component)
