from typing import Any, Callable, Coroutine, TypeVar

from promisecache.promise.handle import Promise

FuncT = TypeVar("FuncT", bound=Callable[..., Coroutine[Any, Any, Any]])
StartT = Callable[[Promise], None]
