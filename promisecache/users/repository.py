import logging
from concurrent.futures import Executor, ThreadPoolExecutor
from typing import TYPE_CHECKING, Any, Callable, Optional, Sequence

from promisecache.cache.manager import AsyncValueCache
from promisecache.events import EventDispatcher
from promisecache.promise.dispatch import dispatch_background
from promisecache.promise.handle import Promise
from promisecache.singleflight.events import _SINGLEFLIGHT_LISTENERS, SingleFlightListener
from promisecache.singleflight.manager import SingleFlightManager
from promisecache.users.models import User
from promisecache.users.service import fetch_current_user

if TYPE_CHECKING:
    from promisecache.config import RepositorySettings

_logger = logging.getLogger(__name__)

DEFAULT_FETCH_DELAY = 3.0

FetchT = Callable[[], User]


class UserRepository:
    """
    Resolves the current user through a single-flight promise cache.

    The repository owns its cache. Concurrent callers share one in-flight fetch; a fulfilled
    promise is served from the cache for good, a rejected one is dropped so the next call
    fetches again.

    **Parameters:**
        * **cache** - Optional AsyncValueCache holding the current user's promise
        * **fetch** - Blocking callable returning the user, run on a worker thread
        * **delay** - Seconds between the fetch finishing and the promise settling
        * **executor** - Optional executor for the fetch (default: the loop's default executor)
        * **listeners** - Optional sequence of SingleFlightListener for event handling
        * **name** - Component name used in logs and metrics
    """

    def __init__(
        self,
        cache: Optional[AsyncValueCache] = None,
        *,
        fetch: FetchT = fetch_current_user,
        delay: float = DEFAULT_FETCH_DELAY,
        executor: Optional[Executor] = None,
        listeners: Optional[Sequence[SingleFlightListener]] = None,
        name: str = "current_user",
    ) -> None:
        if delay < 0:
            raise ValueError("delay must be >= 0")

        self._cache: AsyncValueCache = cache if cache is not None else AsyncValueCache()
        self._fetch = fetch
        self._delay = delay
        self._executor = executor
        self._owns_executor = False

        event_dispatcher = EventDispatcher[SingleFlightManager, SingleFlightListener](
            listeners,
            _SINGLEFLIGHT_LISTENERS,
        )
        self._flight = SingleFlightManager(
            cache=self._cache,
            event_dispatcher=event_dispatcher.as_listener,
            name=name,
        )
        event_dispatcher.set_component(self._flight)

    @classmethod
    def from_settings(cls, settings: "RepositorySettings", **overrides: Any) -> "UserRepository":
        executor = overrides.pop("executor", None)
        owns_executor = False
        if executor is None and settings.max_workers is not None:
            executor = ThreadPoolExecutor(max_workers=settings.max_workers, thread_name_prefix=settings.name)
            owns_executor = True

        options: dict[str, Any] = {"delay": settings.fetch_delay, "name": settings.name}
        options.update(overrides)
        repository = cls(executor=executor, **options)
        repository._owns_executor = owns_executor
        return repository

    @property
    def cache(self) -> AsyncValueCache:
        return self._cache

    @property
    def name(self) -> Optional[str]:
        return self._flight.name

    @property
    def delay(self) -> float:
        return self._delay

    def get_current_user(self) -> Promise[User]:
        return self._flight(self._start_fetch)

    def invalidate(self) -> None:
        self._flight.invalidate()

    def close(self) -> None:
        if self._owns_executor and self._executor is not None:
            self._executor.shutdown(wait=False)
            self._executor = None

    def _start_fetch(self, promise: Promise[User]) -> None:
        _logger.debug(f"Fetching current user in background, delivering after {self._delay:.2f}s")
        dispatch_background(self._fetch, delay=self._delay, executor=self._executor, promise=promise)
