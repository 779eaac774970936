import asyncio
import logging
from typing import Any, Optional

from promisecache.cache.manager import AsyncValueCache
from promisecache.context import require_foreground
from promisecache.promise.handle import Promise
from promisecache.singleflight.events import SingleFlightListener
from promisecache.singleflight.typing import StartT

_logger = logging.getLogger(__name__)


class SingleFlightManager:
    """
    Get-or-create over a single-slot cache.

    The first caller finding the slot empty creates a pending promise, stores it before any work
    starts, then starts the work. Every caller arriving before the slot is cleared gets that same
    promise. A rejection clears the slot so the next call starts a fresh flight.
    """

    def __init__(
        self,
        cache: Optional[AsyncValueCache] = None,
        event_dispatcher: Optional[SingleFlightListener] = None,
        name: Optional[str] = None,
    ) -> None:
        self._cache: AsyncValueCache = cache if cache is not None else AsyncValueCache()
        self._event_dispatcher = event_dispatcher
        self._name = name
        self._loop: Optional[asyncio.AbstractEventLoop] = None

    @property
    def name(self) -> Optional[str]:
        return self._name

    @property
    def cache(self) -> AsyncValueCache:
        return self._cache

    def invalidate(self) -> None:
        self._cache.clear()
        if self._event_dispatcher:
            self._event_dispatcher.on_cache_cleared(self)

    def _bind_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None or self._loop.is_closed():
            self._loop = asyncio.get_running_loop()
        else:
            require_foreground(self._loop)
        return self._loop

    def __call__(self, start: StartT) -> Promise:
        loop = self._bind_loop()

        existing = self._cache.get_current_value()
        if existing is not None and existing.loop is not loop:
            # a handle from a previous event loop can never settle or notify here
            _logger.warning(f"Dropping {existing!r} for {self._name} left by a previous event loop")
            self.invalidate()
            existing = None
        if existing is not None:
            _logger.debug(f"Joining {existing!r} for {self._name}")
            if self._event_dispatcher:
                self._event_dispatcher.on_flight_joined(self, existing)
            return existing

        promise: Promise = Promise(loop)
        self._cache.set_current_value(promise)
        promise.then(self._on_fulfilled).catch(lambda error: self._on_rejected(promise, error))
        _logger.info(f"Starting flight for {self._name}")
        if self._event_dispatcher:
            self._event_dispatcher.on_flight_started(self, promise)

        try:
            start(promise)
        except Exception as e:
            if self._cache.get_current_value() is promise:
                self.invalidate()
            promise.reject(e)
            raise
        return promise

    def _on_fulfilled(self, value: Any) -> None:
        if self._event_dispatcher:
            self._event_dispatcher.on_flight_fulfilled(self, value)

    def _on_rejected(self, promise: Promise, error: BaseException) -> None:
        _logger.warning(f"Flight for {self._name} failed: {error!r}")
        if self._event_dispatcher:
            self._event_dispatcher.on_flight_rejected(self, error)
        # a newer flight may already own the slot after a manual invalidate
        if self._cache.get_current_value() is promise:
            self.invalidate()
