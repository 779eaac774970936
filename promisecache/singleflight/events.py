from typing import TYPE_CHECKING, Any, Union
from promisecache.events import ListenerFactoryT, ListenerRegistry

if TYPE_CHECKING:
    from promisecache.promise.handle import Promise
    from promisecache.singleflight.manager import SingleFlightManager

_SINGLEFLIGHT_LISTENERS: ListenerRegistry["SingleFlightManager", "SingleFlightListener"] = ListenerRegistry()


class SingleFlightListener:
    def on_flight_started(self, flight: "SingleFlightManager", promise: "Promise") -> None:
        pass

    def on_flight_joined(self, flight: "SingleFlightManager", promise: "Promise") -> None:
        pass

    def on_flight_fulfilled(self, flight: "SingleFlightManager", value: Any) -> None:
        pass

    def on_flight_rejected(self, flight: "SingleFlightManager", error: BaseException) -> None:
        pass

    def on_cache_cleared(self, flight: "SingleFlightManager") -> None:
        pass


def register_singleflight_listener(listener: Union[SingleFlightListener, ListenerFactoryT]) -> None:
    global _SINGLEFLIGHT_LISTENERS
    _SINGLEFLIGHT_LISTENERS.register(listener)
