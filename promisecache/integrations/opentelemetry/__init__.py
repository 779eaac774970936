from typing import Generic, Optional, Type, TypeVar

from opentelemetry.metrics import Meter, MeterProvider

from promisecache.singleflight import register_singleflight_listener
from promisecache.singleflight.manager import SingleFlightManager
from promisecache.integrations.opentelemetry.singleflight import SingleFlightMetricListener

ComponentT = TypeVar("ComponentT")
ListenerT = TypeVar("ListenerT")


class Factory(Generic[ComponentT, ListenerT]):
    def __init__(self, listener_class: Type[ListenerT], *args, **kwargs) -> None:
        self.listener_class = listener_class
        self.args = args
        self.kwargs = kwargs

    def __call__(self, component: ComponentT) -> ListenerT:
        # Components emit events inline, so listeners are plain synchronous instances
        return self.listener_class(component, *self.args, **self.kwargs)


class PromiseCacheOtelInstrumentor:
    def instrument(
        self,
        *,
        namespace: str = "promisecache",
        meter: Optional[Meter] = None,
        meter_provider: Optional[MeterProvider] = None,
    ) -> None:
        register_singleflight_listener(
            Factory[SingleFlightManager, SingleFlightMetricListener](
                SingleFlightMetricListener,
                namespace=namespace,
                meter=meter,
                meter_provider=meter_provider,
            )
        )
