# integrations/opentelemetry/singleflight.py
from typing import Any

from promisecache.promise.handle import Promise
from promisecache.singleflight.events import SingleFlightListener
from promisecache.singleflight.manager import SingleFlightManager

from opentelemetry.metrics import get_meter
from promisecache.integrations.opentelemetry.__version__ import __version__


class SingleFlightMetricListener(SingleFlightListener):
    def __init__(self, component: SingleFlightManager, namespace: str, meter=None, meter_provider=None) -> None:
        meter = meter or get_meter(__name__, __version__, meter_provider)
        name = getattr(component, "name", None)
        prefix = f"{namespace}.{name}.singleflight" if name else f"{namespace}.singleflight"

        self._started = meter.create_counter(f"{prefix}.started")
        self._joined = meter.create_counter(f"{prefix}.joined")
        self._fulfilled = meter.create_counter(f"{prefix}.fulfilled")
        self._rejected = meter.create_counter(f"{prefix}.rejected")
        self._cleared = meter.create_counter(f"{prefix}.cleared")

    def on_flight_started(self, flight: "SingleFlightManager", promise: "Promise") -> None:
        self._started.add(1)

    def on_flight_joined(self, flight: "SingleFlightManager", promise: "Promise") -> None:
        self._joined.add(1)

    def on_flight_fulfilled(self, flight: "SingleFlightManager", value: Any) -> None:
        self._fulfilled.add(1)

    def on_flight_rejected(self, flight: "SingleFlightManager", error: BaseException) -> None:
        self._rejected.add(1, {"error.type": type(error).__name__})

    def on_cache_cleared(self, flight: "SingleFlightManager") -> None:
        self._cleared.add(1)
