from promisecache.singleflight.api import singleflight
from promisecache.singleflight.events import SingleFlightListener, register_singleflight_listener
from promisecache.singleflight.manager import SingleFlightManager

__all__ = ("singleflight", "SingleFlightListener", "register_singleflight_listener", "SingleFlightManager")
