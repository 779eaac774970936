import importlib
from typing import TYPE_CHECKING

__version__ = "0.1.0"

# public name -> (module_path, internal_name)
_IMPORT_MAP = {
    "Promise": ("promisecache.promise.handle", "Promise"),
    "PromiseState": ("promisecache.promise.handle", "PromiseState"),
    "AsyncValueCache": ("promisecache.cache.manager", "AsyncValueCache"),
    "SingleFlightManager": ("promisecache.singleflight.manager", "SingleFlightManager"),
    "singleflight": ("promisecache.singleflight.api", "singleflight"),
    "UserRepository": ("promisecache.users.repository", "UserRepository"),
    "NaiveUserRepository": ("promisecache.users.naive", "NaiveUserRepository"),
    "RepositorySettings": ("promisecache.config", "RepositorySettings"),
}

if TYPE_CHECKING:
    from promisecache.cache.manager import AsyncValueCache
    from promisecache.config import RepositorySettings
    from promisecache.promise.handle import Promise, PromiseState
    from promisecache.singleflight.api import singleflight
    from promisecache.singleflight.manager import SingleFlightManager
    from promisecache.users.naive import NaiveUserRepository
    from promisecache.users.repository import UserRepository


# Only runs when someone actually tries to use the import
def __getattr__(name: str):
    if name in _IMPORT_MAP:
        module_path, attr_name = _IMPORT_MAP[name]
        module = importlib.import_module(module_path)
        return getattr(module, attr_name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = list(_IMPORT_MAP.keys())
