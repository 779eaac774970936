from promisecache.cache.manager import AsyncValueCache

__all__ = ("AsyncValueCache",)
