# tests/test_cache/test_validation.py
import pytest

from promisecache.cache import AsyncValueCache
from promisecache.promise import Promise


def test__cache__clear_on_empty_is_noop():
    cache = AsyncValueCache()
    cache.clear()
    cache.clear()
    assert cache.get_current_value() is None


@pytest.mark.asyncio
async def test__cache__clear_restores_absent():
    cache = AsyncValueCache()
    cache.set_current_value(Promise.resolved("value"))
    cache.clear()
    assert cache.get_current_value() is None
    assert not cache.has_value
