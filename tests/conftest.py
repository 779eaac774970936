import pytest

from promisecache.singleflight.events import _SINGLEFLIGHT_LISTENERS


@pytest.fixture(autouse=True)
def _reset_global_listeners():
    yield
    _SINGLEFLIGHT_LISTENERS.clear()
