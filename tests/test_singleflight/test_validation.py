import pytest
from promisecache.singleflight import singleflight


def test__singleflight__sync_function_rejected():
    with pytest.raises(TypeError):
        @singleflight()
        def not_async():
            return 1


def test__singleflight__requires_running_loop():
    @singleflight()
    async def load():
        return 1

    with pytest.raises(RuntimeError):
        load()
