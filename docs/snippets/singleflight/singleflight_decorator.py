import asyncio
from promisecache.singleflight import singleflight

@singleflight(name="user_profile")
async def get_user_profile() -> dict:
    """
    Fetch the profile from a remote service; concurrent callers share one request
    """
    ...

async def main() -> None:
    first, second = get_user_profile(), get_user_profile()
    assert first is second
    await first

asyncio.run(main())
