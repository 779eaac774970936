import asyncio
from promisecache.users import UserRepository, describe_user

repository = UserRepository(delay=1.0)

async def render() -> None:
    promise = (
        repository.get_current_user()
        .always(lambda: print("done loading"))
        .then(lambda user: print(f"SUCCESS: {describe_user(user)}"))
        .catch(lambda error: print(f"FAILED: {error!r}, call render() again to retry"))
    )
    await asyncio.gather(promise, return_exceptions=True)

asyncio.run(render())
