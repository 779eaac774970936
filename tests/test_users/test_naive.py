# tests/test_users/test_naive.py
import threading
from concurrent.futures import ThreadPoolExecutor
import pytest

from promisecache.users import NaiveUserRepository, Unregistered, UserCache, UserNotFound, fetch_current_user


def test_miss_fetches_then_hit_is_served_from_cache():
    calls = {"n": 0}

    def fetch():
        calls["n"] += 1
        return fetch_current_user()

    cache = UserCache()
    repository = NaiveUserRepository(cache, fetch)

    assert repository.get_current_user() == Unregistered()
    assert repository.get_current_user() == Unregistered()
    assert cache.get_current_user() == Unregistered()
    assert calls["n"] == 1


def test_concurrent_misses_each_fetch():
    barrier = threading.Barrier(2, timeout=5)
    calls = {"n": 0}
    lock = threading.Lock()

    def fetch():
        with lock:
            calls["n"] += 1
        # both callers are inside the fetch at the same time
        barrier.wait()
        return fetch_current_user()

    repository = NaiveUserRepository(fetch=fetch)
    with ThreadPoolExecutor(max_workers=2) as pool:
        users = list(pool.map(lambda _: repository.get_current_user(), range(2)))

    assert users == [Unregistered(), Unregistered()]
    assert calls["n"] == 2


def test_failure_propagates_and_leaves_cache_empty():
    def fetch():
        raise UserNotFound()

    repository = NaiveUserRepository(fetch=fetch)
    with pytest.raises(UserNotFound):
        repository.get_current_user()
    assert repository.cache.get_current_user() is None
