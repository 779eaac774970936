import logging
from typing import Callable, Optional

from promisecache.users.models import User
from promisecache.users.service import fetch_current_user

_logger = logging.getLogger(__name__)


class UserCache:
    """Synchronous cache of the settled user. Holds a value, never a pending computation."""

    def __init__(self) -> None:
        self._user: Optional[User] = None

    def set_current_user(self, user: User) -> None:
        self._user = user

    def get_current_user(self) -> Optional[User]:
        return self._user


class NaiveUserRepository:
    """
    Blocking lookup over UserCache.

    A miss runs the fetch on the calling thread, so callers must already be off the event loop.
    Nothing coordinates concurrent misses: each of them runs its own fetch.
    """

    def __init__(self, cache: Optional[UserCache] = None, fetch: Callable[[], User] = fetch_current_user) -> None:
        self._cache = cache if cache is not None else UserCache()
        self._fetch = fetch

    @property
    def cache(self) -> UserCache:
        return self._cache

    def get_current_user(self) -> User:
        user = self._cache.get_current_user()
        if user is not None:
            return user
        _logger.debug("Cache miss, fetching current user on the calling thread")
        user = self._fetch()
        self._cache.set_current_user(user)
        return user
