from promisecache.context import require_background
from promisecache.users.models import Unregistered, User


def fetch_current_user() -> User:
    """
    Stand-in for the backend call that resolves the current user.

    Blocking, so it refuses to run on the event loop thread. Always answers `Unregistered`.
    """
    require_background("fetch_current_user")
    return Unregistered()
