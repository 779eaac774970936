from promisecache.exceptions import PromiseCacheError


class PromiseAlreadySettled(PromiseCacheError):
    """
    Raised when fulfilling or rejecting a promise that already left the pending state.
    """


class PromiseNotSettled(PromiseCacheError):
    """
    Raised when reading the outcome of a promise that is still pending.
    """


class PromiseCancelled(PromiseCacheError):
    """
    Rejection reason for a promise whose underlying task was cancelled.
    """
