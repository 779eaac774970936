from promisecache.promise.dispatch import dispatch_background
from promisecache.promise.exceptions import PromiseAlreadySettled, PromiseCancelled, PromiseNotSettled
from promisecache.promise.handle import Promise, PromiseState

__all__ = (
    "Promise",
    "PromiseState",
    "dispatch_background",
    "PromiseAlreadySettled",
    "PromiseNotSettled",
    "PromiseCancelled",
)
