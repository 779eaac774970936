class PromiseCacheError(Exception):
    """
    Base class for every error raised by promisecache.
    """


class ExecutionContextError(PromiseCacheError):
    """
    Raised when code runs on the wrong execution context.

    Signals a programming defect (e.g. a blocking fetch invoked on the event loop thread),
    not a runtime condition, so callers should not try to recover from it.
    """
