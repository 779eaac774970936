from promisecache.exceptions import PromiseCacheError


class UserError(PromiseCacheError):
    """
    Base class for failures of the user lookup service.
    """


class UserNotFound(UserError):
    """
    Raised by a fetch when no current user exists.
    """
