from promisecache.users.exceptions import UserError, UserNotFound
from promisecache.users.models import Admin, Registered, Unregistered, User, UserProfile, describe_user
from promisecache.users.naive import NaiveUserRepository, UserCache
from promisecache.users.repository import UserRepository
from promisecache.users.service import fetch_current_user

__all__ = (
    "User",
    "UserProfile",
    "Admin",
    "Registered",
    "Unregistered",
    "describe_user",
    "UserError",
    "UserNotFound",
    "UserRepository",
    "NaiveUserRepository",
    "UserCache",
    "fetch_current_user",
)
