from userclient.directory.client import (
    ALL_USERS_CACHE_KEY,
    UserDirectoryClient,
    create_user_directory_client,
    user_cache_key,
)
from userclient.directory.models import User, UserPage, parse_user, parse_user_page

__all__ = [
    "ALL_USERS_CACHE_KEY",
    "UserDirectoryClient",
    "create_user_directory_client",
    "user_cache_key",
    "User",
    "UserPage",
    "parse_user",
    "parse_user_page",
]
