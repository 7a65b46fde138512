"""
Resilient async client for a paginated user directory API.
"""

from userclient.directory import (
    User,
    UserDirectoryClient,
    create_user_directory_client,
)
from userclient.services import (
    CacheManager,
    HttpxTransport,
    InvalidArgumentError,
    ParseError,
    RequestTimeoutError,
    RetryPolicy,
    ServiceError,
    TransportFailureError,
    UserServiceError,
)
from userclient.settings import Settings, load_settings

__version__ = "0.1.0"

__all__ = [
    "User",
    "UserDirectoryClient",
    "create_user_directory_client",
    "CacheManager",
    "HttpxTransport",
    "RetryPolicy",
    "UserServiceError",
    "InvalidArgumentError",
    "RequestTimeoutError",
    "TransportFailureError",
    "ServiceError",
    "ParseError",
    "Settings",
    "load_settings",
]
