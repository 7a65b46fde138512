"""
Service layer infrastructure - resilience patterns for the directory API.

Provides:
- CacheManager: In-memory cache with per-entry TTL
- RetryPolicy: Exponential backoff on transient failures
- HttpxTransport: httpx-backed GET transport
"""

from userclient.services.errors import (
    UserServiceError,
    InvalidArgumentError,
    RequestTimeoutError,
    TransportFailureError,
    ServiceError,
    ParseError,
)
from userclient.services.cache import CacheManager, CacheEntry, CacheStats
from userclient.services.retry import (
    RetryPolicy,
    exponential_backoff,
    is_transient_error,
)
from userclient.services.transport import (
    HttpTransport,
    HttpxTransport,
    TransportResponse,
)

__all__ = [
    # Errors
    "UserServiceError",
    "InvalidArgumentError",
    "RequestTimeoutError",
    "TransportFailureError",
    "ServiceError",
    "ParseError",
    # Cache
    "CacheManager",
    "CacheEntry",
    "CacheStats",
    # Retry
    "RetryPolicy",
    "exponential_backoff",
    "is_transient_error",
    # Transport
    "HttpTransport",
    "HttpxTransport",
    "TransportResponse",
]
