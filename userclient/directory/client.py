"""
UserDirectoryClient - Cached, retrying client for the user directory API.

Combines:
- CacheManager as a read-through layer in front of the network
- RetryPolicy around every remote fetch
- HttpTransport for the actual GET requests
"""

from loguru import logger

from userclient.directory.models import User, parse_user, parse_user_page
from userclient.services.cache import CacheManager
from userclient.services.errors import (
    InvalidArgumentError,
    ParseError,
    RequestTimeoutError,
    ServiceError,
)
from userclient.services.retry import RetryPolicy
from userclient.services.transport import (
    HttpTransport,
    HttpxTransport,
    TransportResponse,
)
from userclient.settings import Settings, load_settings

ALL_USERS_CACHE_KEY = "all_users"
USER_CACHE_KEY_FORMAT = "user_{}"
API_KEY_HEADER = "x-api-key"
REQUEST_TIMEOUT_STATUS = 408


def user_cache_key(user_id: int) -> str:
    return USER_CACHE_KEY_FORMAT.format(user_id)


class UserDirectoryClient:
    """
    Client for a paginated user directory (reqres.in shape).

    Usage:
        settings = load_settings()
        async with create_user_directory_client(settings) as client:
            users = await client.get_all_users()
            user = await client.get_user_by_id(2)

    All collaborators are injected; tests pass a fake transport, a cache
    with a controlled clock, and a retry policy with zero backoff.
    """

    def __init__(
        self,
        settings: Settings,
        transport: HttpTransport,
        cache: CacheManager,
        retry_policy: RetryPolicy | None = None,
    ):
        self._settings = settings
        self._transport = transport
        self._cache = cache
        self._retry_policy = retry_policy or RetryPolicy(
            max_retries=settings.retry_count
        )

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def cache(self) -> CacheManager:
        return self._cache

    async def get_user_by_id(self, user_id: int) -> User:
        """
        Get a single user, from cache when possible.

        Raises:
            InvalidArgumentError: If user_id is not a positive integer
            RequestTimeoutError: If every attempt timed out
            TransportFailureError: If every attempt failed to connect
            ServiceError: If the API answered with a non-success status
            ParseError: If the response body is not a user envelope
        """
        if isinstance(user_id, bool) or not isinstance(user_id, int) or user_id <= 0:
            raise InvalidArgumentError(
                "user_id", user_id, "User ID must be greater than zero"
            )

        cache_key = user_cache_key(user_id)
        cached = await self._cache.get(cache_key)
        if cached is not None:
            logger.info(f"Cache hit for user {user_id}")
            return cached

        user = await self._retry_policy.execute(
            lambda: self._fetch_user(user_id),
            description=f"get_user_by_id({user_id})",
        )

        await self._cache.set(cache_key, user, self._settings.cache_ttl)
        return user

    async def get_all_users(self) -> list[User]:
        """
        Get every user across all pages, from cache when possible.

        A retry restarts the traversal at page 1.

        Raises:
            RequestTimeoutError: If every attempt timed out
            TransportFailureError: If every attempt failed to connect
            ServiceError: If any page answered with a non-success status
            ParseError: If any page body is not a paginated envelope
        """
        cached = await self._cache.get(ALL_USERS_CACHE_KEY)
        if cached is not None:
            logger.info("Cache hit for get_all_users")
            return list(cached)

        users = await self._retry_policy.execute(
            self._fetch_all_pages,
            description="get_all_users",
        )

        await self._cache.set(ALL_USERS_CACHE_KEY, users, self._settings.cache_ttl)
        return list(users)

    async def invalidate_user(self, user_id: int) -> bool:
        """Drop a cached user. Returns True if an entry was removed."""
        return await self._cache.delete(user_cache_key(user_id))

    async def invalidate_all_users(self) -> bool:
        """Drop the cached collection. Returns True if an entry was removed."""
        return await self._cache.delete(ALL_USERS_CACHE_KEY)

    async def _fetch_user(self, user_id: int) -> User:
        logger.info(f"Fetching user {user_id} from API")
        response = await self._get(f"{self._settings.base_url}/users/{user_id}")

        if response.status_code == REQUEST_TIMEOUT_STATUS:
            raise RequestTimeoutError(
                f"Request timed out while fetching user {user_id}",
                operation="get_user_by_id",
            )
        if not response.is_success:
            logger.error(f"Failed to fetch user {user_id}: HTTP {response.status_code}")
            raise ServiceError(
                "get_user_by_id", response.status_code, user_id=user_id
            )

        try:
            return parse_user(response.body, user_id=user_id)
        except ParseError as e:
            logger.error(str(e))
            raise

    async def _fetch_all_pages(self) -> list[User]:
        logger.info("Fetching all users from API")
        users: list[User] = []
        page_number = 1

        while True:
            response = await self._get(
                f"{self._settings.base_url}/users?page={page_number}"
            )

            if response.status_code == REQUEST_TIMEOUT_STATUS:
                raise RequestTimeoutError(
                    f"Request timed out while fetching users on page {page_number}",
                    operation="get_all_users",
                )
            if not response.is_success:
                logger.error(
                    f"Could not fetch users on page {page_number}: "
                    f"HTTP {response.status_code}"
                )
                raise ServiceError(
                    "get_all_users", response.status_code, page=page_number
                )

            try:
                page = parse_user_page(response.body, page=page_number)
            except ParseError as e:
                logger.error(str(e))
                raise

            users.extend(page.data)
            if page_number >= page.total_pages:
                break
            page_number += 1

        logger.info(f"Fetched {len(users)} users across {page_number} pages")
        return users

    async def _get(self, url: str) -> TransportResponse:
        return await self._transport.get(
            url, headers={API_KEY_HEADER: self._settings.api_key}
        )

    async def close(self) -> None:
        """Close the underlying transport if it supports closing."""
        close = getattr(self._transport, "close", None)
        if close is not None:
            await close()
        logger.debug("UserDirectoryClient closed")

    async def __aenter__(self) -> "UserDirectoryClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()


def create_user_directory_client(
    settings: Settings | None = None,
) -> UserDirectoryClient:
    """Build a client with the default httpx transport, cache and retry policy."""
    if settings is None:
        settings = load_settings()

    return UserDirectoryClient(
        settings=settings,
        transport=HttpxTransport(timeout=settings.request_timeout),
        cache=CacheManager(default_ttl=settings.cache_ttl),
        retry_policy=RetryPolicy(max_retries=settings.retry_count),
    )
