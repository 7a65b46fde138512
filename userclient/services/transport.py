"""
HTTP transport boundary.

The directory client only needs "issue GET, get status + body back".
HttpTransport is that capability; HttpxTransport implements it over
httpx.AsyncClient. Status codes are returned as-is, never raised, so the
caller decides what a 404 or 408 means.
"""

from dataclasses import dataclass
from typing import Protocol

import httpx
from loguru import logger

from userclient.services.errors import RequestTimeoutError, TransportFailureError


@dataclass(frozen=True)
class TransportResponse:
    """Status code and decoded body of an HTTP response."""

    status_code: int
    body: str

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


class HttpTransport(Protocol):
    """Anything that can issue a GET request."""

    async def get(
        self, url: str, headers: dict[str, str] | None = None
    ) -> TransportResponse: ...


class HttpxTransport:
    """
    HttpTransport backed by httpx.AsyncClient.

    Usage:
        async with HttpxTransport(timeout=10.0) as transport:
            response = await transport.get("https://reqres.in/api/users/2")

    Pass ``client`` to reuse an existing AsyncClient (or one built on
    httpx.MockTransport in tests); an injected client is not closed here.
    """

    def __init__(
        self,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ):
        self._timeout = timeout
        self._http_client = client
        self._owns_client = client is None

    async def _get_http_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout),
                follow_redirects=True,
            )
        return self._http_client

    async def get(
        self, url: str, headers: dict[str, str] | None = None
    ) -> TransportResponse:
        """Issue a GET request and return its status and body."""
        client = await self._get_http_client()

        try:
            response = await client.get(url, headers=headers)
        except httpx.TimeoutException as e:
            raise RequestTimeoutError(
                f"Request to {url} timed out after {self._timeout}s",
                operation="GET",
                timeout=self._timeout,
            ) from e
        except httpx.TransportError as e:
            raise TransportFailureError(
                f"Request to {url} failed: {e}", operation="GET"
            ) from e

        logger.debug(f"GET {url} -> {response.status_code}")
        return TransportResponse(status_code=response.status_code, body=response.text)

    async def close(self) -> None:
        """Close the HTTP client if this transport created it."""
        if self._http_client and self._owns_client:
            await self._http_client.aclose()
            self._http_client = None

    async def __aenter__(self) -> "HttpxTransport":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()
