"""
RetryPolicy - Re-invokes an async operation on transient failures.

Behaviour:
- Transient error: wait backoff(attempt) and try again (attempt starts at 1)
- Non-transient error: propagate immediately
- Retries exhausted: the last error propagates unchanged

With max_retries=N an operation runs at most N + 1 times.
"""

import asyncio
from typing import Awaitable, Callable, TypeVar

import httpx
from loguru import logger

T = TypeVar("T")


def exponential_backoff(attempt: int, base_delay: float = 1.0) -> float:
    """Delay in seconds before retry number ``attempt``: base * 2^attempt."""
    return base_delay * (2**attempt)


def is_transient_error(exc: BaseException) -> bool:
    """Check if an error is worth retrying."""
    if getattr(exc, "transient", False):
        return True

    # Raw httpx failures from a custom transport (connect errors, timeouts)
    if isinstance(exc, httpx.TransportError):
        return True

    # asyncio.wait_for / asyncio.timeout expiring inside the operation
    return isinstance(exc, (TimeoutError, asyncio.TimeoutError))


class RetryPolicy:
    """
    Retry-with-backoff wrapper for a single async operation.

    Usage:
        policy = RetryPolicy(max_retries=3)

        user = await policy.execute(
            lambda: fetch_user(1),
            description="fetch user 1",
        )

    The policy holds no per-call state; every execute() starts a fresh
    attempt counter. asyncio.CancelledError is never caught, so cancelling
    the caller aborts an in-flight call or backoff wait immediately.
    """

    def __init__(
        self,
        max_retries: int = 3,
        backoff: Callable[[int], float] = exponential_backoff,
        is_transient: Callable[[BaseException], bool] = is_transient_error,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        if max_retries < 0:
            raise ValueError(f"max_retries must be >= 0, got {max_retries}")

        self.max_retries = max_retries
        self._backoff = backoff
        self._is_transient = is_transient
        self._sleep = sleep

    async def execute(
        self,
        operation: Callable[[], Awaitable[T]],
        description: str = "operation",
    ) -> T:
        """
        Run ``operation`` until it succeeds or retries are exhausted.

        Args:
            operation: Zero-argument callable returning a fresh awaitable
            description: Label used in log messages

        Returns:
            The operation's result

        Raises:
            Whatever the final attempt raised, unchanged
        """
        attempt = 0
        while True:
            try:
                return await operation()
            except Exception as e:
                if not self._is_transient(e):
                    raise

                if attempt >= self.max_retries:
                    logger.error(
                        f"{description} failed after {attempt + 1} attempts: {e}"
                    )
                    raise

                attempt += 1
                delay = self._backoff(attempt)
                logger.warning(
                    f"{description} failed with {type(e).__name__}: {e}; "
                    f"retry {attempt}/{self.max_retries} in {delay:.1f}s"
                )
                await self._sleep(delay)
