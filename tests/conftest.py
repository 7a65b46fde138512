"""Shared fixtures and test doubles."""

import json
from collections.abc import Callable
from datetime import datetime, timedelta
from typing import Any

import pytest

from userclient.directory import UserDirectoryClient
from userclient.services import CacheManager, RetryPolicy, TransportResponse
from userclient.settings import Settings

BASE_URL = "https://directory.test/api"


def user_json(user_id: int, first: str = "Test", last: str = "User") -> dict[str, Any]:
    return {
        "id": user_id,
        "email": f"{first.lower()}.{last.lower()}@reqres.in",
        "first_name": first,
        "last_name": last,
        "avatar": f"https://reqres.in/img/faces/{user_id}-image.jpg",
    }


def ok(payload: dict[str, Any]) -> TransportResponse:
    return TransportResponse(status_code=200, body=json.dumps(payload))


def status(code: int, body: str = "") -> TransportResponse:
    return TransportResponse(status_code=code, body=body)


class FakeTransport:
    """Serves scripted responses in order and records every GET."""

    def __init__(self, *responses: TransportResponse | BaseException):
        self._responses = list(responses)
        self.calls: list[tuple[str, dict[str, str] | None]] = []
        self.closed = False

    @property
    def call_count(self) -> int:
        return len(self.calls)

    @property
    def urls(self) -> list[str]:
        return [url for url, _ in self.calls]

    async def get(
        self, url: str, headers: dict[str, str] | None = None
    ) -> TransportResponse:
        self.calls.append((url, headers))
        if not self._responses:
            raise AssertionError(f"Unexpected request: {url}")
        response = self._responses.pop(0)
        if isinstance(response, BaseException):
            raise response
        return response

    async def close(self) -> None:
        self.closed = True


class FakeClock:
    """Manually advanced clock for TTL tests."""

    def __init__(self, start: datetime = datetime(2024, 1, 1, 12, 0, 0)):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


@pytest.fixture
def settings() -> Settings:
    return Settings(
        base_url=BASE_URL,
        api_key="test-key",
        cache_expiration_minutes=5,
        retry_count=3,
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> CacheManager:
    return CacheManager(default_ttl=timedelta(minutes=5), clock=clock)


@pytest.fixture
def sleeps() -> list[float]:
    return []


@pytest.fixture
def retry_policy(settings: Settings, sleeps: list[float]) -> RetryPolicy:
    async def record_sleep(delay: float) -> None:
        sleeps.append(delay)

    return RetryPolicy(max_retries=settings.retry_count, sleep=record_sleep)


@pytest.fixture
def make_client(
    settings: Settings, cache: CacheManager, retry_policy: RetryPolicy
) -> Callable[..., UserDirectoryClient]:
    def factory(transport: Any) -> UserDirectoryClient:
        return UserDirectoryClient(
            settings=settings,
            transport=transport,
            cache=cache,
            retry_policy=retry_policy,
        )

    return factory
