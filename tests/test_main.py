"""Tests for the CLI harness."""

import pytest
from conftest import FakeTransport, ok, status, user_json

import main
from userclient.directory import UserDirectoryClient
from userclient.services import CacheManager, RetryPolicy
from userclient.settings import Settings


@pytest.fixture
def patch_client(monkeypatch: pytest.MonkeyPatch, settings: Settings, cache: CacheManager):
    """Make main() use a client over the given fake transport."""

    async def no_sleep(delay: float) -> None:
        return None

    def install(transport: FakeTransport) -> None:
        def factory(_settings: Settings) -> UserDirectoryClient:
            return UserDirectoryClient(
                settings=settings,
                transport=transport,
                cache=cache,
                retry_policy=RetryPolicy(max_retries=0, sleep=no_sleep),
            )

        monkeypatch.setattr(main, "create_user_directory_client", factory)
        monkeypatch.setattr(main, "setup_logging", lambda level: None)

    return install


async def test_prints_users_and_user_details(patch_client, capsys) -> None:
    transport = FakeTransport(
        ok({"page": 1, "total_pages": 1, "data": [user_json(1, "George", "Bluth")]}),
        ok({"data": user_json(1, "George", "Bluth")}),
    )
    patch_client(transport)

    assert await main.main() == 0

    out = capsys.readouterr().out
    assert "Found 1 users:" in out
    assert "- George Bluth (george.bluth@reqres.in)" in out
    assert "User 1 details:" in out
    assert transport.closed


async def test_reports_errors_and_returns_non_zero(patch_client, capsys) -> None:
    transport = FakeTransport(status(500))
    patch_client(transport)

    assert await main.main() == 1
    assert "Error: Failed to fetch users on page 1: HTTP 500" in capsys.readouterr().out


async def test_unexpected_errors_are_reported(patch_client, capsys) -> None:
    transport = FakeTransport(RuntimeError("socket exploded"))
    patch_client(transport)

    assert await main.main() == 1
    assert "Error: socket exploded" in capsys.readouterr().out
