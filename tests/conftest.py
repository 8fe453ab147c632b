"""Pytest configuration shared across the suite."""

import asyncio
from typing import Callable, Optional

import httpx
import pytest

from google_oauth import (
    AuthorizationExchange,
    CookieCredentialStore,
    CookieOptions,
    RecordingNavigator,
)

NOW_MS = 1_700_000_000_000
API_BASE = "https://converter.test"


class FakeClock:
    """Settable clock in epoch milliseconds."""

    def __init__(self, now: int = NOW_MS) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


class GatedHandler:
    """Holds the exchange response until released."""

    def __init__(self, response: httpx.Response):
        self.response = response
        self.sent = asyncio.Event()
        self.release = asyncio.Event()
        self.calls = 0

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls += 1
        self.sent.set()
        await self.release.wait()
        return self.response


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cookie_file(tmp_path):
    return tmp_path / "session" / "cookies.json"


@pytest.fixture
def store(cookie_file, clock) -> CookieCredentialStore:
    return CookieCredentialStore(str(cookie_file), clock=clock)


@pytest.fixture
def cookie_options() -> CookieOptions:
    return CookieOptions(secure=False, same_site="lax", expires_days=7)


@pytest.fixture
def navigator() -> RecordingNavigator:
    return RecordingNavigator()


def make_exchanger(
    handler: Callable,
    clock: Optional[Callable[[], int]] = None,
    ttl_ms: int = 3600000,
) -> AuthorizationExchange:
    kwargs = {"clock": clock} if clock else {}
    return AuthorizationExchange(
        base_url=API_BASE,
        timeout=10.0,
        ttl_ms=ttl_ms,
        transport=httpx.MockTransport(handler),
        **kwargs,
    )
