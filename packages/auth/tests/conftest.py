"""Shared test fixtures for auth tests.

Provides:
  - Mock HTTP transport for httpx (records every request, replays responses)
  - A controllable clock so expiry can be tested without sleeping
  - A FirebaseAuthClient wired to both
"""

import asyncio
from datetime import UTC, datetime, timedelta

import httpx
import pytest
from foodbuilder_auth.client import FirebaseAuthClient

API_KEY = "test-api-key"


class MockTransport(httpx.AsyncBaseTransport):
    """Mock HTTP transport that returns preconfigured responses.

    Each call to handle_async_request yields to the event loop once, then pops
    the next response from the list, so concurrent callers really overlap
    while a request is in flight. If the list is exhausted, returns a 500 error.
    """

    def __init__(self, responses: list[httpx.Response] | None = None) -> None:
        self.responses = list(responses or [])
        self.requests: list[httpx.Request] = []

    def queue(self, *responses: httpx.Response) -> None:
        self.responses.extend(responses)

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        await asyncio.sleep(0)
        if self.responses:
            response = self.responses.pop(0)
            response.stream = httpx.ByteStream(response.content)
            return response
        return httpx.Response(500, json={"error": "No more mock responses"})


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def transport() -> MockTransport:
    return MockTransport()


@pytest.fixture
async def http_client(transport: MockTransport):
    async with httpx.AsyncClient(transport=transport, timeout=30.0) as client:
        yield client


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2025, 3, 1, 12, 0, tzinfo=UTC))


@pytest.fixture
def auth_client(http_client: httpx.AsyncClient, clock: FakeClock) -> FirebaseAuthClient:
    return FirebaseAuthClient(http_client, API_KEY, clock=clock)
