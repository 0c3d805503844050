"""Shared test fixtures for Data Access tests.

Provides:
  - JSON fixture loading helpers (runQuery response bodies)
  - Mock HTTP transport for httpx (intercepts all requests)
  - A stub token source standing in for the auth client
  - A FirestoreClient wired to both
"""

import json
from pathlib import Path
from typing import Any

import httpx
import pytest
from foodbuilder_data_access.client import FirestoreClient

FIXTURES_DIR = Path(__file__).parent / "fixtures"

PROJECT_ID = "foodbuilder-test"


class MockTransport(httpx.AsyncBaseTransport):
    """Mock HTTP transport that returns preconfigured responses.

    Each call to handle_async_request pops the next response from the list.
    If the list is exhausted, returns a 500 error.
    """

    def __init__(self, responses: list[httpx.Response] | None = None) -> None:
        self.responses = list(responses or [])
        self.requests: list[httpx.Request] = []

    def queue(self, *responses: httpx.Response) -> None:
        self.responses.extend(responses)

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.responses:
            response = self.responses.pop(0)
            response.stream = httpx.ByteStream(response.content)
            return response
        return httpx.Response(500, json={"error": "No more mock responses"})


class StubTokenSource:
    """Stands in for FirebaseAuthClient — hands out a fixed token and counts calls."""

    def __init__(self, token: str = "test-id-token") -> None:
        self.token = token
        self.calls = 0

    async def get_valid_token(self) -> str:
        self.calls += 1
        return self.token


@pytest.fixture
def load_fixture():
    """Load a JSON fixture file by name."""

    def _load(name: str) -> Any:
        return json.loads((FIXTURES_DIR / name).read_text())

    return _load


@pytest.fixture
def transport() -> MockTransport:
    return MockTransport()


@pytest.fixture
async def http_client(transport: MockTransport):
    async with httpx.AsyncClient(transport=transport, timeout=30.0) as client:
        yield client


@pytest.fixture
def token_source() -> StubTokenSource:
    return StubTokenSource()


@pytest.fixture
def firestore(http_client: httpx.AsyncClient, token_source: StubTokenSource) -> FirestoreClient:
    return FirestoreClient(http_client, PROJECT_ID, token_source)
