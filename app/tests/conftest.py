"""Fixtures for the home view tests: mocked HTTP wired through build_services."""

import httpx
import pytest
from foodbuilder_app.services import AppServices, build_services
from foodbuilder_shared.config import FirebaseConfig


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


class AlertRecorder:
    """Collects (title, message) pairs instead of showing them."""

    def __init__(self) -> None:
        self.alerts: list[tuple[str, str]] = []

    def __call__(self, title: str, message: str) -> None:
        self.alerts.append((title, message))


@pytest.fixture
def transport() -> MockTransport:
    return MockTransport()


@pytest.fixture
def alerts() -> AlertRecorder:
    return AlertRecorder()


@pytest.fixture
async def make_services(transport: MockTransport):
    """Build AppServices for a config, sharing the mock transport."""
    created: list[AppServices] = []

    def _make(**overrides) -> AppServices:
        config = FirebaseConfig(api_key="test-api-key", project_id="foodbuilder-test", **overrides)
        http = httpx.AsyncClient(transport=transport, timeout=config.timeout_seconds)
        services = build_services(config, http=http)
        created.append(services)
        return services

    yield _make

    for services in created:
        await services.aclose()


@pytest.fixture
def anon_body() -> dict[str, str]:
    return {"idToken": "anon-token", "refreshToken": "r-anon", "expiresIn": "3600", "localId": "a1"}


@pytest.fixture
def password_body() -> dict[str, str]:
    return {"idToken": "pw-token", "refreshToken": "r-pw", "expiresIn": "3600", "localId": "u1"}
