"""HTTP client factory.

The whole app shares one httpx.AsyncClient: the auth client and the data
client both send through it. No base_url is set because the identity,
secure-token and Firestore hosts differ; each client builds absolute URLs.
"""

from __future__ import annotations

import httpx

from foodbuilder_shared.endpoints import DEFAULT_TIMEOUT_SECONDS


def create_http_client(timeout: float = DEFAULT_TIMEOUT_SECONDS) -> httpx.AsyncClient:
    """Create the shared async HTTP client with the client-wide timeout."""
    return httpx.AsyncClient(
        timeout=timeout,
        headers={"Accept": "application/json"},
    )
