"""Service wiring: one HTTP client, one auth client, one Firestore client.

Every view gets its collaborators from here. The HTTP client is shared so
the whole app runs under a single 30-second client-wide timeout and a single
connection pool; the auth client is shared so there is exactly one session.
"""

from __future__ import annotations

from dataclasses import dataclass

import httpx
from foodbuilder_auth.client import FirebaseAuthClient
from foodbuilder_data_access.client import FirestoreClient
from foodbuilder_shared.config import FirebaseConfig
from foodbuilder_shared.http import create_http_client


@dataclass
class AppServices:
    """The long-lived objects a view needs."""

    config: FirebaseConfig
    http: httpx.AsyncClient
    auth: FirebaseAuthClient
    firestore: FirestoreClient

    async def aclose(self) -> None:
        await self.http.aclose()


def build_services(config: FirebaseConfig, http: httpx.AsyncClient | None = None) -> AppServices:
    """Wire the clients for one Firebase project.

    Pass ``http`` to reuse an existing client (tests inject one with a mock
    transport); otherwise a fresh one is created with the configured timeout.
    """
    if http is None:
        http = create_http_client(timeout=config.timeout_seconds)
    auth = FirebaseAuthClient(http, config.api_key)
    firestore = FirestoreClient(
        http,
        config.project_id,
        auth,
        collection=config.categories_collection,
    )
    return AppServices(config=config, http=http, auth=auth, firestore=firestore)
