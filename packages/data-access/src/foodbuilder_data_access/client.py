"""Firestore REST client for the categories collection.

Every call goes through the same pipeline:

  1. Ask the auth client for a valid ID token (it refreshes if needed)
  2. Build the request with an ``Authorization: Bearer`` header
  3. Send it on the shared HTTP client
  4. Map a non-2xx response to the operation's error type

Four business verbs:

  list_categories          — all categories, names ascending
  upsert_category          — create or overwrite one category document
  delete_category          — remove one category document
  query_categories_by_name — categories whose name sorts at or after a prefix

Transport failures (timeouts, refused connections) are not wrapped; they
surface as httpx exceptions. Nothing is retried.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

import httpx
from foodbuilder_shared.catalog_models import Category
from foodbuilder_shared.endpoints import (
    CATEGORIES_COLLECTION,
    DEFAULT_DATABASE,
    RUN_QUERY_SUFFIX,
    documents_url,
)
from foodbuilder_shared.errors import (
    ArgumentError,
    DeleteError,
    FirebaseApiError,
    QueryError,
    WriteError,
)

from foodbuilder_data_access import queries
from foodbuilder_data_access.codec import category_from_document, category_to_fields

if TYPE_CHECKING:
    from foodbuilder_auth.client import FirebaseAuthClient

logger = logging.getLogger(__name__)


class FirestoreClient:
    """Category CRUD and queries over the Firestore REST API."""

    def __init__(
        self,
        http: httpx.AsyncClient,
        project_id: str,
        auth: FirebaseAuthClient,
        *,
        collection: str = CATEGORIES_COLLECTION,
        database: str = DEFAULT_DATABASE,
    ) -> None:
        self._http = http
        self._auth = auth
        self.project_id = project_id
        self.collection = collection
        self._documents_url = documents_url(project_id, database)

    @property
    def run_query_url(self) -> str:
        return f"{self._documents_url}{RUN_QUERY_SUFFIX}"

    def document_url(self, document_id: str) -> str:
        return f"{self._documents_url}/{self.collection}/{quote(document_id, safe='')}"

    # ------------------------------------------------------------------
    # Business verbs
    # ------------------------------------------------------------------

    async def list_categories(self, limit: int = 50) -> list[Category]:
        """Return up to ``limit`` categories ordered by name."""
        body = queries.ordered_by_name(self.collection, limit)
        return await self._run_query("runQuery", body)

    async def upsert_category(self, category: Category) -> None:
        """Create or overwrite the category document named by ``category.id``."""
        if not category.id or not category.id.strip():
            raise ArgumentError("Category.id is required to write a category document")

        url = self.document_url(category.id)
        request = await self._build_request(
            "PATCH", url, json={"fields": category_to_fields(category)}
        )
        await self._send(request, "set category", WriteError)

    async def delete_category(self, category_id: str) -> None:
        if not category_id or not category_id.strip():
            raise ArgumentError("A category id is required to delete a category document")

        request = await self._build_request("DELETE", self.document_url(category_id))
        await self._send(request, "delete category", DeleteError)

    async def query_categories_by_name(self, prefix: str, limit: int = 20) -> list[Category]:
        """Categories whose name is >= ``prefix``, ordered by name.

        This is a lower-bound comparison, not a starts-with filter: every
        name that sorts after the prefix matches, up to ``limit``.
        """
        body = queries.name_at_least(self.collection, prefix, limit)
        return await self._run_query("runQuery(name)", body)

    # ------------------------------------------------------------------
    # Request pipeline
    # ------------------------------------------------------------------

    async def _build_request(
        self, method: str, url: str, json: dict[str, Any] | None = None
    ) -> httpx.Request:
        """Build an authenticated request, fetching a valid token first."""
        id_token = await self._auth.get_valid_token()
        return self._http.build_request(
            method,
            url,
            json=json,
            headers={"Authorization": f"Bearer {id_token}"},
        )

    async def _send(
        self,
        request: httpx.Request,
        operation: str,
        error_cls: type[FirebaseApiError],
    ) -> httpx.Response:
        logger.debug(f"[Firestore] {operation} -> {request.method} {request.url}")
        response = await self._http.send(request)
        if not response.is_success:
            error = error_cls.from_response(f"Firestore {operation}", response)
            logger.error(f"[Firestore] {error}")
            raise error
        return response

    async def _run_query(self, operation: str, body: dict[str, Any]) -> list[Category]:
        request = await self._build_request("POST", self.run_query_url, json=body)
        response = await self._send(request, operation, QueryError)
        return self._parse_run_query(operation, response)

    @staticmethod
    def _parse_run_query(operation: str, response: httpx.Response) -> list[Category]:
        """Turn a runQuery response into categories.

        The body is a JSON array of result wrappers. Wrappers without a
        document (the trailing readTime-only entry) and documents without a
        name or fields are skipped; anything that isn't an array is an error.
        """
        def payload_error(reason: str) -> QueryError:
            error = QueryError(
                f"Firestore {operation}",
                status_code=response.status_code,
                reason=reason,
                body=response.text,
            )
            logger.error(f"[Firestore] {error}")
            return error

        try:
            results = response.json()
        except ValueError as e:
            raise payload_error("invalid JSON") from e
        if not isinstance(results, list):
            raise payload_error("expected a JSON array")

        categories: list[Category] = []
        for result in results:
            document = result.get("document") if isinstance(result, dict) else None
            if not isinstance(document, dict):
                continue
            category = category_from_document(document)
            if category is None:
                logger.debug(f"[Firestore] skipping incomplete document: {document.get('name')}")
                continue
            categories.append(category)
        return categories
