"""Structured query builders for Firestore runQuery.

All functions are pure — they compute request bodies, never touch the
network. The data client posts the result of structured_query() as-is.
"""

from __future__ import annotations

from typing import Any

from foodbuilder_data_access.codec import encode_value

ASCENDING = "ASCENDING"
GREATER_THAN_OR_EQUAL = "GREATER_THAN_OR_EQUAL"


def order_by(field_path: str, direction: str = ASCENDING) -> dict[str, Any]:
    return {"field": {"fieldPath": field_path}, "direction": direction}


def field_filter(field_path: str, op: str, value: Any) -> dict[str, Any]:
    """A single-field comparison, with the value wrapped in its type tag."""
    return {
        "fieldFilter": {
            "field": {"fieldPath": field_path},
            "op": op,
            "value": encode_value(value),
        }
    }


def structured_query(
    collection_id: str,
    *,
    orders: list[dict[str, Any]] | None = None,
    where: dict[str, Any] | None = None,
    limit: int | None = None,
) -> dict[str, Any]:
    """Build a runQuery request body over one collection."""
    query: dict[str, Any] = {"from": [{"collectionId": collection_id}]}
    if where is not None:
        query["where"] = where
    if orders:
        query["orderBy"] = orders
    if limit is not None:
        query["limit"] = limit
    return {"structuredQuery": query}


def name_at_least(collection_id: str, prefix: str, limit: int) -> dict[str, Any]:
    """Names >= prefix, ascending.

    Only a lower bound: "Pa" matches "Pasta" but also "Zucchini". Callers
    that need a true starts-with must filter the result themselves.
    """
    return structured_query(
        collection_id,
        where=field_filter("name", GREATER_THAN_OR_EQUAL, prefix),
        orders=[order_by("name")],
        limit=limit,
    )


def ordered_by_name(collection_id: str, limit: int) -> dict[str, Any]:
    """Every document in the collection, names ascending, capped at limit."""
    return structured_query(collection_id, orders=[order_by("name")], limit=limit)
