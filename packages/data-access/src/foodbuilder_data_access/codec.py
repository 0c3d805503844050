"""Firestore field-wrapper codec.

Firestore's REST API wraps every stored value in a single-key object whose
key names the type:

    {"stringValue": "Desserts"}
    {"integerValue": "12"}          # int64 travels as a decimal string
    {"booleanValue": true}
    {"nullValue": null}
    {"arrayValue": {"values": [...]}}
    {"mapValue": {"fields": {...}}}

encode_value/decode_value translate between those wrappers and plain Python
values. The category helpers at the bottom are the only place that knows
which document fields a Category uses.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from foodbuilder_shared.catalog_models import Category

STRING = "stringValue"
INTEGER = "integerValue"
DOUBLE = "doubleValue"
BOOLEAN = "booleanValue"
NULL = "nullValue"
TIMESTAMP = "timestampValue"
ARRAY = "arrayValue"
MAP = "mapValue"

VALUE_TAGS = frozenset({STRING, INTEGER, DOUBLE, BOOLEAN, NULL, TIMESTAMP, ARRAY, MAP})

# Firestore timestamps carry nanoseconds; datetime stops at microseconds.
_SUB_MICROSECOND = re.compile(r"(\.\d{6})\d+")


def encode_value(value: Any) -> dict[str, Any]:
    """Wrap a Python value in its Firestore type tag.

    Aware datetimes are sent in UTC with a Z suffix.

    Raises:
        TypeError: no Firestore type for the value.
        ValueError: a naive datetime, which names no instant.
    """
    if value is None:
        return {NULL: None}
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return {BOOLEAN: value}
    if isinstance(value, int):
        return {INTEGER: str(value)}
    if isinstance(value, float):
        return {DOUBLE: value}
    if isinstance(value, str):
        return {STRING: value}
    if isinstance(value, datetime):
        if value.tzinfo is None or value.utcoffset() is None:
            raise ValueError(f"Cannot encode naive datetime {value.isoformat()} as a timestamp")
        return {TIMESTAMP: value.astimezone(UTC).isoformat().replace("+00:00", "Z")}
    if isinstance(value, Mapping):
        return {MAP: {"fields": {k: encode_value(v) for k, v in value.items()}}}
    if isinstance(value, (list, tuple)):
        return {ARRAY: {"values": [encode_value(v) for v in value]}}
    raise TypeError(f"Cannot encode {type(value).__name__} as a Firestore value")


def decode_value(wrapper: Mapping[str, Any]) -> Any:
    """Unwrap a Firestore typed value.

    Raises:
        ValueError: wrapper does not carry exactly one known type tag.
    """
    tags = [key for key in wrapper if key in VALUE_TAGS]
    if len(tags) != 1:
        raise ValueError(f"Expected one Firestore value tag, got {sorted(wrapper)}")
    tag = tags[0]
    raw = wrapper[tag]

    if tag == INTEGER:
        return int(raw)
    if tag == DOUBLE:
        return float(raw)
    if tag == TIMESTAMP:
        return datetime.fromisoformat(_SUB_MICROSECOND.sub(r"\1", raw).replace("Z", "+00:00"))
    if tag == ARRAY:
        return [decode_value(v) for v in (raw or {}).get("values", [])]
    if tag == MAP:
        return decode_fields((raw or {}).get("fields", {}))
    return raw


def encode_fields(values: Mapping[str, Any]) -> dict[str, dict[str, Any]]:
    """Encode a document's fields, leaving out None values entirely."""
    return {name: encode_value(value) for name, value in values.items() if value is not None}


def decode_fields(fields: Mapping[str, Any]) -> dict[str, Any]:
    return {name: decode_value(wrapper) for name, wrapper in fields.items()}


def get_string(fields: Mapping[str, Any], name: str) -> str | None:
    """Read an optional string field; anything other than a stringValue reads as None."""
    wrapper = fields.get(name)
    if not isinstance(wrapper, Mapping):
        return None
    value = wrapper.get(STRING)
    return value if isinstance(value, str) else None


# ============================================================================
# Category mapping
# ============================================================================


def category_to_fields(category: Category) -> dict[str, dict[str, Any]]:
    """Document fields for a Category. Name is always written; null optionals are not."""
    return encode_fields(
        {
            "name": category.name or "",
            "description": category.description,
            "imageUrl": category.image_url,
        }
    )


def category_from_fields(doc_id: str, fields: Mapping[str, Any]) -> Category:
    return Category(
        id=doc_id,
        name=get_string(fields, "name") or "",
        description=get_string(fields, "description"),
        image_url=get_string(fields, "imageUrl"),
    )


def document_id(resource_name: str) -> str:
    """Trailing path segment of a document resource name.

    projects/p/databases/(default)/documents/FoodBuilder-Cathegories/abc → abc
    """
    return resource_name.rsplit("/", 1)[-1]


def category_from_document(document: Mapping[str, Any]) -> Category | None:
    """Map a Firestore document to a Category.

    Returns None when the document lacks a resource name or a fields object,
    so a listing can skip it rather than fail.
    """
    name = document.get("name")
    fields = document.get("fields")
    if not isinstance(name, str) or not isinstance(fields, Mapping):
        return None
    return category_from_fields(document_id(name), fields)
