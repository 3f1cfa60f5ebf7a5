# parsers/document_parser.py
"""Decode Firestore REST documents into LawyerRecords.

Firestore's REST API wraps every value in a one-key type map, e.g.
``{"integerValue": "12"}`` or ``{"arrayValue": {"values": [...]}}``. This
module unwraps those maps and normalises the two document shapes found in
the ``lawyers`` collection:

* the flat shape written by the seed script (``name``, ``rating``, ...)
* the nested shape written by the migration script (``profile_data``,
  ``metrics``, ``is_verified``, ``verification``)
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from models import LawyerRecord

logger = logging.getLogger(__name__)


def decode_value(value: dict) -> Any:
    """Unwrap a single Firestore typed value."""
    if not isinstance(value, dict) or not value:
        return None
    kind, raw = next(iter(value.items()))

    if kind == "nullValue":
        return None
    if kind == "booleanValue":
        return bool(raw)
    if kind == "integerValue":
        return int(raw)
    if kind == "doubleValue":
        return float(raw)
    if kind in ("stringValue", "timestampValue", "referenceValue", "bytesValue"):
        return raw
    if kind == "arrayValue":
        return [decode_value(v) for v in (raw or {}).get("values", [])]
    if kind == "mapValue":
        return decode_fields((raw or {}).get("fields", {}))
    if kind == "geoPointValue":
        return dict(raw)

    logger.debug("Unknown Firestore value type %r", kind)
    return raw


def decode_fields(fields: dict) -> dict:
    return {name: decode_value(v) for name, v in (fields or {}).items()}


def encode_value(value: Any) -> dict:
    """Wrap a Python value for use in a structured query."""
    if value is None:
        return {"nullValue": None}
    if isinstance(value, bool):
        return {"booleanValue": value}
    if isinstance(value, int):
        return {"integerValue": str(value)}
    if isinstance(value, float):
        return {"doubleValue": value}
    if isinstance(value, str):
        return {"stringValue": value}
    if isinstance(value, (list, tuple, set)):
        return {"arrayValue": {"values": [encode_value(v) for v in value]}}
    if isinstance(value, dict):
        return {"mapValue": {"fields": {k: encode_value(v) for k, v in value.items()}}}
    raise TypeError(f"Cannot encode {type(value).__name__} as a Firestore value")


def document_id(name: str) -> str:
    """Return the last path segment of a document resource name."""
    return name.rstrip("/").rsplit("/", 1)[-1]


def flatten_lawyer_data(data: dict) -> dict:
    """Lift the migration schema's nested maps onto the flat schema."""
    flat = dict(data)
    profile = data.get("profile_data")
    if isinstance(profile, dict):
        for key, val in profile.items():
            flat.setdefault(key, val)
        flat.pop("profile_data", None)

    metrics = data.get("metrics")
    if isinstance(metrics, dict):
        for key, val in metrics.items():
            flat.setdefault(key, val)
        flat.pop("metrics", None)

    if "verified" not in flat and "is_verified" in data:
        flat["verified"] = data["is_verified"]
    return flat


def document_to_lawyer(doc: dict) -> Optional[LawyerRecord]:
    """Convert one REST document into a LawyerRecord, or None if unusable."""
    try:
        data = flatten_lawyer_data(decode_fields(doc.get("fields", {})))
        data["id"] = document_id(doc.get("name", "")) or data.get("id", "")
        return LawyerRecord.from_dict(data)
    except (TypeError, ValueError, AttributeError) as exc:
        logger.warning("Skipping malformed document %s: %s", doc.get("name"), exc)
        return None
