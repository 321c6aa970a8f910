"""
Lenient parser for hybrid query responses.

The raw response is a loosely typed JSON-like tree. Two layouts are understood:
matching-engine style ``predictions[0].neighbors`` (plain or protobuf-JSON tagged values
such as ``structValue`` / ``listValue`` / ``stringValue`` / ``numberValue``) and OpenSearch
``hits.hits``. Every lookup returns None on a miss; missing fields fall back to
id="", text="", distance=0. Nothing here raises.
"""

import math
from typing import Any

from hybrid_index.services.models import RetrievedChunk

_SCALAR_TAGS = {
    "stringValue": str,
    "string_value": str,
    "numberValue": float,
    "number_value": float,
    "boolValue": bool,
    "bool_value": bool,
}
_STRUCT_TAGS = ("structValue", "struct_value")
_LIST_TAGS = ("listValue", "list_value")
_NULL_TAGS = ("nullValue", "null_value")

TEXT_NAMESPACE = "text_chunk"
# Tagged values nested deeper than this collapse to None.
MAX_NESTING_DEPTH = 64


def _to_float(value: Any) -> float | None:
    """Finite float, or None for overflow, NaN, infinities and anything unconvertible."""
    try:
        number = float(value)
    except (OverflowError, TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _unwrap(value: Any, depth: int = 0) -> Any:
    """Collapse a single tagged protobuf-JSON value into a plain Python value."""
    if not isinstance(value, dict) or len(value) != 1:
        return value
    if depth >= MAX_NESTING_DEPTH:
        return None
    (tag, inner), = value.items()
    if tag in _STRUCT_TAGS:
        fields = inner.get("fields") if isinstance(inner, dict) else None
        return {k: _unwrap(v, depth + 1) for k, v in fields.items()} if isinstance(fields, dict) else {}
    if tag in _LIST_TAGS:
        values = inner.get("values") if isinstance(inner, dict) else None
        return [_unwrap(v, depth + 1) for v in values] if isinstance(values, list) else []
    if tag in _NULL_TAGS:
        return None
    if tag in _SCALAR_TAGS:
        if inner is None:
            return None
        if _SCALAR_TAGS[tag] is float:
            return _to_float(inner)
        if isinstance(inner, (dict, list)):
            return None
        try:
            return _SCALAR_TAGS[tag](inner)
        except (TypeError, ValueError):
            return None
    return value


def _get(node: Any, *path: str | int) -> Any:
    """Safe walk: dict keys and list indices; None as soon as a step is missing."""
    current = _unwrap(node)
    for step in path:
        if isinstance(step, int):
            if not isinstance(current, list) or not -len(current) <= step < len(current):
                return None
            current = current[step]
        else:
            if not isinstance(current, dict):
                return None
            current = current.get(step)
        if current is None:
            return None
        current = _unwrap(current)
    return current


def _first_str(node: Any, *paths: tuple[str | int, ...]) -> str | None:
    for path in paths:
        value = _get(node, *path)
        if isinstance(value, str):
            return value
    return None


def _first_number(node: Any, *paths: tuple[str | int, ...]) -> float | None:
    for path in paths:
        value = _get(node, *path)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            number = _to_float(value)
            if number is not None:
                return number
    return None


def _text_from_restricts(node: Any) -> str | None:
    restricts = _get(node, "datapoint", "restricts")
    if not isinstance(restricts, list):
        return None
    for restrict in restricts:
        restrict = _unwrap(restrict)
        if _get(restrict, "namespace") != TEXT_NAMESPACE:
            continue
        allow = _get(restrict, "allow_list") or _get(restrict, "allowList")
        if isinstance(allow, list) and allow and isinstance(_unwrap(allow[0]), str):
            return _unwrap(allow[0])
    return None


def _to_retrieved(neighbor: Any) -> RetrievedChunk:
    node = _unwrap(neighbor)
    if not isinstance(node, dict):
        return RetrievedChunk()
    neighbor_id = _first_str(
        node,
        ("neighbor_id",),
        ("datapoint", "datapoint_id"),
        ("datapoint", "datapointId"),
        ("neighbor", "id"),
        ("id",),
        ("_id",),
    )
    distance = _first_number(
        node,
        ("distance",),
        ("similarity",),
        ("neighbor", "distance"),
        ("neighbor", "similarity"),
        ("_score",),
    )
    text = _first_str(
        node,
        ("datapoint", "datapoint_metadata", "text"),
        ("datapoint", "metadata", "text"),
        ("metadata", "text"),
        ("neighbor", "metadata", "text"),
        ("_source", "metadata", "text"),
        ("_source", "text"),
    )
    if text is None:
        text = _text_from_restricts(node)
    return RetrievedChunk(id=neighbor_id or "", text=text or "", distance=distance or 0.0)


def parse_neighbors(raw_prediction: Any) -> list[RetrievedChunk]:
    """
    Flatten a raw hybrid query response into ranked RetrievedChunks, in response order.
    A missing or non-object response, or one with neither predictions nor hits, gives [].
    """
    root = _unwrap(raw_prediction)
    if not isinstance(root, dict):
        return []
    if "predictions" in root:
        neighbors = _get(root, "predictions", 0, "neighbors")
    elif "hits" in root:
        neighbors = _get(root, "hits", "hits")
    else:
        neighbors = None
    if not isinstance(neighbors, list):
        return []
    return [_to_retrieved(n) for n in neighbors]
