"""Leaf clause decoders.

Each decoder turns the untyped value found under a leaf tag into one of the
clause variants in `SearchDSL.core.clauses`, then into engine predicates.
Malformed input raises `ClauseDecodeError`; the logic compiler decides
whether that skips the clause or aborts compilation.

Wire shapes
- term:             {field, query: [v...]}
- range:            {field, query: {left: {value, op?}, right: {value, op?}}}
- exists:           {field, query: name}
- match:            {field, query: [v...], weight: [w...]}
- multi_match:      {query: v, fields: [f...]}
- geo_bounding_box: {field, order, top_left: {lat, lon}, bottom_right: {lat, lon}}
- geo_distance:     {field, distance, order, location: {lat, lon}}
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Mapping

from SearchDSL.core.clauses import (
    DEFAULT_LEFT_OP,
    DEFAULT_RIGHT_OP,
    RANGE_OPS,
    LeafClause,
    Exists,
    GeoBoundingBox,
    GeoDistance,
    GeoPoint,
    Match,
    MultiMatch,
    Range,
    RangeBound,
    Term,
)
from SearchDSL.core.query import (
    ExistsQuery,
    GeoBoundingBoxQuery,
    GeoDistanceQuery,
    MatchQuery,
    MultiMatchQuery,
    Query,
    RangeQuery,
    TermQuery,
    TermsQuery,
)

_OP_KEYS = {">": "gt", ">=": "gte", "<": "lt", "<=": "lte"}
DEFAULT_WEIGHT = 1.0


class ClauseDecodeError(ValueError):
    """Raised when a DSL clause does not have the documented shape."""


def decode_term(value: Any, path: str = "term") -> Term:
    body = _expect_mapping(value, path)
    values = _as_values(body.get("query"), f"{path}.query")
    if not values:
        raise ClauseDecodeError(f"{path}.query must include at least one value")
    return Term(field=_expect_field(body, path), values=tuple(values))


def decode_range(value: Any, path: str = "range") -> Range:
    """Decode a range clause.

    A side without a bound (or without a `value`) is left unconstrained.
    Unknown operators fall back to the side's default (`>=` left, `<` right).

    Raises:
        ClauseDecodeError: If the field is missing or neither side is bounded.
    """
    body = _expect_mapping(value, path)
    field = _expect_field(body, path)
    query = _expect_mapping(body.get("query"), f"{path}.query")
    left = _decode_bound(query.get("left"), DEFAULT_LEFT_OP, f"{path}.query.left")
    right = _decode_bound(query.get("right"), DEFAULT_RIGHT_OP, f"{path}.query.right")
    if left is None and right is None:
        raise ClauseDecodeError(f"{path}.query must include left or right")
    return Range(field=field, left=left, right=right)


def decode_exists(value: Any, path: str = "exists") -> Exists:
    body = _expect_mapping(value, path)
    name = body.get("query")
    if name is not None and not isinstance(name, str):
        raise ClauseDecodeError(f"{path}.query must be a string")
    return Exists(field=_expect_field(body, path), name=name or None)


def decode_match(value: Any, path: str = "match") -> Match:
    """Decode a match clause, padding missing trailing weights with 1.0."""
    body = _expect_mapping(value, path)
    field = _expect_field(body, path)
    values = _as_values(body.get("query"), f"{path}.query")

    raw_weights = body.get("weight")
    if raw_weights is None:
        raw_weights = []
    elif not isinstance(raw_weights, (list, tuple)):
        raw_weights = [raw_weights]
    weights = [_expect_number(w, f"{path}.weight[{idx}]") for idx, w in enumerate(raw_weights)]

    padded = [weights[idx] if idx < len(weights) else DEFAULT_WEIGHT for idx in range(len(values))]
    return Match(field=field, values=tuple(values), weights=tuple(padded))


def decode_multi_match(value: Any, path: str = "multi_match") -> MultiMatch:
    body = _expect_mapping(value, path)
    if body.get("query") is None:
        raise ClauseDecodeError(f"Missing {path}.query")
    fields = body.get("fields")
    if not isinstance(fields, (list, tuple)):
        raise ClauseDecodeError(f"{path}.fields must be a list")
    for idx, item in enumerate(fields):
        if not isinstance(item, str) or not item.strip():
            raise ClauseDecodeError(f"{path}.fields[{idx}] must be a non-empty string")
    return MultiMatch(query=body["query"], fields=tuple(fields))


def decode_geo_bounding_box(value: Any, path: str = "geo_bounding_box") -> GeoBoundingBox:
    body = _expect_mapping(value, path)
    return GeoBoundingBox(
        field=_expect_field(body, path),
        top_left=_decode_point(body.get("top_left"), f"{path}.top_left"),
        bottom_right=_decode_point(body.get("bottom_right"), f"{path}.bottom_right"),
        order=_optional_str(body.get("order"), f"{path}.order"),
    )


def decode_geo_distance(value: Any, path: str = "geo_distance") -> GeoDistance:
    body = _expect_mapping(value, path)
    distance = body.get("distance")
    if not isinstance(distance, str) or not distance.strip():
        raise ClauseDecodeError(f"{path}.distance must be a non-empty string")
    return GeoDistance(
        field=_expect_field(body, path),
        distance=distance.strip(),
        location=_decode_point(body.get("location"), f"{path}.location"),
        order=_optional_str(body.get("order"), f"{path}.order"),
    )


def to_predicates(clause: LeafClause) -> list[Query]:
    """Turn a decoded clause into engine predicates.

    Most clauses yield exactly one predicate; a match clause yields one per
    value, so an empty match yields none.
    """
    if isinstance(clause, Term):
        if len(clause.values) == 1:
            return [TermQuery(clause.field, clause.values[0])]
        return [TermsQuery(clause.field, tuple(clause.values))]
    if isinstance(clause, Range):
        bounds = []
        for bound in (clause.left, clause.right):
            if bound is not None:
                bounds.append((_OP_KEYS[bound.op], bound.value))
        return [RangeQuery(clause.field, tuple(bounds))]
    if isinstance(clause, Exists):
        return [ExistsQuery(clause.field, clause.name)]
    if isinstance(clause, Match):
        return [
            MatchQuery(clause.field, text, boost=weight)
            for text, weight in zip(clause.values, clause.weights)
        ]
    if isinstance(clause, MultiMatch):
        return [MultiMatchQuery(clause.query, tuple(clause.fields))]
    if isinstance(clause, GeoBoundingBox):
        return [
            GeoBoundingBoxQuery(
                clause.field,
                top_left=(clause.top_left.lat, clause.top_left.lon),
                bottom_right=(clause.bottom_right.lat, clause.bottom_right.lon),
            )
        ]
    if isinstance(clause, GeoDistance):
        return [
            GeoDistanceQuery(
                clause.field,
                distance=clause.distance,
                location=(clause.location.lat, clause.location.lon),
            )
        ]
    raise TypeError(f"Unsupported clause type: {type(clause).__name__}")


Decoder = Callable[[Any, str], LeafClause]

LEAF_DECODERS: Mapping[str, Decoder] = {
    "term": decode_term,
    "range": decode_range,
    "exists": decode_exists,
    "match": decode_match,
    "multi_match": decode_multi_match,
    "geo_bounding_box": decode_geo_bounding_box,
    "geo_distance": decode_geo_distance,
}


def _decode_bound(value: Any, default_op: str, path: str) -> RangeBound | None:
    if value is None:
        return None
    body = _expect_mapping(value, path)
    if body.get("value") is None:
        return None
    op = body.get("op")
    if isinstance(op, str) and op.strip() in RANGE_OPS:
        op = op.strip()
    else:
        op = default_op
    return RangeBound(value=body["value"], op=op)


def _decode_point(value: Any, path: str) -> GeoPoint:
    body = _expect_mapping(value, path)
    return GeoPoint(
        lat=_expect_number(body.get("lat"), f"{path}.lat"),
        lon=_expect_number(body.get("lon"), f"{path}.lon"),
    )


def _expect_mapping(value: Any, path: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ClauseDecodeError(f"{path} must be an object")
    return value


def _expect_field(body: Mapping[str, Any], path: str) -> str:
    field = body.get("field")
    if not isinstance(field, str) or not field.strip():
        raise ClauseDecodeError(f"{path}.field must be a non-empty string")
    return field.strip()


def _expect_number(value: Any, path: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ClauseDecodeError(f"{path} must be a number")
    return float(value)


def _optional_str(value: Any, path: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ClauseDecodeError(f"{path} must be a string")
    return value


def _as_values(value: Any, path: str) -> list[Any]:
    """Normalize a scalar or list of scalars into a list."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        for idx, item in enumerate(value):
            if isinstance(item, (Mapping, list, tuple)):
                raise ClauseDecodeError(f"{path}[{idx}] must be a scalar")
        return list(value)
    if isinstance(value, Mapping):
        raise ClauseDecodeError(f"{path} must be a list")
    return [value]
