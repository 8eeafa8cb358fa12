"""Decoded leaf clauses of the query DSL.

Each class is one variant of the clause union produced by the leaf decoders
before it is turned into an engine predicate.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence, Union

RANGE_OPS = (">", ">=", "<", "<=")
DEFAULT_LEFT_OP = ">="
DEFAULT_RIGHT_OP = "<"


@dataclass(frozen=True, slots=True)
class GeoPoint:
    lat: float
    lon: float


@dataclass(frozen=True, slots=True)
class Term:
    """Exact match of `field` against one value, or membership over several."""

    field: str
    values: Sequence[Any]


@dataclass(frozen=True, slots=True)
class RangeBound:
    value: Any
    op: str


@dataclass(frozen=True, slots=True)
class Range:
    """Interval on `field`; a missing side is unconstrained.

    Attributes:
        field: Target field.
        left: Lower bound, `>=` unless an operator is given.
        right: Upper bound, `<` unless an operator is given.
    """

    field: str
    left: RangeBound | None = None
    right: RangeBound | None = None


@dataclass(frozen=True, slots=True)
class Exists:
    field: str
    name: str | None = None


@dataclass(frozen=True, slots=True)
class Match:
    """Full-text match of each value, paired with its weight.

    `weights` always has the same length as `values`.
    """

    field: str
    values: Sequence[Any]
    weights: Sequence[float]


@dataclass(frozen=True, slots=True)
class MultiMatch:
    query: Any
    fields: Sequence[str]


@dataclass(frozen=True, slots=True)
class GeoBoundingBox:
    field: str
    top_left: GeoPoint
    bottom_right: GeoPoint
    order: str | None = None


@dataclass(frozen=True, slots=True)
class GeoDistance:
    field: str
    distance: str
    location: GeoPoint
    order: str | None = None


LeafClause = Union[Term, Range, Exists, Match, MultiMatch, GeoBoundingBox, GeoDistance]
