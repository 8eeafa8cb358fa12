"""Compiled query tree and sort criteria.

These immutable nodes are what the compiler produces. Each node renders the
JSON body the search engine expects through `source()`.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Sequence

# Boolean combinator slots, keyed by the name the engine uses.
FILTER = "filter"
MUST = "must"
SHOULD = "should"
MUST_NOT = "must_not"
CONTEXTS = (MUST, FILTER, SHOULD, MUST_NOT)


class Query:
    """Base class for compiled query nodes."""

    def source(self) -> dict[str, Any]:
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class TermQuery(Query):
    field: str
    value: Any

    def source(self) -> dict[str, Any]:
        return {"term": {self.field: self.value}}


@dataclass(frozen=True, slots=True)
class TermsQuery(Query):
    field: str
    values: tuple[Any, ...]

    def source(self) -> dict[str, Any]:
        return {"terms": {self.field: list(self.values)}}


@dataclass(frozen=True, slots=True)
class RangeQuery(Query):
    """Range predicate.

    Attributes:
        field: Target field.
        bounds: Ordered (key, value) pairs where key is one of gt/gte/lt/lte.
            A later pair with the same key replaces the earlier one.
    """

    field: str
    bounds: tuple[tuple[str, Any], ...]

    def source(self) -> dict[str, Any]:
        return {"range": {self.field: dict(self.bounds)}}


@dataclass(frozen=True, slots=True)
class ExistsQuery(Query):
    field: str
    name: str | None = None

    def source(self) -> dict[str, Any]:
        body: dict[str, Any] = {"field": self.field}
        if self.name:
            body["_name"] = self.name
        return {"exists": body}


@dataclass(frozen=True, slots=True)
class MatchQuery(Query):
    field: str
    text: Any
    boost: float = 1.0

    def source(self) -> dict[str, Any]:
        return {"match": {self.field: {"query": self.text, "boost": self.boost}}}


@dataclass(frozen=True, slots=True)
class MultiMatchQuery(Query):
    text: Any
    fields: tuple[str, ...]

    def source(self) -> dict[str, Any]:
        return {"multi_match": {"query": self.text, "fields": list(self.fields)}}


@dataclass(frozen=True, slots=True)
class GeoBoundingBoxQuery(Query):
    field: str
    top_left: tuple[float, float]
    bottom_right: tuple[float, float]

    def source(self) -> dict[str, Any]:
        return {
            "geo_bounding_box": {
                self.field: {
                    "top_left": {"lat": self.top_left[0], "lon": self.top_left[1]},
                    "bottom_right": {"lat": self.bottom_right[0], "lon": self.bottom_right[1]},
                }
            }
        }


@dataclass(frozen=True, slots=True)
class GeoDistanceQuery(Query):
    field: str
    distance: str
    location: tuple[float, float]

    def source(self) -> dict[str, Any]:
        return {
            "geo_distance": {
                "distance": self.distance,
                self.field: {"lat": self.location[0], "lon": self.location[1]},
            }
        }


@dataclass(frozen=True, slots=True)
class BoolQuery(Query):
    """Boolean combinator node.

    An empty node matches every document.
    """

    must: tuple[Query, ...] = ()
    filter: tuple[Query, ...] = ()  # noqa: A003 - engine slot name
    should: tuple[Query, ...] = ()
    must_not: tuple[Query, ...] = ()

    def add(self, context: str, *children: Query) -> BoolQuery:
        """Return a copy with `children` appended to the `context` slot."""
        if context not in CONTEXTS:
            raise ValueError(f"Unknown bool context: {context}")
        return replace(self, **{context: getattr(self, context) + tuple(children)})

    def is_empty(self) -> bool:
        return not any(getattr(self, context) for context in CONTEXTS)

    def source(self) -> dict[str, Any]:
        body: dict[str, Any] = {}
        for context in CONTEXTS:
            children = getattr(self, context)
            if children:
                body[context] = [child.source() for child in children]
        return {"bool": body}


class Sorter:
    """Base class for sort criteria."""

    def source(self) -> dict[str, Any]:
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class FieldSort(Sorter):
    field: str
    ascending: bool = True

    def source(self) -> dict[str, Any]:
        return {self.field: {"order": "asc" if self.ascending else "desc"}}


@dataclass(frozen=True, slots=True)
class ScoreSort(Sorter):
    """Relevance score criterion, descending unless told otherwise."""

    ascending: bool = False

    def source(self) -> dict[str, Any]:
        return {"_score": {"order": "asc" if self.ascending else "desc"}}


def sort_source(sorters: Sequence[Sorter]) -> list[dict[str, Any]]:
    return [sorter.source() for sorter in sorters]
