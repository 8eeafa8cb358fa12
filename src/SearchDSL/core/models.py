from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence

from SearchDSL.core.query import BoolQuery, Sorter, sort_source

DEFAULT_PAGE_SIZE = 10


@dataclass(frozen=True, slots=True)
class Projection:
    """Fields to return from each matched document's source.

    Attributes:
        includes: Fields (or wildcard patterns) to keep.
        excludes: Fields (or wildcard patterns) to drop.
    """

    includes: Sequence[str] = ()
    excludes: Sequence[str] = ()

    def is_empty(self) -> bool:
        return not self.includes and not self.excludes

    def source(self) -> dict[str, Any]:
        return {"includes": list(self.includes), "excludes": list(self.excludes)}


@dataclass(frozen=True, slots=True)
class Pagination:
    offset: int = 0
    size: int = DEFAULT_PAGE_SIZE


@dataclass(frozen=True, slots=True)
class QueryInput:
    """Normalized top-level search input as authored by the user.

    Attributes:
        query: Structured DSL tree. Takes precedence when non-empty.
        query_string: The same DSL as raw JSON text, used when `query` is empty.
        projection: Source field projection.
        sort: Ordered (field, direction) pairs.
        offset: Requested `from`.
        size: Requested page size; 0 means the default.
    """

    query: Optional[Mapping[str, Any]] = None
    query_string: str = ""
    projection: Projection = Projection()
    sort: Sequence[tuple[str, str]] = ()
    offset: int = 0
    size: int = 0


@dataclass(frozen=True, slots=True)
class SearchRequest:
    """Everything the engine needs to run one search.

    Attributes:
        index: Target index name (comma-separated names and patterns allowed).
        query: Compiled query tree.
        sort: Compiled sort criteria; empty means engine default ordering.
        pagination: Offset and page size.
        projection: Source projection; only sent when non-empty.
    """

    index: str
    query: BoolQuery
    sort: Sequence[Sorter] = ()
    pagination: Pagination = Pagination()
    projection: Projection = Projection()

    def body(self) -> dict[str, Any]:
        """Render the engine `_search` request body."""
        out: dict[str, Any] = {
            "query": self.query.source(),
            "from": self.pagination.offset,
            "size": self.pagination.size,
        }
        if self.sort:
            out["sort"] = sort_source(self.sort)
        if not self.projection.is_empty():
            out["_source"] = self.projection.source()
        return out
