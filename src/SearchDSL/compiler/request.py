"""Search request builder.

Normalizes the user-facing request object and combines the compiled query,
sort criteria, pagination and projection into a `SearchRequest`.

Top-level request shape::

    {
        "query": {...} | null,
        "query_string": "<the same DSL as JSON text>",
        "ret": {"includes": [...], "excludes": [...]},
        "sort": {"field1": "desc", "field2": "asc"},
        "from": 0,
        "size": 10
    }

Unknown top-level keys are ignored. Malformed optional members fall back to
their defaults instead of failing the request.
"""

from __future__ import annotations

import json
from typing import Any, Mapping

from SearchDSL.compiler.logic import CompileResult, QueryCompiler
from SearchDSL.compiler.sort import compile_sort
from SearchDSL.core.models import DEFAULT_PAGE_SIZE, Pagination, Projection, QueryInput, SearchRequest
from SearchDSL.utils.log import log

REQUEST_KEYS = frozenset({"query", "query_string", "ret", "sort", "from", "size"})


def parse_query_input(raw: Mapping[str, Any] | None) -> QueryInput:
    """Normalize a raw request mapping into `QueryInput`.

    Args:
        raw: Decoded top-level request object.

    Returns:
        Normalized query input.
    """
    if not raw:
        return QueryInput()
    if not isinstance(raw, Mapping):
        log.debug("Ignoring non-object request: %r", raw)
        return QueryInput()

    query = raw.get("query")
    if query is not None and not isinstance(query, Mapping):
        log.debug("Ignoring non-object query: %r", query)
        query = None

    query_string = raw.get("query_string")
    if not isinstance(query_string, str):
        query_string = ""

    return QueryInput(
        query=query,
        query_string=query_string,
        projection=_parse_projection(raw.get("ret")),
        sort=normalize_sort(raw.get("sort")),
        offset=_as_int(raw.get("from"), "from"),
        size=_as_int(raw.get("size"), "size"),
    )


def normalize_sort(value: Any) -> tuple[tuple[str, str], ...]:
    """Turn the accepted sort shapes into ordered (field, direction) pairs.

    Accepted shapes:
    - ``{"f1": "desc", "f2": "asc"}`` (key order is kept)
    - ``[["f1", "desc"], ["f2", "asc"]]``
    - ``[{"f1": "desc"}, {"f2": "asc"}]``
    """
    if not value:
        return ()
    if isinstance(value, Mapping):
        return tuple((str(k), str(v)) for k, v in value.items())
    if not isinstance(value, (list, tuple)):
        log.debug("Ignoring malformed sort: %r", value)
        return ()

    pairs: list[tuple[str, str]] = []
    for item in value:
        if isinstance(item, Mapping):
            pairs.extend((str(k), str(v)) for k, v in item.items())
        elif isinstance(item, (list, tuple)) and len(item) == 2:
            pairs.append((str(item[0]), str(item[1])))
        else:
            log.debug("Ignoring malformed sort entry: %r", item)
    return tuple(pairs)


def build_search_request(
    index: str,
    query_input: QueryInput,
    *,
    compiler: QueryCompiler | None = None,
    offset: int | None = None,
    size: int | None = None,
    default_size: int = DEFAULT_PAGE_SIZE,
) -> SearchRequest:
    """Build a search request from normalized input.

    Args:
        index: Target index.
        query_input: Normalized request.
        compiler: Compiler to use; a lenient one by default.
        offset: Explicit `from`, overriding the input's value.
        size: Explicit page size, overriding the input's value.
        default_size: Page size used when the size is 0 or unset.

    Returns:
        Request ready for the engine client.
    """
    result = compile_input(query_input, compiler=compiler)

    resolved_offset = query_input.offset if offset is None else offset
    resolved_size = query_input.size if size is None else size
    pagination = Pagination(
        offset=max(resolved_offset, 0),
        size=resolved_size if resolved_size > 0 else default_size,
    )

    sort = compile_sort(query_input.sort) if query_input.sort else ()
    return SearchRequest(
        index=index,
        query=result.query,
        sort=tuple(sort),
        pagination=pagination,
        projection=query_input.projection,
    )


def compile_input(query_input: QueryInput, *, compiler: QueryCompiler | None = None) -> CompileResult:
    compiler = compiler or QueryCompiler()
    return compiler.compile(query_input.query, query_input.query_string)


def render_query(result: CompileResult) -> str:
    """Serialize a compiled query as indented JSON for inspection."""
    return json.dumps(result.query.source(), ensure_ascii=False, indent=4)


def _parse_projection(value: Any) -> Projection:
    if not value:
        return Projection()
    if isinstance(value, (list, tuple)):
        return Projection(includes=_str_list(value))
    if isinstance(value, Mapping):
        return Projection(
            includes=_str_list(value.get("includes")),
            excludes=_str_list(value.get("excludes")),
        )
    log.debug("Ignoring malformed ret: %r", value)
    return Projection()


def _str_list(value: Any) -> tuple[str, ...]:
    if not isinstance(value, (list, tuple)):
        return ()
    return tuple(item.strip() for item in value if isinstance(item, str) and item.strip())


def _as_int(value: Any, key: str) -> int:
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        log.debug("Ignoring non-integer %s: %r", key, value)
        return 0
    return value
