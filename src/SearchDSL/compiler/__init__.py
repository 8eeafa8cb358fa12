"""Query DSL compiler.

Turns the nested JSON query language into boolean engine queries and sort
criteria.
"""

from __future__ import annotations

from SearchDSL.compiler.decoders import ClauseDecodeError
from SearchDSL.compiler.logic import CompileResult, QueryCompiler, SkippedClause, compile_query
from SearchDSL.compiler.request import (
    build_search_request,
    compile_input,
    normalize_sort,
    parse_query_input,
    render_query,
)
from SearchDSL.compiler.sort import compile_sort

__all__ = [
    "ClauseDecodeError",
    "CompileResult",
    "QueryCompiler",
    "SkippedClause",
    "build_search_request",
    "compile_input",
    "compile_query",
    "compile_sort",
    "normalize_sort",
    "parse_query_input",
    "render_query",
]
