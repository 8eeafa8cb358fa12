"""SearchDSL: a nested JSON query language compiled into boolean engine queries."""

from __future__ import annotations

from SearchDSL.compiler import ClauseDecodeError, CompileResult, QueryCompiler, compile_query, compile_sort
from SearchDSL.services.search import SearchService

__version__ = "0.1.0"

__all__ = [
    "ClauseDecodeError",
    "CompileResult",
    "QueryCompiler",
    "SearchService",
    "compile_query",
    "compile_sort",
]
