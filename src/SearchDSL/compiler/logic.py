"""Logic tree compiler.

Walks a DSL mapping and assembles a `BoolQuery`.

Rules
- The top-level node combines its children as `filter` (must match, no score).
- `and` / `or` / `not` open a nested bool node whose children combine as
  `must` / `should` / `must_not`; the nested node itself is attached to the
  parent with the parent's context.
- Any other key is a leaf tag handled by `SearchDSL.compiler.decoders`.
- Keys are matched case-insensitively; siblings keep input order.

In lenient mode (the default) a malformed leaf or a non-object value under a
logic keyword is skipped and recorded; the rest of the tree still compiles.
Strict mode raises `ClauseDecodeError` instead. Unknown leaf tags are recorded
as skipped in both modes.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Mapping

from SearchDSL.compiler.decoders import LEAF_DECODERS, ClauseDecodeError, to_predicates
from SearchDSL.core.query import FILTER, MUST, MUST_NOT, SHOULD, BoolQuery
from SearchDSL.utils.log import log

LOGIC_CONTEXTS: Mapping[str, str] = {
    "and": MUST,
    "or": SHOULD,
    "not": MUST_NOT,
}


@dataclass(frozen=True, slots=True)
class SkippedClause:
    """A DSL key that did not contribute to the compiled query.

    Attributes:
        path: Dotted location of the key, e.g. ``and.or.range``.
        reason: Why it was skipped.
    """

    path: str
    reason: str


@dataclass(frozen=True, slots=True)
class CompileResult:
    query: BoolQuery
    skipped: tuple[SkippedClause, ...] = ()


class QueryCompiler:
    """Compile DSL trees into boolean queries.

    Instances hold only the error policy, so one compiler can be shared
    between threads.
    """

    def __init__(self, *, strict: bool = False) -> None:
        self.strict = strict

    def compile(self, node: Mapping[str, Any] | None = None, text: str = "") -> CompileResult:
        """Compile a DSL tree, or its raw JSON text when the tree is empty.

        Args:
            node: Structured DSL tree.
            text: Raw JSON text with the same grammar; used only when `node`
                is empty.

        Returns:
            Compiled query with the keys that were skipped. Empty input and
            undecodable text both give an empty (match-all) query.

        Raises:
            ClauseDecodeError: In strict mode, on the first malformed clause.
        """
        skipped: list[SkippedClause] = []
        if node and not isinstance(node, Mapping):
            self._skip(skipped, "query", "must be an object")
            node = None
        if not node:
            node = self._load_text(text, skipped)
        if not node:
            return CompileResult(query=BoolQuery(), skipped=tuple(skipped))

        query = self._compile_node(node, FILTER, "", skipped)
        if skipped:
            log.warning("Query compiled with %d skipped clause(s)", len(skipped))
        return CompileResult(query=query, skipped=tuple(skipped))

    def _compile_node(
        self,
        node: Mapping[str, Any],
        context: str,
        prefix: str,
        skipped: list[SkippedClause],
    ) -> BoolQuery:
        query = BoolQuery()
        for raw_key, value in node.items():
            key = str(raw_key).strip().lower()
            path = f"{prefix}.{key}" if prefix else key

            nested_context = LOGIC_CONTEXTS.get(key)
            if nested_context is not None:
                if not isinstance(value, Mapping):
                    self._skip(skipped, path, f"{key} must be an object")
                    continue
                child = self._compile_node(value, nested_context, path, skipped)
                query = query.add(context, child)
                continue

            decoder = LEAF_DECODERS.get(key)
            if decoder is None:
                skipped.append(SkippedClause(path, "unknown clause type"))
                log.debug("Skipping unknown clause type: %s", path)
                continue
            try:
                clause = decoder(value, path)
            except ClauseDecodeError as error:
                self._skip(skipped, path, str(error))
                continue
            query = query.add(context, *to_predicates(clause))
        return query

    def _load_text(self, text: str, skipped: list[SkippedClause]) -> Mapping[str, Any] | None:
        if not text or not text.strip():
            return None
        try:
            data = json.loads(text)
        except json.JSONDecodeError as error:
            self._skip(skipped, "query_string", f"invalid JSON: {error.msg}")
            return None
        if not isinstance(data, Mapping):
            self._skip(skipped, "query_string", "must decode to an object")
            return None
        return data

    def _skip(self, skipped: list[SkippedClause], path: str, reason: str) -> None:
        if self.strict:
            raise ClauseDecodeError(f"{path}: {reason}")
        skipped.append(SkippedClause(path, reason))
        log.debug("Skipping clause %s: %s", path, reason)


def compile_query(
    node: Mapping[str, Any] | None = None,
    text: str = "",
    *,
    strict: bool = False,
) -> CompileResult:
    """Compile a DSL tree (or raw JSON text) with a one-off compiler."""
    return QueryCompiler(strict=strict).compile(node, text)
