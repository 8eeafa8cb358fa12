"""Tests for the search service execute and compile-only paths."""

from __future__ import annotations

import json
import sys
import unittest
from pathlib import Path
from typing import Any, Mapping

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from SearchDSL.compiler import QueryCompiler
from SearchDSL.core.models import QueryInput
from SearchDSL.services.search import SearchService, as_query_input


class _StubBackend:
    def __init__(self, *, result: dict[str, Any] | None = None, error: Exception | None = None) -> None:
        self.calls: list[tuple[str, Mapping[str, Any]]] = []
        self.closed = False
        self._result = result or {"hits": {"total": {"value": 0}, "hits": []}}
        self._error = error

    def search(self, index: str, body: Mapping[str, Any]) -> dict[str, Any]:
        self.calls.append((index, body))
        if self._error is not None:
            raise self._error
        return self._result

    def close(self) -> None:
        self.closed = True


class TestSearchServiceExecute(unittest.TestCase):
    def test_returns_backend_result_unmodified(self) -> None:
        result = {"took": 3, "hits": {"hits": [{"_id": "1"}]}}
        backend = _StubBackend(result=result)
        service = SearchService(backend=backend)

        out = service.search("books", {"query": {"term": {"field": "a", "query": [1]}}, "size": 2})

        self.assertIs(out, result)
        self.assertEqual(len(backend.calls), 1)
        index, body = backend.calls[0]
        self.assertEqual(index, "books")
        self.assertEqual(body, {"query": {"bool": {"filter": [{"term": {"a": 1}}]}}, "from": 0, "size": 2})

    def test_explicit_paging(self) -> None:
        backend = _StubBackend()
        SearchService(backend=backend).search("books", QueryInput(), offset=30, size=0)
        _, body = backend.calls[0]
        self.assertEqual((body["from"], body["size"]), (30, 10))

    def test_default_size_from_service(self) -> None:
        backend = _StubBackend()
        SearchService(backend=backend, default_size=50).search("books", None)
        self.assertEqual(backend.calls[0][1]["size"], 50)

    def test_backend_errors_propagate(self) -> None:
        backend = _StubBackend(error=ConnectionError("down"))
        with self.assertRaises(ConnectionError):
            SearchService(backend=backend).search("books", {})

    def test_missing_backend_raises(self) -> None:
        with self.assertRaises(RuntimeError):
            SearchService().search("books", {})

    def test_close_closes_backend(self) -> None:
        backend = _StubBackend()
        SearchService(backend=backend).close()
        self.assertTrue(backend.closed)


class TestSearchServiceCompile(unittest.TestCase):
    def test_compile_returns_indented_json(self) -> None:
        text = SearchService().compile({"term": {"field": "status", "query": ["active"]}})
        self.assertIn("\n    ", text)
        self.assertEqual(json.loads(text), {"bool": {"filter": [{"term": {"status": "active"}}]}})

    def test_compile_raw_text(self) -> None:
        text = SearchService().compile('{"or": {"exists": {"field": "tags"}}}')
        self.assertEqual(
            json.loads(text),
            {"bool": {"filter": [{"bool": {"should": [{"exists": {"field": "tags"}}]}}]}},
        )

    def test_compile_invalid_text_is_match_all(self) -> None:
        self.assertEqual(json.loads(SearchService().compile("{{{")), {"bool": {}})

    def test_compile_result_reports_skips(self) -> None:
        service = SearchService(compiler=QueryCompiler())
        result = service.compile_result({"query": {"range": {"field": "n"}}})
        self.assertTrue(result.query.is_empty())
        self.assertEqual(result.skipped[0].path, "range")


class TestAsQueryInput(unittest.TestCase):
    def test_bare_tree(self) -> None:
        tree = {"term": {"field": "a", "query": [1]}}
        self.assertEqual(as_query_input(tree).query, tree)

    def test_request_object(self) -> None:
        query_input = as_query_input({"query": {"term": {}}, "size": 4})
        self.assertEqual(query_input.size, 4)
        self.assertEqual(query_input.query, {"term": {}})

    def test_tree_with_stray_request_key_keeps_clauses(self) -> None:
        tree = {"term": {"field": "status", "query": ["active"]}, "size": 3}
        self.assertEqual(as_query_input(tree).query, tree)

        result = SearchService().compile_result(tree)
        self.assertEqual(result.query.source(), {"bool": {"filter": [{"term": {"status": "active"}}]}})
        self.assertEqual([s.path for s in result.skipped], ["size"])

    def test_paging_only_request_is_request_object(self) -> None:
        query_input = as_query_input({"sort": {"year": "desc"}, "size": 3})
        self.assertIsNone(query_input.query)
        self.assertEqual(query_input.size, 3)
        self.assertEqual(query_input.sort, (("year", "desc"),))

    def test_text(self) -> None:
        self.assertEqual(as_query_input("abc"), QueryInput(query_string="abc"))


if __name__ == "__main__":
    unittest.main()
