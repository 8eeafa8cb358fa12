"""Tests for sort compilation and search request building."""

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from SearchDSL.compiler import build_search_request, compile_sort, normalize_sort, parse_query_input
from SearchDSL.compiler.logic import QueryCompiler
from SearchDSL.core.models import Projection, QueryInput
from SearchDSL.core.query import FieldSort, ScoreSort, TermQuery


class TestCompileSort(unittest.TestCase):
    def test_pairs_in_order_then_score(self) -> None:
        sorters = compile_sort([("f1", "desc"), ("f2", "asc")])
        self.assertEqual(sorters, [FieldSort("f1", ascending=False), FieldSort("f2", ascending=True), ScoreSort()])
        self.assertEqual(
            [s.source() for s in sorters],
            [{"f1": {"order": "desc"}}, {"f2": {"order": "asc"}}, {"_score": {"order": "desc"}}],
        )

    def test_unknown_direction_is_dropped(self) -> None:
        sorters = compile_sort([("f1", "up"), ("f2", "DESC")])
        self.assertEqual(sorters, [FieldSort("f2", ascending=False), ScoreSort()])

    def test_score_is_always_appended(self) -> None:
        self.assertEqual(compile_sort([]), [ScoreSort()])
        self.assertEqual(compile_sort([("f", "sideways")]), [ScoreSort()])


class TestNormalizeSort(unittest.TestCase):
    def test_mapping_keeps_key_order(self) -> None:
        self.assertEqual(normalize_sort({"b": "asc", "a": "desc"}), (("b", "asc"), ("a", "desc")))

    def test_list_shapes(self) -> None:
        self.assertEqual(normalize_sort([["a", "asc"], {"b": "desc"}]), (("a", "asc"), ("b", "desc")))

    def test_malformed_is_empty(self) -> None:
        self.assertEqual(normalize_sort("a:asc"), ())
        self.assertEqual(normalize_sort(None), ())


class TestParseQueryInput(unittest.TestCase):
    def test_full_request(self) -> None:
        query_input = parse_query_input(
            {
                "query": {"term": {"field": "a", "query": [1]}},
                "ret": {"includes": ["a", "b"], "excludes": ["c"]},
                "sort": {"a": "desc"},
                "from": 20,
                "size": 5,
                "unknown": True,
            }
        )
        self.assertEqual(query_input.projection, Projection(includes=("a", "b"), excludes=("c",)))
        self.assertEqual(query_input.sort, (("a", "desc"),))
        self.assertEqual((query_input.offset, query_input.size), (20, 5))

    def test_ret_list_means_includes(self) -> None:
        query_input = parse_query_input({"ret": ["field1", "field2"]})
        self.assertEqual(query_input.projection.includes, ("field1", "field2"))
        self.assertEqual(query_input.projection.excludes, ())

    def test_malformed_members_fall_back(self) -> None:
        query_input = parse_query_input({"query": "nope", "size": "ten", "ret": 3, "query_string": 7})
        self.assertEqual(query_input, QueryInput())


class TestBuildSearchRequest(unittest.TestCase):
    def test_defaults(self) -> None:
        request = build_search_request("books", QueryInput())
        self.assertEqual(request.body(), {"query": {"bool": {}}, "from": 0, "size": 10})

    def test_zero_size_uses_default(self) -> None:
        request = build_search_request("books", QueryInput(size=0), default_size=25)
        self.assertEqual(request.pagination.size, 25)

    def test_full_body(self) -> None:
        query_input = parse_query_input(
            {
                "query": {"term": {"field": "status", "query": ["active"]}},
                "ret": {"includes": ["title"]},
                "sort": {"f1": "desc", "f2": "asc"},
                "from": 10,
                "size": 3,
            }
        )
        request = build_search_request("books", query_input)
        self.assertEqual(request.index, "books")
        self.assertEqual(request.query.filter, (TermQuery("status", "active"),))
        self.assertEqual(
            request.body(),
            {
                "query": {"bool": {"filter": [{"term": {"status": "active"}}]}},
                "from": 10,
                "size": 3,
                "sort": [
                    {"f1": {"order": "desc"}},
                    {"f2": {"order": "asc"}},
                    {"_score": {"order": "desc"}},
                ],
                "_source": {"includes": ["title"], "excludes": []},
            },
        )

    def test_explicit_paging_overrides_input(self) -> None:
        request = build_search_request("books", QueryInput(offset=5, size=5), offset=50, size=7)
        self.assertEqual((request.pagination.offset, request.pagination.size), (50, 7))

    def test_query_string_used_when_query_empty(self) -> None:
        query_input = parse_query_input(
            {"query": {}, "query_string": '{"exists": {"field": "tags"}}'}
        )
        request = build_search_request("books", query_input)
        self.assertEqual(request.body()["query"], {"bool": {"filter": [{"exists": {"field": "tags"}}]}})

    def test_bad_query_string_is_match_all(self) -> None:
        request = build_search_request("books", QueryInput(query_string="not json"))
        self.assertEqual(request.body()["query"], {"bool": {}})

    def test_strict_compiler_is_used(self) -> None:
        from SearchDSL.compiler import ClauseDecodeError

        with self.assertRaises(ClauseDecodeError):
            build_search_request(
                "books",
                QueryInput(query={"term": {}}),
                compiler=QueryCompiler(strict=True),
            )


if __name__ == "__main__":
    unittest.main()
