"""CLI tests for the compile and search commands.

The engine client is patched, so no network access is needed.
"""

from __future__ import annotations

import json
import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from click.testing import CliRunner

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from SearchDSL.cli.ui import cli

_CONFIG_YAML = """
log:
  level: ERROR
  to_file: false
  dir: log
engine:
  hosts: [http://127.0.0.1:9200]
compiler:
  strict: false
  default_size: 10
"""

_REQUEST = {
    "query": {
        "match": {"field": "title", "query": ["value1", "value2"], "weight": [2]},
        "not": {"term": {"field": "status", "query": ["deleted"]}},
    },
    "sort": {"year": "desc"},
    "size": 0,
}


class TestCli(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.config_path = Path(self._tmp.name) / "config.yml"
        self.config_path.write_text(_CONFIG_YAML, encoding="utf-8")
        self.runner = CliRunner()

    def _invoke(self, *args: str, stdin: str | None = None):
        with patch("SearchDSL.cli.ui.load_dotenv"):
            return self.runner.invoke(
                cli,
                ["--config", str(self.config_path), *args],
                input=stdin,
                catch_exceptions=False,
            )

    def test_compile_prints_query(self) -> None:
        result = self._invoke("compile", "-", stdin=json.dumps(_REQUEST))
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(
            json.loads(result.stdout),
            {
                "bool": {
                    "filter": [
                        {"match": {"title": {"query": "value1", "boost": 2.0}}},
                        {"match": {"title": {"query": "value2", "boost": 1.0}}},
                        {"bool": {"must_not": [{"term": {"status": "deleted"}}]}},
                    ]
                }
            },
        )

    def test_compile_bad_text_is_match_all(self) -> None:
        result = self._invoke("compile", "-", stdin="definitely not json")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(json.loads(result.stdout), {"bool": {}})

    def test_search_sends_compiled_body(self) -> None:
        engine_result = {"hits": {"hits": [{"_id": "1", "_source": {"title": "A"}}]}}
        with patch("SearchDSL.engine.client.ElasticsearchClient.search", return_value=engine_result) as search:
            result = self._invoke("search", "books", "-", "--from", "20", stdin=json.dumps(_REQUEST))

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(json.loads(result.stdout), engine_result)
        index, body = search.call_args.args
        self.assertEqual(index, "books")
        self.assertEqual(body["from"], 20)
        self.assertEqual(body["size"], 10)
        self.assertEqual(body["sort"], [{"year": {"order": "desc"}}, {"_score": {"order": "desc"}}])

    def test_search_failure_aborts(self) -> None:
        with patch(
            "SearchDSL.engine.client.ElasticsearchClient.search",
            side_effect=RuntimeError("engine down"),
        ):
            result = self._invoke("search", "books", "-", stdin="{}")
        self.assertEqual(result.exit_code, 1)


if __name__ == "__main__":
    unittest.main()
