"""Tests for logger configuration."""

import io
import logging
import sys
import tempfile
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from SearchDSL.compiler import compile_query
from SearchDSL.utils.log import configure_logging, log


class TestConfigureLogging(unittest.TestCase):
    def tearDown(self) -> None:
        for handler in log.handlers:
            handler.close()
        log.handlers.clear()

    def test_abbreviated_level_prefix(self) -> None:
        stream = io.StringIO()
        configure_logging(level="INFO", stream=stream)

        compile_query({"term": {"field": "x", "query": []}})

        line = stream.getvalue().strip()
        self.assertIn("[WARN] Query compiled with 1 skipped clause(s)", line)

    def test_console_level_filters_debug(self) -> None:
        stream = io.StringIO()
        configure_logging(level="warning", stream=stream)
        log.debug("hidden")
        log.error("shown")
        self.assertNotIn("hidden", stream.getvalue())
        self.assertIn("[ERRO] shown", stream.getvalue())

    def test_unknown_level_falls_back_to_info(self) -> None:
        configure_logging(level="chatty", stream=io.StringIO())
        self.assertEqual(log.level, logging.INFO)

    def test_file_mirror_keeps_debug(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            configure_logging(
                level="ERROR",
                action="compile",
                log_to_file=True,
                log_dir=tmp,
                stream=io.StringIO(),
            )
            log.debug("detail")
            for handler in log.handlers:
                handler.flush()

            files = list(Path(tmp).glob("compile-*.log"))
            self.assertEqual(len(files), 1)
            self.assertIn("[DEBG] detail", files[0].read_text(encoding="utf-8"))
            for handler in log.handlers:
                handler.close()
            log.handlers.clear()


if __name__ == "__main__":
    unittest.main()
