"""CLI package for SearchDSL command orchestration."""

from __future__ import annotations

__all__ = ["CommandRunner", "main"]

from SearchDSL.cli.runner import CommandRunner
from SearchDSL.cli.ui import cli


def main() -> None:
    """Run SearchDSL CLI.

    Entry point referenced by console script in pyproject.toml.
    """
    cli()
