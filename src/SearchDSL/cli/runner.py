"""Command runner for coordinating CLI execution.

Manages logging configuration, component lifecycle and error handling for
command execution.
"""

from __future__ import annotations

import json
from typing import Any, Callable

import click

from SearchDSL.compiler import render_query
from SearchDSL.config import AppConfig
from SearchDSL.engine.client import iter_hits
from SearchDSL.services import SearchService, create_search_service
from SearchDSL.utils.log import configure_logging, log


class CommandRunner:
    """Runs one CLI command with logging and resource cleanup."""

    def __init__(self, config: AppConfig, *, echo: Callable[[str], None] = click.echo) -> None:
        self.config = config
        self.echo = echo

    def run_search(
        self,
        action: str,
        index: str,
        request: Any,
        *,
        offset: int | None = None,
        size: int | None = None,
    ) -> None:
        """Execute a search and print the raw engine result as JSON.

        Raises:
            click.Abort: When the search fails.
        """
        self._configure(action)
        try:
            service = create_search_service(self.config)
            try:
                result = service.search(index, request, offset=offset, size=size)
            finally:
                service.close()
            log.info("Search returned %d hit(s)", sum(1 for _ in iter_hits(result)))
            self.echo(json.dumps(result, ensure_ascii=False, indent=2))
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("Search failed: %s", e)
            raise click.Abort from e

    def run_compile(self, action: str, request: Any) -> None:
        """Print the compiled query without contacting the engine.

        Raises:
            click.Abort: When compilation fails (strict mode only).
        """
        self._configure(action)
        try:
            service: SearchService = create_search_service(self.config, with_backend=False)
            result = service.compile_result(request)
            for skipped in result.skipped:
                log.info("Skipped %s: %s", skipped.path, skipped.reason)
            self.echo(render_query(result))
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("Compile failed: %s", e)
            raise click.Abort from e

    def run_ping(self, action: str) -> None:
        """Report whether the configured engine answers.

        Raises:
            click.Abort: When no node is reachable.
        """
        self._configure(action)
        from SearchDSL.engine.client import ElasticsearchClient

        try:
            with ElasticsearchClient(self.config.engine) as client:
                alive = client.ping()
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("Ping failed: %s", e)
            raise click.Abort from e
        if not alive:
            log.error("Engine unreachable: %s", ", ".join(self.config.engine.hosts))
            raise click.Abort
        log.info("Engine reachable: %s", ", ".join(self.config.engine.hosts))

    def _configure(self, action: str) -> None:
        configure_logging(
            level=self.config.runtime.level,
            action=action,
            log_to_file=self.config.runtime.to_file,
            log_dir=self.config.runtime.dir,
        )
