"""Service layer for SearchDSL.

Wires the compiler and the engine client together and provides factory
functions for component creation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from SearchDSL.compiler.logic import QueryCompiler
from SearchDSL.services.search import SearchBackend, SearchService, as_query_input
from SearchDSL.utils.log import log

if TYPE_CHECKING:
    from SearchDSL.config import AppConfig


def create_search_service(config: AppConfig, *, with_backend: bool = True) -> SearchService:
    """Create a search service from configuration.

    Args:
        config: Application configuration.
        with_backend: Build the engine client; compile-only callers can skip it.

    Returns:
        Configured SearchService instance.

    Raises:
        ValueError: If the engine configuration is unusable.
    """
    backend = None
    if with_backend:
        from SearchDSL.engine.client import ElasticsearchClient

        backend = ElasticsearchClient(config.engine)
        log.debug("Engine client created: hosts=%s", ", ".join(config.engine.hosts))

    return SearchService(
        backend=backend,
        compiler=QueryCompiler(strict=config.compiler.strict),
        default_size=config.compiler.default_size,
    )


__all__ = [
    "SearchBackend",
    "SearchService",
    "as_query_input",
    "create_search_service",
]
