"""Search service layer: compile DSL requests and run them on the engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Protocol, Union

from SearchDSL.compiler.logic import CompileResult, QueryCompiler
from SearchDSL.compiler.request import (
    REQUEST_KEYS,
    build_search_request,
    compile_input,
    parse_query_input,
    render_query,
)
from SearchDSL.core.models import DEFAULT_PAGE_SIZE, QueryInput, SearchRequest
from SearchDSL.utils.log import log

RequestLike = Union[QueryInput, Mapping[str, Any], str, None]


class SearchBackend(Protocol):
    """Protocol for the engine collaborator that executes requests."""

    def search(self, index: str, body: Mapping[str, Any]) -> dict[str, Any]:
        """Run one search and return the raw engine result."""
        raise NotImplementedError

    def close(self) -> None:
        raise NotImplementedError


@dataclass(slots=True)
class SearchService:
    """Application service exposing the execute and compile-only paths.

    Attributes:
        backend: Engine collaborator; only needed for `search`.
        compiler: DSL compiler carrying the error policy.
        default_size: Page size used when a request asks for 0 or nothing.
    """

    backend: SearchBackend | None = None
    compiler: QueryCompiler = field(default_factory=QueryCompiler)
    default_size: int = DEFAULT_PAGE_SIZE

    def build_request(
        self,
        index: str,
        request: RequestLike,
        *,
        offset: int | None = None,
        size: int | None = None,
    ) -> SearchRequest:
        """Build the engine request for `request` without running it."""
        return build_search_request(
            index,
            as_query_input(request),
            compiler=self.compiler,
            offset=offset,
            size=size,
            default_size=self.default_size,
        )

    def search(
        self,
        index: str,
        request: RequestLike,
        *,
        offset: int | None = None,
        size: int | None = None,
    ) -> dict[str, Any]:
        """Compile `request` and execute it against `index`.

        Args:
            index: Target index.
            request: Request object, its mapping form, or the bare query DSL
                as JSON text.
            offset: Explicit `from`, overriding the request.
            size: Explicit page size, overriding the request.

        Returns:
            Raw engine result, unmodified.

        Raises:
            RuntimeError: If no backend is configured.
            elasticsearch.ApiError: Engine failures, unmodified.
        """
        if self.backend is None:
            raise RuntimeError("No search backend is configured")
        search_request = self.build_request(index, request, offset=offset, size=size)
        log.info(
            "Searching index=%s from=%d size=%d",
            index,
            search_request.pagination.offset,
            search_request.pagination.size,
        )
        return self.backend.search(index, search_request.body())

    def compile(self, request: RequestLike) -> str:
        """Return the compiled query as indented JSON, without executing it."""
        return render_query(self.compile_result(request))

    def compile_result(self, request: RequestLike) -> CompileResult:
        return compile_input(as_query_input(request), compiler=self.compiler)

    def close(self) -> None:
        if self.backend is not None:
            self.backend.close()


def as_query_input(request: RequestLike) -> QueryInput:
    """Normalize the accepted request forms into `QueryInput`.

    - `QueryInput`: used as is.
    - str: the query DSL as raw JSON text (``query_string``).
    - mapping with a ``query`` or ``query_string`` key, or whose keys are
      all request keys (ret, sort, from, size): a full request object.
    - any other mapping: the query DSL tree itself. Stray request keys next
      to clauses are compiled as unknown clauses, so the clauses survive.
    """
    if request is None:
        return QueryInput()
    if isinstance(request, QueryInput):
        return request
    if isinstance(request, str):
        return QueryInput(query_string=request)
    if isinstance(request, Mapping) and not _is_request_object(request):
        return QueryInput(query=request)
    return parse_query_input(request)


def _is_request_object(raw: Mapping[str, Any]) -> bool:
    keys = set(raw)
    return bool(keys & {"query", "query_string"}) or keys <= REQUEST_KEYS
