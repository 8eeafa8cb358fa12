"""Search engine client.

Thin wrapper over ``elasticsearch.Elasticsearch`` built from an
`EngineConfig`. Node selection, auth, compression, timeouts and retries are
handled by the library transport; query compilation happens elsewhere and this
client sends whatever body it is given.
"""

from __future__ import annotations

import uuid
from typing import Any, Iterable, Mapping, Sequence

from elasticsearch import Elasticsearch, helpers

from SearchDSL.config.engine import EngineConfig, check_engine
from SearchDSL.utils.log import log


class InvalidInputError(ValueError):
    """Raised when a write request has nothing to do."""


def build_elasticsearch(config: EngineConfig) -> Elasticsearch:
    """Create the library client for `config`."""
    options: dict[str, Any] = {
        "http_compress": config.gzip,
        "request_timeout": config.timeout,
        "max_retries": config.max_retries,
        "retry_on_timeout": True,
    }
    if config.username:
        options["basic_auth"] = (config.username, config.password)
    if config.headers:
        options["headers"] = dict(config.headers)
    return Elasticsearch(list(config.hosts), **options)


class ElasticsearchClient:
    """Engine operations used by SearchDSL.

    Results come back as plain dicts. Engine failures surface as
    ``elasticsearch`` exceptions (``ApiError``, ``TransportError``) once the
    transport retries are exhausted.
    """

    def __init__(self, config: EngineConfig, *, es: Elasticsearch | None = None) -> None:
        """Initialize the client.

        Args:
            config: Connection settings.
            es: Optional preconfigured library client (mainly for tests).

        Raises:
            ValueError: If the configuration is unusable.
        """
        check_engine(config)
        self.config = config
        self._es = es if es is not None else build_elasticsearch(config)

    def close(self) -> None:
        self._es.close()

    def __enter__(self) -> ElasticsearchClient:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def ping(self) -> bool:
        alive = bool(self._es.ping())
        if not alive:
            log.debug("Ping failed: hosts=%s", ", ".join(self.config.hosts))
        return alive

    def search(self, index: str, body: Mapping[str, Any]) -> dict[str, Any]:
        """Run a search against `index` and return the raw result."""
        log.debug("Search index=%s body=%s", index, body)
        return _raw(self._es.search(index=index, body=dict(body)))

    def create_index(
        self,
        index: str,
        *,
        settings: Mapping[str, Any] | None = None,
        mappings: Mapping[str, Any] | None = None,
        aliases: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Create an index with optional settings, mappings and aliases."""
        options = {
            key: dict(value)
            for key, value in (("settings", settings), ("mappings", mappings), ("aliases", aliases))
            if value is not None
        }
        return _raw(self._es.indices.create(index=index, **options))

    def get_index(self, *indices: str) -> dict[str, Any]:
        """Return index metadata keyed by index name."""
        if not indices:
            raise InvalidInputError("get_index requires at least one index")
        return _raw(self._es.indices.get(index=list(indices)))

    def index_document(self, index: str, doc_id: str, document: Mapping[str, Any]) -> dict[str, Any]:
        return _raw(self._es.index(index=index, id=doc_id, document=dict(document)))

    def bulk(
        self,
        index: str,
        documents: Sequence[Mapping[str, Any]] = (),
        delete_ids: Sequence[str] = (),
    ) -> dict[str, Any]:
        """Index and delete documents in one bulk call.

        Documents are indexed under their ``ID`` value; a document without a
        string ``ID`` gets a fresh UUID written back into ``ID``.

        Returns:
            ``{"success": <count>, "errors": [<per-item error>...]}``.

        Raises:
            InvalidInputError: If there is nothing to index or delete.
        """
        if not documents and not delete_ids:
            raise InvalidInputError("bulk requires at least one document or delete id")

        actions: list[dict[str, Any]] = []
        for document in documents:
            doc = dict(document)
            doc_id = doc.get("ID")
            if not isinstance(doc_id, str) or not doc_id:
                doc_id = str(uuid.uuid4())
                doc["ID"] = doc_id
            actions.append({"_op_type": "index", "_index": index, "_id": doc_id, "_source": doc})
        for doc_id in delete_ids:
            actions.append({"_op_type": "delete", "_index": index, "_id": doc_id})

        log.debug("Bulk index=%s docs=%d deletes=%d", index, len(documents), len(delete_ids))
        success, errors = helpers.bulk(self._es, actions, raise_on_error=False)
        if errors:
            log.warning("Bulk index=%s finished with %d error(s)", index, len(errors))
        return {"success": success, "errors": list(errors)}


def _raw(response: Any) -> dict[str, Any]:
    body = response.body
    return dict(body) if isinstance(body, Mapping) else {"result": body}


def iter_hits(result: Mapping[str, Any]) -> Iterable[Mapping[str, Any]]:
    """Yield the hit objects of a raw search result."""
    hits = result.get("hits", {})
    if isinstance(hits, Mapping):
        for hit in hits.get("hits", []) or []:
            if isinstance(hit, Mapping):
                yield hit
