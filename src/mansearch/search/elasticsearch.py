"""Elasticsearch backend spoken to over its REST API via httpx.

Only a few endpoints are used: index existence/creation/deletion, refresh, single
document indexing and `_search` with a cross-fields `multi_match` query.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from mansearch.exceptions import BackendUnavailableError, SearchError
from mansearch.search.base_search import ManPageDocument, SearchBackend, SearchResult

logger = logging.getLogger("mansearch.search")

INDEX_MAPPING: Dict[str, Any] = {
    "mappings": {
        "properties": {
            "command": {"type": "text", "analyzer": "standard"},
            "description": {"type": "text", "analyzer": "english"},
            "manpage": {"type": "text", "analyzer": "english"},
        }
    }
}


def build_query(text: str, size: int) -> Dict[str, Any]:
    """Build the `_search` request body for a free-text query."""
    return {
        "size": size,
        "query": {
            "multi_match": {
                "query": text,
                "type": "cross_fields",
                "fields": ["command", "description^3", "manpage^3"],
                "operator": "or",
                "minimum_should_match": "40%",
                "tie_breaker": 0.1,
                "cutoff_frequency": 0.1,
            }
        },
    }


class ElasticsearchClient(SearchBackend):
    def __init__(self, *, base_url: str, timeout: float = 30.0) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._http: Optional[httpx.Client] = None

    def __enter__(self) -> "ElasticsearchClient":
        # Keep one connection pool open until __exit__
        if self._http is None:
            self._http = self._client()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        if self._http is not None:
            self._http.close()
            self._http = None

    def _client(self) -> httpx.Client:
        return httpx.Client(
            base_url=self.base_url,
            timeout=self.timeout,
            headers={
                "Accept": "application/json",
                "Content-Type": "application/json",
            },
        )

    def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        logger.debug("%s %s%s", method, self.base_url, path)
        try:
            if self._http is not None:
                return self._http.request(method, path, **kwargs)
            with self._client() as client:
                return client.request(method, path, **kwargs)
        except httpx.TransportError as exc:
            raise BackendUnavailableError(
                f"Cannot reach search engine at {self.base_url}: {exc}"
            ) from exc

    @staticmethod
    def _check(resp: httpx.Response) -> None:
        try:
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise SearchError(
                f"{resp.request.method} {resp.request.url.path} failed with status {resp.status_code}"
            ) from exc

    def index_exists(self, name: str) -> bool:
        resp = self._request("HEAD", f"/{name}")
        if resp.status_code == 404:
            return False
        self._check(resp)
        return True

    def delete_index(self, name: str) -> None:
        resp = self._request("DELETE", f"/{name}")
        if resp.status_code == 404:
            logger.debug("Index %s did not exist", name)
            return
        self._check(resp)

    def create_index(self, name: str) -> bool:
        # Check-then-create; concurrent setups may race, which is accepted.
        if self.index_exists(name):
            return False
        resp = self._request("PUT", f"/{name}", json=INDEX_MAPPING)
        self._check(resp)
        logger.info("Created index %s", name)
        return True

    def index_document(self, name: str, doc: ManPageDocument) -> None:
        resp = self._request("POST", f"/{name}/_doc", json=doc.to_source())
        self._check(resp)

    def refresh(self, name: str) -> None:
        resp = self._request("POST", f"/{name}/_refresh")
        self._check(resp)

    def search(self, name: str, query: str, *, size: int = 10) -> List[SearchResult]:
        resp = self._request("POST", f"/{name}/_search", json=build_query(query, size))
        self._check(resp)
        data = resp.json()
        hits = ((data.get("hits") or {}).get("hits") if isinstance(data, dict) else None) or []
        results: List[SearchResult] = []
        for hit in hits[:size]:
            if isinstance(hit, dict):
                results.append(SearchResult.from_source(hit.get("_source") or {}))
        return results
