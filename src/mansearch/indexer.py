"""Index (re)build: drop the index, recreate it and load every manual page.

Documents are processed one at a time. A page that cannot be rendered or
indexed is logged and skipped; losing the search engine aborts the run.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

from mansearch.connectors.base_connector import DocumentationProvider
from mansearch.exceptions import DocumentFetchError, SearchError
from mansearch.search.base_search import ManPageDocument, SearchBackend

logger = logging.getLogger("mansearch.indexer")


@dataclass(slots=True)
class IndexStats:
    indexed: int = 0
    skipped: List[str] = field(default_factory=list)


def load_documents(
    backend: SearchBackend, provider: DocumentationProvider, index_name: str
) -> IndexStats:
    """Index every command the provider lists into `index_name`."""
    stats = IndexStats()
    for command, description in provider.list_commands():
        try:
            text = provider.fetch_manpage(command)
            backend.index_document(
                index_name,
                ManPageDocument(command=command, description=description, manpage_text=text),
            )
        except (DocumentFetchError, SearchError) as exc:
            logger.warning("Skipping %s: %s", command, exc)
            stats.skipped.append(command)
            continue
        stats.indexed += 1
        logger.debug("Indexed %s", command)
    return stats


def rebuild_index(
    backend: SearchBackend, provider: DocumentationProvider, index_name: str
) -> IndexStats:
    """Delete, recreate and repopulate `index_name`."""
    backend.delete_index(index_name)
    backend.create_index(index_name)
    stats = load_documents(backend, provider, index_name)
    backend.refresh(index_name)
    logger.info("Indexed %d manual pages, skipped %d", stats.indexed, len(stats.skipped))
    return stats
