from .base_search import ManPageDocument, SearchBackend, SearchResult
from .elasticsearch import ElasticsearchClient

__all__ = ["ElasticsearchClient", "ManPageDocument", "SearchBackend", "SearchResult"]
