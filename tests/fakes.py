from typing import Dict, Iterator, List, Optional, Tuple

from mansearch.connectors.base_connector import DocumentationProvider
from mansearch.exceptions import DocumentFetchError
from mansearch.pager import Pager
from mansearch.search.base_search import ManPageDocument, SearchBackend, SearchResult


class FakeBackend(SearchBackend):
    """In-memory stand-in for the search engine; ranks by naive term overlap."""

    def __init__(self, docs: Optional[List[ManPageDocument]] = None) -> None:
        self.indices: Dict[str, List[ManPageDocument]] = {}
        self.created: List[str] = []
        self.deleted: List[str] = []
        self.refreshed: List[str] = []
        self.queries: List[Tuple[str, str, int]] = []
        if docs is not None:
            self.indices["manpages"] = list(docs)

    def delete_index(self, name: str) -> None:
        self.deleted.append(name)
        self.indices.pop(name, None)

    def create_index(self, name: str) -> bool:
        if name in self.indices:
            return False
        self.indices[name] = []
        self.created.append(name)
        return True

    def index_document(self, name: str, doc: ManPageDocument) -> None:
        self.indices[name].append(doc)

    def refresh(self, name: str) -> None:
        self.refreshed.append(name)

    def search(self, name: str, query: str, *, size: int = 10) -> List[SearchResult]:
        self.queries.append((name, query, size))
        terms = query.lower().split()
        scored = []
        for pos, doc in enumerate(self.indices.get(name, [])):
            body = f"{doc.command} {doc.description} {doc.manpage_text}".lower()
            score = sum(body.count(t) for t in terms)
            if score:
                scored.append((-score, pos, doc))
        scored.sort()
        return [
            SearchResult(command=d.command, description=d.description, manpage_text=d.manpage_text)
            for _, _, d in scored[:size]
        ]


class FakeProvider(DocumentationProvider):
    def __init__(self, catalog: List[Tuple[str, str]], pages: Dict[str, str]) -> None:
        self.catalog = catalog
        self.pages = pages

    def list_commands(self) -> Iterator[Tuple[str, str]]:
        yield from self.catalog

    def fetch_manpage(self, command: str) -> str:
        if command not in self.pages:
            raise DocumentFetchError(f"No manual entry for {command}")
        return self.pages[command]


class FakePager(Pager):
    def __init__(self) -> None:
        self.shown: List[str] = []

    def show(self, text: str) -> None:
        self.shown.append(text)
