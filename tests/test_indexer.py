import pytest

from fakes import FakeBackend, FakeProvider
from mansearch.exceptions import BackendUnavailableError, SearchError
from mansearch.indexer import rebuild_index
from mansearch.search.base_search import ManPageDocument


def test_rebuild_indexes_catalog_entry() -> None:
    backend = FakeBackend()
    provider = FakeProvider(
        [("ls", "list directory contents")],
        {"ls": "LS(1) User Commands\n\nNAME\n       ls - list directory contents\n"},
    )

    stats = rebuild_index(backend, provider, "manpages")

    assert stats.indexed == 1
    assert stats.skipped == []
    assert backend.indices["manpages"] == [
        ManPageDocument(
            command="ls",
            description="list directory contents",
            manpage_text="LS(1) User Commands\n\nNAME\n       ls - list directory contents\n",
        )
    ]
    assert backend.refreshed == ["manpages"]


def test_rebuild_drops_existing_index_first() -> None:
    backend = FakeBackend([ManPageDocument("old", "stale", "stale")])
    provider = FakeProvider([("ls", "list directory contents")], {"ls": "LS(1)"})

    rebuild_index(backend, provider, "manpages")

    assert backend.deleted == ["manpages"]
    assert backend.created == ["manpages"]
    assert [d.command for d in backend.indices["manpages"]] == ["ls"]


def test_fetch_failure_is_skipped_and_load_continues() -> None:
    backend = FakeBackend()
    provider = FakeProvider(
        [("ls", "list directory contents"), ("ghost", "not installed"), ("pwd", "print directory")],
        {"ls": "LS(1)", "pwd": "PWD(1)"},
    )

    stats = rebuild_index(backend, provider, "manpages")

    assert stats.indexed == 2
    assert stats.skipped == ["ghost"]
    assert [d.command for d in backend.indices["manpages"]] == ["ls", "pwd"]


class RejectingBackend(FakeBackend):
    """Refuses to index one command with an error status."""

    def __init__(self, reject: str) -> None:
        super().__init__()
        self.reject = reject

    def index_document(self, name: str, doc: ManPageDocument) -> None:
        if doc.command == self.reject:
            raise SearchError(f"POST /{name}/_doc failed with status 400")
        super().index_document(name, doc)


class UnreachableBackend(FakeBackend):
    def index_document(self, name: str, doc: ManPageDocument) -> None:
        raise BackendUnavailableError("Cannot reach search engine at http://localhost:9200")


def test_rejected_document_is_skipped_and_load_continues() -> None:
    backend = RejectingBackend("ls")
    provider = FakeProvider(
        [("ls", "list directory contents"), ("pwd", "print directory")],
        {"ls": "LS(1)", "pwd": "PWD(1)"},
    )

    stats = rebuild_index(backend, provider, "manpages")

    assert stats.indexed == 1
    assert stats.skipped == ["ls"]
    assert [d.command for d in backend.indices["manpages"]] == ["pwd"]


def test_unreachable_backend_aborts_load() -> None:
    backend = UnreachableBackend()
    provider = FakeProvider(
        [("ls", "list directory contents"), ("pwd", "print directory")],
        {"ls": "LS(1)", "pwd": "PWD(1)"},
    )

    with pytest.raises(BackendUnavailableError):
        rebuild_index(backend, provider, "manpages")
    assert backend.refreshed == []
