"""Abstract search interface for indexing and querying manual pages.

Defines the minimal surface for search backends (e.g., Elasticsearch), enabling
extensibility and testability via a common contract.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List


@dataclass(slots=True)
class ManPageDocument:
    """A manual page as sent to the search index."""

    command: str
    description: str
    manpage_text: str

    def to_source(self) -> Dict[str, Any]:
        return {
            "command": self.command,
            "description": self.description,
            "manpage": self.manpage_text,
        }


@dataclass(slots=True, frozen=True)
class SearchResult:
    """Represents a single search hit, in engine rank order."""

    command: str
    description: str
    manpage_text: str

    @classmethod
    def from_source(cls, source: Dict[str, Any]) -> "SearchResult":
        return cls(
            command=str(source.get("command") or ""),
            description=str(source.get("description") or ""),
            manpage_text=str(source.get("manpage") or ""),
        )


class SearchBackend(ABC):
    """Abstract interface for search index implementations."""

    @abstractmethod
    def delete_index(self, name: str) -> None:
        """Remove the index; a missing index is not an error."""

    @abstractmethod
    def create_index(self, name: str) -> bool:
        """Create the index unless it exists. Returns True if it was created."""

    @abstractmethod
    def index_document(self, name: str, doc: ManPageDocument) -> None:
        """Add one document to the index."""

    @abstractmethod
    def search(self, name: str, query: str, *, size: int = 10) -> List[SearchResult]:
        """Execute a ranked query and return at most `size` results, best first."""
        raise NotImplementedError

    def refresh(self, name: str) -> None:
        """Make recently indexed documents visible to search. Optional."""

    def __enter__(self) -> "SearchBackend":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        return None
