"""Base interface for documentation providers.

A provider enumerates the commands the host system documents and renders the
full manual text of any one of them. Implementations should be safe to
construct without side effects and must not run external tools until methods
are invoked.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterator, Tuple


class DocumentationProvider(ABC):
    """Abstract documentation source."""

    @abstractmethod
    def list_commands(self) -> Iterator[Tuple[str, str]]:
        """Yield `(command, short description)` pairs from the system catalog."""
        raise NotImplementedError

    @abstractmethod
    def fetch_manpage(self, command: str) -> str:
        """Return the rendered manual text for `command`.

        Implementations should raise `mansearch.exceptions.DocumentFetchError` on failure.
        """
        raise NotImplementedError
