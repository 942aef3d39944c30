"""Custom exception hierarchy for mansearch.

These exceptions allow callers to discriminate error categories
and handle them appropriately while preserving the original context.
"""

from __future__ import annotations


class MansearchError(Exception):
    """Base class for all mansearch exceptions."""


class ConfigurationError(MansearchError):
    """Raised when the configuration file is missing, unreadable or malformed."""


class BackendUnavailableError(MansearchError):
    """Raised when the search engine cannot be reached."""


class SearchError(MansearchError):
    """Raised when the search engine answers a request with an error status."""


class DocumentFetchError(MansearchError):
    """Raised when a single manual page cannot be rendered."""


class ParseError(MansearchError):
    """Raised for a catalog line that does not look like `name (section) - description`."""


class InvalidSelectionError(MansearchError):
    """Raised when a result number is outside the current result list."""
