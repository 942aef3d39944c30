"""Search local manual pages through Elasticsearch."""

__version__ = "0.1.0"
