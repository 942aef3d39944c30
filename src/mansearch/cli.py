"""mansearch command-line entrypoint.

Run with:
  - mansearch [-s] [QUERY ...]
  - or: python -m mansearch (ensure PYTHONPATH includes ./src)
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from mansearch.config import AppSettings, ensure_default, load_config, load_settings
from mansearch.connectors.man import ManConnector
from mansearch.exceptions import MansearchError
from mansearch.indexer import rebuild_index
from mansearch.pager import SubprocessPager
from mansearch.search.elasticsearch import ElasticsearchClient
from mansearch.session import InteractiveSession

logger = logging.getLogger("mansearch")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mansearch",
        description="Search local manual pages through Elasticsearch.",
    )
    parser.add_argument(
        "-s",
        "--setup",
        action="store_true",
        help="Rebuild the search index from the installed manual pages and exit.",
    )
    parser.add_argument("-c", "--config", type=Path, help="Path to the configuration file.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    parser.add_argument("query", nargs="*", help="Initial search query.")
    return parser


def _configure_logging(settings: AppSettings, verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level.upper(), logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)


def run(args: argparse.Namespace, settings: AppSettings) -> int:
    config_path = args.config or settings.config_path
    if ensure_default(config_path):
        logger.info("Wrote default configuration to %s", config_path)
    config = load_config(config_path)
    backend = ElasticsearchClient(base_url=config.elasticsearch.base_url, timeout=settings.timeout)

    if args.setup:
        with backend:
            stats = rebuild_index(backend, ManConnector(), settings.index_name)
        print(f"Indexed {stats.indexed} manual pages ({len(stats.skipped)} skipped).")
        return 0

    session = InteractiveSession(
        backend,
        SubprocessPager(settings.pager),
        index_name=settings.index_name,
        page_size=config.elasticsearch.search_results_size,
    )
    session.run(" ".join(args.query))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings()
    _configure_logging(settings, args.verbose)
    try:
        return run(args, settings)
    except MansearchError as exc:
        logger.debug("Fatal error", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
