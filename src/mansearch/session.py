"""Interactive search loop.

The loop is an explicit state machine over a `SessionState` value:

    AWAITING_INPUT   -> run the current query (or ask for one if it is empty)
    SHOWING_RESULTS  -> wait for a result number, a new query or `q`
    VIEWING_DOCUMENT -> page the selected manual, then back to AWAITING_INPUT
    EXITED           -> stop

Reading a number selects a result, `q` quits, anything else is a new query.
"""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from mansearch.exceptions import InvalidSelectionError, SearchError
from mansearch.pager import Pager
from mansearch.search.base_search import SearchBackend, SearchResult

logger = logging.getLogger("mansearch.session")

MAX_WIDTH = 70
ELLIPSIS = "..."
COMMAND_WIDTH = 15

EMPTY_QUERY_MESSAGE = "Type a search query, or q to quit."
NO_MATCHES_MESSAGE = "No matches. Try a different query, or q to quit."
SEARCH_FAILED_MESSAGE = "Search failed: {error} (run mansearch --setup?)"
PROMPT = "Enter a number to view, a new query, or q to quit: "
QUIT = "q"


def truncate(text: str, width: int = MAX_WIDTH) -> str:
    """Cut `text` to `width - 2` characters plus an ellipsis when longer than `width`."""
    if len(text) <= width:
        return text
    return text[: width - 2] + ELLIPSIS


def format_result(index: int, result: SearchResult) -> str:
    return f"{index}: {result.command.ljust(COMMAND_WIDTH)} {truncate(result.description)}"


class State(enum.Enum):
    AWAITING_INPUT = "awaiting_input"
    SHOWING_RESULTS = "showing_results"
    VIEWING_DOCUMENT = "viewing_document"
    EXITED = "exited"


@dataclass
class SessionState:
    query: str = ""
    results: List[SearchResult] = field(default_factory=list)
    state: State = State.AWAITING_INPUT
    selection: Optional[int] = None


class InteractiveSession:
    def __init__(
        self,
        backend: SearchBackend,
        pager: Pager,
        *,
        index_name: str,
        page_size: int,
        read_input: Optional[Callable[[str], str]] = None,
        write: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.backend = backend
        self.pager = pager
        self.index_name = index_name
        self.page_size = page_size
        self.read_input = read_input or input
        self.write = write or print

    def run(self, query: str = "") -> SessionState:
        """Drive the loop until the user quits. Returns the final state."""
        session = SessionState(query=query.strip())
        while session.state is not State.EXITED:
            self.step(session)
        return session

    def step(self, session: SessionState) -> None:
        """Advance `session` by one transition."""
        if session.state is State.AWAITING_INPUT:
            if not session.query:
                self.write(EMPTY_QUERY_MESSAGE)
                self._prompt(session)
                return
            session.state = State.SHOWING_RESULTS
            try:
                session.results = self.backend.search(
                    self.index_name, session.query, size=self.page_size
                )
            except SearchError as exc:
                logger.debug("Search for %r failed", session.query, exc_info=True)
                session.results = []
                self.write(SEARCH_FAILED_MESSAGE.format(error=exc))
                return
            self.render(session.results)
        elif session.state is State.SHOWING_RESULTS:
            self._prompt(session)
        elif session.state is State.VIEWING_DOCUMENT:
            if session.selection is not None:
                self.pager.show(session.results[session.selection].manpage_text)
            session.selection = None
            session.state = State.AWAITING_INPUT

    def render(self, results: List[SearchResult]) -> None:
        if not results:
            self.write(NO_MATCHES_MESSAGE)
            return
        for i, result in enumerate(results):
            self.write(format_result(i, result))

    def select(self, session: SessionState, number: int) -> SearchResult:
        if not 0 <= number < len(session.results):
            raise InvalidSelectionError(f"Invalid selection: {number}")
        return session.results[number]

    def _prompt(self, session: SessionState) -> None:
        try:
            line = self.read_input(PROMPT).strip()
        except EOFError:
            session.state = State.EXITED
            return
        if line == QUIT:
            session.state = State.EXITED
            return
        try:
            number = int(line)
        except ValueError:
            session.query = line
            session.results = []
            session.state = State.AWAITING_INPUT
            return
        try:
            self.select(session, number)
        except InvalidSelectionError as exc:
            logger.debug("%s", exc)
            if session.results:
                self.write(f"Invalid selection, choose 0 to {len(session.results) - 1}.")
            else:
                self.write("Invalid selection, there are no results.")
            return
        session.selection = number
        session.state = State.VIEWING_DOCUMENT
