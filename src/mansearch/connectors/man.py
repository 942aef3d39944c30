"""Documentation provider backed by the system `apropos` and `man` tools."""

from __future__ import annotations

import logging
import os
import re
import subprocess
from typing import Dict, Iterator, List, Optional, Tuple

from mansearch.connectors.base_connector import DocumentationProvider
from mansearch.exceptions import DocumentFetchError, ParseError

logger = logging.getLogger("mansearch.connectors")

CATALOG_LINE = re.compile(r"^(?P<command>\S+)\s+\((?P<section>[^)]+)\)\s+-\s+(?P<description>.*)$")
# Bold (X\bX) and underline (_\bX) overstrike pairs emitted by nroff
OVERSTRIKE = re.compile(r".\x08")


def parse_catalog_line(line: str) -> Tuple[str, str]:
    """Split an apropos line such as `ls (1) - list directory contents`."""
    m = CATALOG_LINE.match(line.rstrip("\n"))
    if not m:
        raise ParseError(f"Unrecognized catalog line: {line!r}")
    return m.group("command"), m.group("description").strip()


def strip_overstrike(text: str) -> str:
    return OVERSTRIKE.sub("", text)


class ManConnector(DocumentationProvider):
    def __init__(
        self,
        *,
        apropos_cmd: Optional[List[str]] = None,
        man_cmd: Optional[List[str]] = None,
        width: int = 80,
    ) -> None:
        self.apropos_cmd = apropos_cmd or ["apropos", "."]
        self.man_cmd = man_cmd or ["man"]
        self.width = width

    def _env(self) -> Dict[str, str]:
        env = dict(os.environ)
        env["MANPAGER"] = "cat"
        env["PAGER"] = "cat"
        env["MANWIDTH"] = str(self.width)
        return env

    def _run(self, args: List[str]) -> subprocess.CompletedProcess:
        return subprocess.run(
            args,
            capture_output=True,
            text=True,
            errors="replace",
            check=True,
            env=self._env(),
        )

    def list_commands(self) -> Iterator[Tuple[str, str]]:
        try:
            proc = self._run(self.apropos_cmd)
        except (OSError, subprocess.CalledProcessError) as exc:
            raise DocumentFetchError(f"Cannot list documented commands: {exc}") from exc
        for line in proc.stdout.splitlines():
            if not line.strip():
                continue
            try:
                yield parse_catalog_line(line)
            except ParseError as exc:
                logger.debug("%s", exc)

    def fetch_manpage(self, command: str) -> str:
        try:
            proc = self._run([*self.man_cmd, command])
        except subprocess.CalledProcessError as exc:
            raise DocumentFetchError(
                f"man {command} exited with status {exc.returncode}"
            ) from exc
        except OSError as exc:
            raise DocumentFetchError(f"Cannot run man for {command}: {exc}") from exc
        return strip_overstrike(proc.stdout)
