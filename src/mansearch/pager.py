"""Pager abstraction used to display a full manual page."""

from __future__ import annotations

import shlex
import subprocess
from abc import ABC, abstractmethod


class Pager(ABC):
    @abstractmethod
    def show(self, text: str) -> None:
        """Display `text` and return once the user closes the pager."""


class SubprocessPager(Pager):
    """Pipes text into an external pager program such as `less`."""

    def __init__(self, command: str = "less") -> None:
        self.command = command

    def show(self, text: str) -> None:
        args = shlex.split(self.command) or ["less"]
        try:
            subprocess.run(args, input=text, text=True, check=False)
        except OSError:
            # No pager available; dump to the terminal instead
            print(text)
