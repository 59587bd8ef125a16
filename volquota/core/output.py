"""Status line output for the monitoring supervisor."""

import sys
from enum import IntEnum
from typing import TextIO


class Verdict(IntEnum):
    """Probe outcome. The value doubles as the process exit code."""

    OK = 0
    WARNING = 1
    CRITICAL = 2
    UNKNOWN = 3


class Output:
    """Holds the verdict and message, and prints them exactly once."""

    def __init__(self):
        self.verdict: Verdict = Verdict.UNKNOWN
        self.message: str = "no result"
        self._printed: bool = False

    def set_result(self, verdict: Verdict, message: str) -> None:
        """Record the final verdict and message."""
        self.verdict = verdict
        self.message = message

    @property
    def summary(self) -> str:
        """The status line, e.g. 'WARNING user.jdoe 87% used'."""
        message = " ".join(self.message.split())
        return f"{self.verdict.name} {message}"

    @property
    def exit_code(self) -> int:
        """Exit code for the recorded verdict."""
        return int(self.verdict)

    def render(self, stream: TextIO | None = None) -> None:
        """Print the status line.

        Args:
            stream: Where to print (default: stdout)
        """
        if self._printed:
            return
        self._printed = True
        print(self.summary, file=stream or sys.stdout)
