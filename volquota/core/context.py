"""Execution context for testability."""

import shutil
import subprocess
from pathlib import Path


class Context:
    """
    Wraps external calls for testability.

    In production: executes real commands
    In tests: can be replaced with MockContext
    """

    def run(
        self,
        cmd: list[str],
        check: bool = False,
        timeout: int | None = 300,
        **kwargs,
    ) -> subprocess.CompletedProcess:
        """
        Run a command and return result.

        Args:
            cmd: Command and arguments as list
            check: Raise on non-zero exit code
            timeout: Wall-clock limit for the whole call, in seconds
            **kwargs: Additional subprocess.run arguments

        Returns:
            CompletedProcess with stdout, stderr, returncode

        Raises:
            OSError: If the command cannot be started
            subprocess.TimeoutExpired: If the command outlives timeout
        """
        return subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=check,
            timeout=timeout,
            stdin=subprocess.DEVNULL,
            **kwargs,
        )

    def file_exists(self, path: str) -> bool:
        """Check if file exists."""
        return Path(path).exists()

    def which(self, name: str) -> str | None:
        """Resolve a tool name to its absolute path."""
        return shutil.which(name)
