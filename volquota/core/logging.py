"""JSONL logging for probe runs."""

import json
import os
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, TextIO


# Log level ordering
LOG_LEVELS = {"debug": 0, "info": 1, "warning": 2, "error": 3}

PROBE_NAME = "check_volquota"


def get_log_path(probe_name: str = PROBE_NAME, base_path: Path | None = None) -> Path:
    """
    Get the log file path for a probe.

    Args:
        probe_name: Name of the probe
        base_path: Base directory for logs (default: ~/var/log/volquota)

    Returns:
        Path to the log file: {base}/{date}/{probe}.jsonl
    """
    if base_path is None:
        home = Path(os.environ.get("HOME", "/tmp"))
        base_path = home / "var" / "log" / "volquota"

    today = date.today().isoformat()
    return base_path / today / f"{probe_name}.jsonl"


class ProbeLogger:
    """
    JSONL logger for a probe run.

    Entries go to an optional file and an optional stream. With neither
    configured the logger discards everything.
    """

    def __init__(
        self,
        probe_name: str = PROBE_NAME,
        log_path: Path | None = None,
        stream: TextIO | None = None,
        min_level: str = "info",
    ):
        """
        Initialize logger.

        Args:
            probe_name: Name recorded in every entry
            log_path: JSONL file to append to
            stream: Text stream to echo entries to (e.g. stderr)
            min_level: Lowest level that is written
        """
        self.probe_name = probe_name
        self.log_path = log_path
        self.stream = stream
        self.min_level = LOG_LEVELS.get(min_level, 1)
        self._file = None

    def _ensure_file(self) -> None:
        """Ensure log file is open. An unwritable path disables the file sink."""
        if self._file is None and self.log_path is not None:
            try:
                self.log_path.parent.mkdir(parents=True, exist_ok=True)
                self._file = open(self.log_path, "a")
            except OSError as e:
                failed, self.log_path = self.log_path, None
                if self.stream is not None:
                    notice = {"level": "warning", "probe": self.probe_name, "message": f"log file disabled: {failed}: {e}"}
                    self.stream.write(json.dumps(notice) + "\n")

    def _log(self, level: str, message: str, **extra: Any) -> None:
        """Write a log entry."""
        if LOG_LEVELS[level] < self.min_level:
            return
        if self.log_path is None and self.stream is None:
            return

        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": level,
            "probe": self.probe_name,
            "message": message,
            **extra,
        }
        line = json.dumps(entry, default=str) + "\n"

        self._ensure_file()
        if self._file is not None:
            self._file.write(line)
            self._file.flush()
        if self.stream is not None:
            self.stream.write(line)
            self.stream.flush()

    def debug(self, message: str, **extra: Any) -> None:
        """Log debug message."""
        self._log("debug", message, **extra)

    def info(self, message: str, **extra: Any) -> None:
        """Log info message."""
        self._log("info", message, **extra)

    def warning(self, message: str, **extra: Any) -> None:
        """Log warning message."""
        self._log("warning", message, **extra)

    def error(self, message: str, **extra: Any) -> None:
        """Log error message."""
        self._log("error", message, **extra)

    def close(self) -> None:
        """Close the log file."""
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> "ProbeLogger":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()
