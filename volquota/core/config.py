"""Configuration loading with layered overrides."""

import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from volquota.core.errors import ConfigError


class Dialect(str, Enum):
    """Output conventions of the two server implementations."""

    PRIMARY = "primary"
    ALTERNATE = "alternate"


PROJECT_CONFIG = Path(".volquota.yaml")

# Built-in values, lowest precedence
DEFAULTS: dict[str, Any] = {
    "warning": 85,
    "critical": 90,
    "timeout": 300,
    "server_type": None,
    "vos_path": None,
    "marker_file": "/etc/yfs/yfs-client.conf",
    "human_readable": False,
    "log_dir": None,
}


def user_config_path() -> Path:
    """Path of the per-user config file."""
    return Path.home() / ".config" / "volquota" / "config.yaml"


def load_config_file(path: Path) -> dict[str, Any]:
    """
    Load a YAML config file if it exists.

    Args:
        path: File to read

    Returns:
        Mapping from the file, empty if the file is missing or empty

    Raises:
        ConfigError: If the file cannot be read or is not a YAML mapping
    """
    if not path.exists():
        return {}
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"cannot read config {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"config {path} must contain a mapping")
    return data


def load_settings(path: Path | None = None) -> dict[str, Any]:
    """
    Merge defaults with user then project (or explicit) config files.

    Unknown keys are ignored.

    Args:
        path: Explicit config file; replaces the project-level file

    Returns:
        Settings dict with every key of DEFAULTS present
    """
    if path is not None and not path.exists():
        raise ConfigError(f"config file not found: {path}")

    settings = dict(DEFAULTS)
    for layer in (user_config_path(), path or PROJECT_CONFIG):
        data = load_config_file(layer)
        settings.update({k: v for k, v in data.items() if k in DEFAULTS})
    return settings


def as_int(value: Any, name: str) -> int:
    """Coerce a setting to int, rejecting booleans and junk."""
    if isinstance(value, bool):
        raise ConfigError(f"{name} must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{name} must be an integer, got {value!r}") from None


@dataclass(frozen=True)
class ProbeConfig:
    """Everything one probe run needs, fixed at startup."""

    dialect: Dialect
    volume: str | None = None
    host: str | None = None
    partition: str | None = None
    pattern: str | None = None
    warning: int = 85
    critical: int = 90
    timeout: int = 300
    vos_path: str | None = None
    human_readable: bool = False
    debug: bool = False
    log_dir: Path | None = None

    @property
    def server_mode(self) -> bool:
        """True when listing a whole server rather than one volume."""
        return self.host is not None

    def validate(self) -> None:
        """
        Check option combinations and thresholds.

        Raises:
            ConfigError: On the first problem found
        """
        if self.partition is not None and self.host is None:
            raise ConfigError("--partition requires --hostname")
        if self.pattern is not None and self.host is None:
            raise ConfigError("--regex requires --hostname")
        if self.host is None and self.volume is None:
            raise ConfigError("one of --hostname or --volume is required")
        if self.host is not None and self.volume is not None:
            raise ConfigError("--hostname and --volume are mutually exclusive")

        for name in ("warning", "critical"):
            value = getattr(self, name)
            if not 0 <= value <= 100:
                raise ConfigError(f"{name} threshold must be between 0 and 100")
        if self.warning > self.critical:
            raise ConfigError("warning threshold must not exceed critical threshold")
        if self.timeout <= 0:
            raise ConfigError("timeout must be a positive number of seconds")

        if self.pattern is not None:
            try:
                re.compile(self.pattern)
            except re.error as e:
                raise ConfigError(f"invalid --regex {self.pattern!r}: {e}") from e
