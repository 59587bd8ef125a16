"""Core probe functionality."""

from volquota.core.config import Dialect, ProbeConfig, load_settings
from volquota.core.context import Context
from volquota.core.errors import (
    CommandError,
    ConfigError,
    ContactError,
    QueryTimeout,
    VolquotaError,
    VolumeNotFound,
)
from volquota.core.logging import ProbeLogger
from volquota.core.output import Output, Verdict

__all__ = [
    "CommandError",
    "ConfigError",
    "ContactError",
    "Context",
    "Dialect",
    "Output",
    "ProbeConfig",
    "ProbeLogger",
    "QueryTimeout",
    "Verdict",
    "VolquotaError",
    "VolumeNotFound",
    "load_settings",
]
