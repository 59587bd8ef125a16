"""Building and running the vos query."""

from volquota.core.config import Dialect, ProbeConfig
from volquota.core.context import Context
from volquota.core.errors import ConfigError, ContactError
from volquota.core.logging import ProbeLogger
from volquota.lib.process import run_command

# Searched in order. Nothing under /afs: the probe must not depend on
# the filesystem it is monitoring.
VOS_CANDIDATES = [
    "/usr/bin/vos",
    "/usr/sbin/vos",
    "/usr/local/bin/vos",
    "/usr/afsws/etc/vos",
    "/usr/lib/openafs/vos",
]

# Flags selecting each dialect's output encoding
DIALECT_FLAGS = {
    Dialect.PRIMARY: {"examine": [], "listvol": ["-long"]},
    Dialect.ALTERNATE: {"examine": ["-format"], "listvol": ["-format"]},
}


def resolve_dialect(requested: str | None, context: Context, marker_file: str | None) -> Dialect:
    """
    Decide which dialect to speak.

    Args:
        requested: Explicit token from options or config, or None
        context: Execution context
        marker_file: File whose presence means the alternate server

    Returns:
        The resolved dialect

    Raises:
        ConfigError: If requested is not a known dialect
    """
    if requested:
        try:
            return Dialect(requested.lower())
        except ValueError:
            choices = ", ".join(d.value for d in Dialect)
            raise ConfigError(f"unknown server type {requested!r} (expected {choices})") from None

    if marker_file and context.file_exists(marker_file):
        return Dialect.ALTERNATE
    return Dialect.PRIMARY


def resolve_vos(config: ProbeConfig, context: Context) -> str:
    """
    Find the vos binary, preferring absolute paths.

    Raises:
        ContactError: If no usable binary is found
    """
    if config.vos_path:
        if context.file_exists(config.vos_path):
            return config.vos_path
        raise ContactError(f"vos binary not found at {config.vos_path}")

    for candidate in VOS_CANDIDATES:
        if context.file_exists(candidate):
            return candidate

    found = context.which("vos")
    if found and not found.startswith("/afs/"):
        return found

    raise ContactError("vos binary not found")


def build_command(vos: str, config: ProbeConfig) -> list[str]:
    """Build the argument vector for the configured mode and dialect."""
    flags = DIALECT_FLAGS[config.dialect]

    if config.server_mode:
        cmd = [vos, "listvol", config.host]
        if config.partition:
            cmd.append(config.partition)
        cmd.extend(flags["listvol"])
    else:
        cmd = [vos, "examine", config.volume]
        cmd.extend(flags["examine"])

    cmd.append("-noauth")
    return cmd


def query(config: ProbeConfig, context: Context, logger: ProbeLogger | None = None) -> list[str]:
    """
    Run the vos query for config and return its output lines.

    Raises:
        ContactError: If vos is missing or cannot be started
        QueryTimeout: If vos runs past config.timeout
    """
    vos = resolve_vos(config, context)
    cmd = build_command(vos, config)
    if logger is not None:
        logger.debug("running query", command=cmd, timeout=config.timeout)

    lines = run_command(cmd, context=context, timeout=config.timeout, logger=logger)
    if logger is not None:
        logger.debug("query output", lines=len(lines))
    return lines
