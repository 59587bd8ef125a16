"""Process utilities for the probe."""

import subprocess
from typing import TYPE_CHECKING

from volquota.core.errors import ContactError, QueryTimeout

if TYPE_CHECKING:
    from volquota.core.context import Context
    from volquota.core.logging import ProbeLogger


def run_command(
    cmd: list[str],
    context: "Context | None" = None,
    timeout: int = 300,
    logger: "ProbeLogger | None" = None,
) -> list[str]:
    """
    Run a command and return its output lines.

    The exit status is not interpreted; whatever the command printed is
    handed back for parsing.

    Args:
        cmd: Command and arguments
        context: Execution context (for testing)
        timeout: Wall-clock limit for the whole call, in seconds
        logger: Receives a debug trace of the call

    Returns:
        Command stdout split into lines

    Raises:
        ContactError: If the command cannot be started
        QueryTimeout: If the command does not finish within timeout
    """
    if context is None:
        from volquota.core.context import Context
        context = Context()

    try:
        result = context.run(cmd, timeout=timeout)
    except subprocess.TimeoutExpired as e:
        raise QueryTimeout(timeout) from e
    except OSError as e:
        raise ContactError(f"cannot run {cmd[0]}: {e.strerror or e}") from e

    if logger is not None:
        logger.debug(
            "command finished",
            command=cmd,
            returncode=result.returncode,
            stderr=(result.stderr or "").strip(),
        )

    return (result.stdout or "").splitlines()
