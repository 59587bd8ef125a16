"""Exception hierarchy for the probe."""


class VolquotaError(Exception):
    """Base class for probe errors."""

    pass


class ConfigError(VolquotaError):
    """Invalid options or configuration file."""

    pass


class CommandError(VolquotaError):
    """Error running the volume-management command."""

    pass


class ContactError(CommandError):
    """The volume-management command could not be started."""

    pass


class QueryTimeout(CommandError):
    """The volume-management command ran past the timeout."""

    def __init__(self, timeout: int):
        super().__init__(f"timed out after {timeout} seconds")
        self.timeout = timeout


class VolumeNotFound(VolquotaError):
    """The requested volume was absent from the command output."""

    def __init__(self, name: str):
        super().__init__(f"volume {name} not found")
        self.name = name
