class LabelctlError(Exception):
    """Base class for labelctl errors."""


class PrintSubsystemError(LabelctlError):
    """A print subsystem command could not be started."""

    def __init__(self, command, reason):
        self.command = command
        self.reason = reason
        super().__init__(f"Could not run {command!r}: {reason}")


class FileQueueError(LabelctlError):
    """The watched directory could not be read, or a file could not be renamed."""
