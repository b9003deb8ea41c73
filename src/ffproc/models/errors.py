"""Error hierarchy for process control."""


class FFprocError(Exception):
    """Base error for all ffproc errors."""

    def __init__(self, message: str, component: str = "", details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.component = component
        self.details = details or {}


class SpawnError(FFprocError):
    """The executable could not be started (missing, not executable, denied)."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message, component="spawn", details=details)


class ChannelError(FFprocError):
    """An output channel failed while the process was running."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message, component="channel", details=details)


class SignalError(FFprocError):
    """A termination signal name or number could not be resolved."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message, component="signal", details=details)
