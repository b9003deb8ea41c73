"""Event names published by a process controller."""

from enum import StrEnum


class ProcessEvent(StrEnum):
    """Notifications a controller fires while a run is active."""

    STDOUT = "stdout"
    STDERR = "stderr"
    PROGRESS = "progress"
