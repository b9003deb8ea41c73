"""Data models for ffproc."""

from ffproc.models.errors import ChannelError, FFprocError, SignalError, SpawnError
from ffproc.models.events import ProcessEvent
from ffproc.models.progress import ProgressSnapshot
from ffproc.models.result import SENTINEL_CODE, Err, Ok, RunFailure, RunResult

__all__ = [
    "SENTINEL_CODE",
    "ChannelError",
    "Err",
    "FFprocError",
    "Ok",
    "ProcessEvent",
    "ProgressSnapshot",
    "RunFailure",
    "RunResult",
    "SignalError",
    "SpawnError",
]
