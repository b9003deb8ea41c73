"""Progress snapshot model."""

from pydantic import BaseModel, Field


class ProgressSnapshot(BaseModel):
    """Most recent progress values parsed from ffmpeg diagnostics.

    Every field is ``None`` until the matching value has been seen at least
    once in the current run. ``percent`` is only set once ``duration`` is known
    and positive.
    """

    duration: float | None = Field(default=None, description="Total input duration in seconds")
    percent: float | None = Field(default=None, description="time_in_seconds / duration * 100")
    frame: int | None = Field(default=None, description="Frames encoded so far")
    fps: float | None = Field(default=None, description="Instantaneous encode fps")
    quality: float | None = Field(default=None, description="Encoder quality metric (q=)")
    size_kb: float | None = Field(default=None, description="Output size in kilobytes")
    time_in_seconds: float | None = Field(default=None, description="Elapsed output time")
    bitrate_kbps: float | None = Field(default=None, description="Instantaneous bitrate")
    speed: float | None = Field(default=None, description="Encode speed multiplier")

    @classmethod
    def empty(cls) -> "ProgressSnapshot":
        return cls()

    def copy_snapshot(self) -> "ProgressSnapshot":
        """Independent value copy, safe to hand to callers."""
        return self.model_copy()

    @property
    def is_empty(self) -> bool:
        return all(value is None for value in self.model_dump().values())
