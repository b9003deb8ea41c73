"""FFmpeg progress extraction from stderr chunks."""

import re

from ffproc.models.progress import ProgressSnapshot

DURATION_RE = re.compile(r"Duration: (\d+):(\d+):(\d+(?:\.\d+)?)")
FRAME_RE = re.compile(r"frame=\s*(\d+)\s*fps=")
FPS_RE = re.compile(r"fps=\s*([\d.]+)\s*q=")
QUALITY_RE = re.compile(r"q=\s*([\d.]+)")
SIZE_RE = re.compile(r"size=\s*([\d.]+)kB")
TIME_RE = re.compile(r"time=(\d+):(\d+):(\d+(?:\.\d+)?)")
BITRATE_RE = re.compile(r"bitrate=\s*([\d.]+)kbits?/s")
SPEED_RE = re.compile(r"speed=\s*([\d.]+)x")
LINE_SPLIT_RE = re.compile(r"[\r\n]")
STATUS_MARKERS = ("frame=", "size=", "time=", "speed=")


def _to_float(text: str) -> float | None:
    try:
        return float(text)
    except ValueError:
        return None


def _to_int(text: str) -> int | None:
    try:
        return int(text)
    except ValueError:
        return None


def _status_line(chunk: str) -> str:
    """The newest status line in ``chunk``, or the whole chunk if none is marked.

    All fields are read from this one line so that values taken from
    different lines (or different output streams) are never mixed.
    """
    for segment in reversed(LINE_SPLIT_RE.split(chunk)):
        if any(marker in segment for marker in STATUS_MARKERS):
            return segment
    return chunk


def parse_timestamp(match: re.Match) -> float | None:
    """Convert an ``H:M:S(.f)`` match to seconds, or None if malformed."""
    hours = _to_int(match.group(1))
    minutes = _to_int(match.group(2))
    seconds = _to_float(match.group(3))
    if hours is None or minutes is None or seconds is None:
        return None
    return hours * 3600 + minutes * 60 + seconds


class ProgressExtractor:
    """Incrementally update a progress snapshot from raw ffmpeg stderr.

    Chunks need not be line-aligned. Each field is matched independently and
    keeps its previous value when a chunk does not mention it. Nothing besides
    the total duration is extracted until the duration line has been seen.
    """

    def __init__(self):
        self.snapshot = ProgressSnapshot.empty()

    def reset(self) -> None:
        self.snapshot = ProgressSnapshot.empty()

    @property
    def duration_known(self) -> bool:
        return self.snapshot.duration is not None

    def feed(self, chunk: str) -> bool:
        """Parse one stderr chunk.

        Returns True when a progress notification should be published, which
        is the case for every chunk once the duration is known.
        """
        snap = self.snapshot

        if snap.duration is None:
            match = DURATION_RE.search(chunk)
            if match:
                snap.duration = parse_timestamp(match)

        if snap.duration is None:
            return False

        line = _status_line(chunk)

        match = FRAME_RE.search(line)
        if match:
            frame = _to_int(match.group(1))
            if frame is not None:
                snap.frame = frame

        self._update_float(line, FPS_RE, "fps")
        self._update_float(line, QUALITY_RE, "quality")
        self._update_float(line, SIZE_RE, "size_kb")

        match = TIME_RE.search(line)
        if match:
            elapsed = parse_timestamp(match)
            if elapsed is not None:
                snap.time_in_seconds = elapsed
                if snap.duration > 0:
                    snap.percent = elapsed / snap.duration * 100

        self._update_float(line, BITRATE_RE, "bitrate_kbps")
        self._update_float(line, SPEED_RE, "speed")

        return True

    def _update_float(self, line: str, pattern: re.Pattern, field: str) -> None:
        match = pattern.search(line)
        if match:
            value = _to_float(match.group(1))
            if value is not None:
                setattr(self.snapshot, field, value)
