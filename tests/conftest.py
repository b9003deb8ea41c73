"""Shared test fixtures and ffmpeg stderr samples."""

import sys
from pathlib import Path

import pytest

from ffproc.config import Settings
from ffproc.process.controller import FFmpegProcess

FAKE_FFMPEG = Path(__file__).parent / "fixtures" / "fake_ffmpeg.py"

BANNER = (
    "ffmpeg version 6.1 Copyright (c) 2000-2023 the FFmpeg developers\n"
    "  built with gcc 13 (GCC)\n"
    "Input #0, mov,mp4,m4a,3gp,3g2,mj2, from 'smpte.mp4':\n"
)
DURATION_LINE = "  Duration: 00:00:30.00, start: 0.000000, bitrate: 39 kb/s\n"
PROGRESS_LINE = (
    "frame=  375 fps=124 q=29.0 size=     512kB time=00:00:15.00 "
    "bitrate= 279.6kbits/s speed=4.97x    \r"
)


@pytest.fixture
def settings():
    """Settings with a short termination grace period."""
    return Settings(term_timeout=0.5)


@pytest.fixture
def fake_ffmpeg(settings):
    """Factory for an FFmpegProcess that runs the fake ffmpeg script."""

    def _make(*script_args: str) -> FFmpegProcess:
        return FFmpegProcess(
            [str(FAKE_FFMPEG), *script_args],
            exec_path=sys.executable,
            settings=settings,
        )

    return _make
