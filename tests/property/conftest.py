"""Hypothesis strategies for ffmpeg diagnostic text."""

from hypothesis import strategies as st


def format_timestamp(seconds: float) -> str:
    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    secs = seconds - hours * 3600 - minutes * 60
    return f"{hours:02d}:{minutes:02d}:{secs:05.2f}"


@st.composite
def generate_status_line(draw, max_seconds: float = 7200.0):
    """Generate an ffmpeg status line with plausible values."""
    frame = draw(st.integers(min_value=0, max_value=10**7))
    fps = draw(st.floats(min_value=0.0, max_value=1000.0, allow_nan=False))
    q = draw(st.floats(min_value=0.0, max_value=69.0, allow_nan=False))
    size = draw(st.integers(min_value=0, max_value=10**8))
    elapsed = draw(st.floats(min_value=0.0, max_value=max_seconds, allow_nan=False))
    bitrate = draw(st.floats(min_value=0.0, max_value=100000.0, allow_nan=False))
    speed = draw(st.floats(min_value=0.0, max_value=500.0, allow_nan=False))
    return (
        f"frame={frame:>6} fps={fps:.1f} q={q:.1f} size={size:>9}kB "
        f"time={format_timestamp(elapsed)} bitrate={bitrate:.1f}kbits/s speed={speed:.2f}x    \r"
    )


@st.composite
def generate_stderr_stream(draw):
    """Generate a banner, a duration line, and status lines within the duration."""
    duration = draw(st.floats(min_value=0.5, max_value=7200.0, allow_nan=False))
    header = f"Input #0, matroska,webm, from 'in.mkv':\n  Duration: {format_timestamp(duration)}, start: 0.000000\n"
    lines = draw(st.lists(generate_status_line(max_seconds=duration), min_size=1, max_size=20))
    return header + "".join(lines)


@st.composite
def split_into_chunks(draw, text: str):
    """Split ``text`` at arbitrary positions, as a pipe reader might."""
    cuts = sorted(draw(st.sets(st.integers(min_value=1, max_value=max(len(text) - 1, 1)), max_size=30)))
    bounds = [0, *[c for c in cuts if c < len(text)], len(text)]
    return [text[a:b] for a, b in zip(bounds, bounds[1:]) if a < b]
