"""Asyncio subprocess plumbing: spawning, chunked decoding, termination.

Key design points:
- stdin is /dev/null so ffmpeg never waits on an interactive prompt
- stdout/stderr are read in fixed-size byte chunks, not lines, because ffmpeg
  terminates progress lines with carriage returns
- decoding is incremental so a multibyte character split across two reads is
  not mangled
"""

import asyncio
import codecs
import logging
import signal
from collections.abc import AsyncIterator, Sequence

from ffproc.models.errors import SignalError, SpawnError

logger = logging.getLogger(__name__)


async def spawn_process(exec_path: str, args: Sequence[str]) -> asyncio.subprocess.Process:
    """Start ``exec_path`` with ``args`` and piped output channels.

    Raises:
        SpawnError: If the executable is missing, not executable, or the OS
            refuses to start it.
    """
    try:
        return await asyncio.create_subprocess_exec(
            exec_path,
            *args,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        raise SpawnError(
            str(e),
            details={"exec_path": exec_path, "errno": e.errno},
        ) from e


async def decode_chunks(
    stream: asyncio.StreamReader, encoding: str, chunk_size: int
) -> AsyncIterator[str]:
    """Yield decoded text chunks from ``stream`` until EOF."""
    decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
    while True:
        data = await stream.read(chunk_size)
        if not data:
            break
        text = decoder.decode(data)
        if text:
            yield text
    tail = decoder.decode(b"", final=True)
    if tail:
        yield tail


def resolve_signal(sig: signal.Signals | int | str) -> signal.Signals:
    """Normalise ``SIGTERM``, ``"TERM"``, ``15`` or ``signal.SIGTERM``."""
    if isinstance(sig, signal.Signals):
        return sig
    try:
        if isinstance(sig, str):
            name = sig.upper()
            if not name.startswith("SIG"):
                name = "SIG" + name
            return signal.Signals[name]
        return signal.Signals(sig)
    except (KeyError, ValueError) as e:
        raise SignalError(f"Unknown signal: {sig!r}", details={"signal": sig}) from e


def signal_name(returncode: int | None) -> str | None:
    """Name of the signal that ended a process, from asyncio's negative returncode."""
    if returncode is None or returncode >= 0:
        return None
    try:
        return signal.Signals(-returncode).name
    except ValueError:
        return None


async def terminate_process(process: asyncio.subprocess.Process, term_timeout: float) -> None:
    """SIGTERM, wait up to ``term_timeout``, then SIGKILL."""
    if process.returncode is not None:
        return
    pid = process.pid
    try:
        process.terminate()
        try:
            await asyncio.wait_for(process.wait(), timeout=term_timeout)
            logger.debug("Process terminated gracefully pid=%s", pid)
            return
        except asyncio.TimeoutError:
            pass
        logger.debug("Force killing process pid=%s", pid)
        process.kill()
        await process.wait()
    except ProcessLookupError:
        logger.debug("Process already exited pid=%s", pid)
