"""FFmpeg process controller: lifecycle, termination and progress relay."""

import asyncio
import logging
import signal
from collections.abc import Sequence

from ffproc.config import Settings, get_settings
from ffproc.models.errors import ChannelError, SpawnError
from ffproc.models.events import ProcessEvent
from ffproc.models.progress import ProgressSnapshot
from ffproc.models.result import SENTINEL_CODE, Err, Ok, RunFailure, RunResult
from ffproc.monitor.buffer import TrailingBuffer
from ffproc.monitor.progress import ProgressExtractor
from ffproc.process.events import EventEmitter
from ffproc.process.spawner import (
    decode_chunks,
    resolve_signal,
    signal_name,
    spawn_process,
    terminate_process,
)

logger = logging.getLogger(__name__)


class FFmpegProcess(EventEmitter):
    """Runs one ffmpeg process at a time and publishes its progress.

    Listeners can be registered for ``stdout`` and ``stderr`` (raw text
    chunks, in arrival order) and ``progress`` (a ProgressSnapshot copy,
    fired after the stderr chunk that produced it)::

        proc = FFmpegProcess(["-i", "in.mp4", "out.webm", "-y"])
        proc.on("progress", lambda p: print(p.percent))
        result = await proc.start()
        if result.is_err():
            print(result.unwrap_err().message)
    """

    def __init__(
        self,
        args: Sequence[str],
        *,
        exec_path: str | None = None,
        settings: Settings | None = None,
    ):
        super().__init__()
        self.settings = settings or get_settings()
        self.args = list(args)
        self.exec_path = exec_path or self.settings.ffmpeg_path
        self._process: asyncio.subprocess.Process | None = None
        self._spawning = False
        self._killed = False
        self._stderr_tail = TrailingBuffer(self.settings.max_stderr_length)
        self._extractor = ProgressExtractor()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(exec_path={self.exec_path!r}, "
            f"processing={self.processing}, killed={self.killed})"
        )

    @property
    def processing(self) -> bool:
        return self._process is not None

    @property
    def killed(self) -> bool:
        return self._killed

    @property
    def progress(self) -> ProgressSnapshot:
        return self._extractor.snapshot.copy_snapshot()

    @property
    def pid(self) -> int | None:
        return self._process.pid if self._process is not None else None

    async def start(self) -> RunResult:
        """Run ffmpeg to completion.

        Never raises for spawn, exit or channel failures; they come back as
        Err. The process handle is cleared before this returns, so
        ``processing`` is already False when the caller resumes.
        """
        if self.processing or self._spawning:
            return Err.failure(SENTINEL_CODE, "ffmpeg process already started")

        self._stderr_tail.clear()
        self._extractor.reset()

        self._spawning = True
        try:
            process = await spawn_process(self.exec_path, self.args)
        except SpawnError as e:
            logger.error("Could not start %s: %s", self.exec_path, e.message)
            return Err(error=RunFailure.from_exception(e))
        finally:
            self._spawning = False

        self._process = process
        logger.info("Started %s pid=%s", self.exec_path, process.pid)
        try:
            return await self._supervise(process)
        finally:
            self._process = None

    def stop(self, sig: signal.Signals | int | str | None = None) -> bool:
        """Ask the running process to terminate.

        Returns True only when a live process existed, it had not been
        stopped already, and the OS accepted the signal. Does not wait for
        the process to exit; the pending ``start()`` resolves once it does.
        """
        process = self._process
        if process is None or self._killed:
            return False
        resolved = resolve_signal(sig if sig is not None else self.settings.stop_signal)
        if process.returncode is not None:
            return False
        try:
            process.send_signal(resolved)
        except OSError as e:
            logger.warning("Failed to send %s to pid=%s: %s", resolved.name, process.pid, e)
            return False
        self._killed = True
        logger.debug("Sent %s to pid=%s", resolved.name, process.pid)
        return True

    def rearm(self) -> bool:
        """Clear the killed flag so a later run on this instance can be stopped."""
        if self.processing or not self._killed:
            return False
        self._killed = False
        return True

    async def _supervise(self, process: asyncio.subprocess.Process) -> RunResult:
        readers = [
            asyncio.create_task(self._pump_stdout(process.stdout)),
            asyncio.create_task(self._pump_stderr(process.stderr)),
        ]
        try:
            await asyncio.gather(*readers)
            returncode = await process.wait()
        except asyncio.CancelledError:
            logger.info("Run cancelled, terminating pid=%s", process.pid)
            await asyncio.shield(self._abort(process, readers))
            raise
        except Exception as e:
            logger.error("Output channel failed for pid=%s: %s", process.pid, e)
            await self._abort(process, readers)
            error = ChannelError(str(e), details={"pid": process.pid})
            return Err(error=RunFailure.from_exception(error))

        if returncode == 0:
            logger.info("%s pid=%s finished", self.exec_path, process.pid)
            return Ok()

        killed_by = signal_name(returncode)
        code = SENTINEL_CODE if killed_by else returncode
        logger.warning(
            "%s pid=%s exited with code %s (signal=%s)",
            self.exec_path,
            process.pid,
            returncode,
            killed_by,
        )
        return Err.failure(code, self._stderr_tail.getvalue(), signal=killed_by)

    async def _abort(self, process: asyncio.subprocess.Process, readers: list[asyncio.Task]) -> None:
        for task in readers:
            task.cancel()
        await asyncio.gather(*readers, return_exceptions=True)
        await terminate_process(process, self.settings.term_timeout)

    async def _pump_stdout(self, stream: asyncio.StreamReader) -> None:
        async for text in decode_chunks(stream, self.settings.encoding, self.settings.read_chunk_size):
            self._emit(ProcessEvent.STDOUT, text)

    async def _pump_stderr(self, stream: asyncio.StreamReader) -> None:
        async for text in decode_chunks(stream, self.settings.encoding, self.settings.read_chunk_size):
            self.handle_stderr(text)

    def handle_stderr(self, text: str) -> None:
        """Relay, retain and parse one stderr chunk."""
        self._emit(ProcessEvent.STDERR, text)
        self._stderr_tail.write(text)
        if self._extractor.feed(text):
            self._emit(ProcessEvent.PROGRESS, self.progress)
