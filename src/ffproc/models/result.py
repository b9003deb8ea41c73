"""Two-variant run outcome returned by ``FFmpegProcess.start``.

``start`` never raises for spawn, exit or channel failures. It returns one of::

    Ok()                                   # exit status 0
    Err(error=RunFailure(code, message))   # anything else

Both variants refuse truthiness tests so that ``if result:`` cannot be used
by accident. Branch with ``is_ok()``/``is_err()`` or ``match``::

    match await proc.start():
        case Ok():
            ...
        case Err(error=failure):
            print(failure.code, failure.message)
"""

from typing import Annotated, Literal

from pydantic import BaseModel, Field

from ffproc.models.errors import FFprocError

SENTINEL_CODE = -1


class RunFailure(BaseModel):
    """Failure payload: exit status (or sentinel) plus a message."""

    code: int = Field(..., description="Exit status, or SENTINEL_CODE when none exists")
    message: str = Field(default="", description="Trailing stderr text or error message")
    signal: str | None = Field(default=None, description="Signal name when killed by signal")

    @classmethod
    def from_exception(cls, exc: BaseException) -> "RunFailure":
        message = exc.message if isinstance(exc, FFprocError) else str(exc)
        return cls(code=SENTINEL_CODE, message=message)


class _Outcome(BaseModel):
    def __bool__(self) -> bool:
        raise TypeError(
            f"{type(self).__name__} has no truth value; use is_ok()/is_err() or match"
        )

    def is_ok(self) -> bool:
        return self.kind == "ok"

    def is_err(self) -> bool:
        return self.kind == "err"


class Ok(_Outcome):
    """Process exited with status 0."""

    kind: Literal["ok"] = "ok"

    def unwrap_err(self) -> RunFailure:
        raise ValueError("called unwrap_err() on an Ok result")


class Err(_Outcome):
    """Process failed to start, exited non-zero, or its channels failed."""

    kind: Literal["err"] = "err"
    error: RunFailure

    def unwrap_err(self) -> RunFailure:
        return self.error

    @classmethod
    def failure(cls, code: int, message: str, signal: str | None = None) -> "Err":
        return cls(error=RunFailure(code=code, message=message, signal=signal))


RunResult = Annotated[Ok | Err, Field(discriminator="kind")]
