"""Library configuration using Pydantic BaseSettings."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from ffproc.models.errors import SignalError
from ffproc.process.spawner import resolve_signal


class Settings(BaseSettings):
    """ffproc configuration loaded from environment variables."""

    model_config = {"env_prefix": "FFPROC_", "env_file": ".env", "extra": "ignore"}

    # Executable
    ffmpeg_path: str = "ffmpeg"

    # Output channels
    encoding: str = "utf-8"
    read_chunk_size: int = Field(default=4096, gt=0)
    max_stderr_length: int = Field(default=32_000, gt=0)

    # Termination
    stop_signal: str = "SIGTERM"
    term_timeout: float = Field(default=2.0, ge=0)

    @field_validator("stop_signal")
    @classmethod
    def validate_stop_signal(cls, v: str) -> str:
        """Normalise to the canonical name, e.g. ``term`` -> ``SIGTERM``."""
        try:
            return resolve_signal(v).name
        except SignalError as e:
            raise ValueError(e.message) from e


def get_settings() -> Settings:
    """Return a settings instance built from the current environment."""
    return Settings()
