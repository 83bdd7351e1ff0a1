"""Application configuration via pydantic-settings.

Configuration is loaded from environment variables and/or ``.env``
files.  Nested models use ``__`` as the delimiter in env var names,
e.g. ``FACE__DIAL=assets/dial.png``.

The schema covers three concerns:

* **Logging** — level, format, optional file sink, rotation.
* **Face** — image paths and output surface size.
* **Chronometer** — tick interval and frame output.

All durations are in **seconds**.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# -------------------------------------------------------------------
# Sub-models (BaseModel, NOT BaseSettings — nested via composition)
# -------------------------------------------------------------------


class LoggingSettings(BaseModel):
    """Logging configuration.

    When ``file`` is set, logs are also written to a rotating file
    (size-based rotation, ``backup_count`` generations kept).  When
    ``None``, logs go to stderr only.

    The ``format`` field selects the output format:

    - ``"json"`` (default) — structured JSON lines, one object per
      record.
    - ``"text"`` — human-readable timestamped format for terminals.
    """

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Root log level.",
    )
    format: Literal["json", "text"] = Field(
        default="json",
        description=(
            "Log output format. "
            "'json' emits structured JSON lines; "
            "'text' emits human-readable timestamped lines."
        ),
    )
    file: str | None = Field(
        default=None,
        description="Optional log file path. ``None`` means stderr only.",
    )
    max_file_size_mb: Annotated[int, Field(ge=1)] = Field(
        default=10,
        description=(
            "Maximum log file size in megabytes before rotation. "
            "Only applies when ``file`` is set."
        ),
    )
    backup_count: Annotated[int, Field(ge=0)] = Field(
        default=3,
        description="Number of rotated log files to keep.",
    )


class FaceSettings(BaseModel):
    """Clock face images and output size.

    Environment variables (with ``__`` nesting)::

        FACE__DIAL=assets/dial.png
        FACE__BIG_HAND=assets/big_needle.png
        FACE__SMALL_HAND=assets/small_needle.png
        FACE__WIDTH=160
        FACE__HEIGHT=160

    Unset image paths fall back to the built-in drawn images.
    """

    dial: str | None = Field(
        default=None,
        description="Dial image path. ``None`` uses the default dial.",
    )
    big_hand: str | None = Field(
        default=None,
        description="Big hand image path, drawn pointing up from its pivot.",
    )
    small_hand: str | None = Field(
        default=None,
        description="Small hand image path, drawn pointing up from its pivot.",
    )
    width: Annotated[int, Field(ge=1)] = Field(
        default=200,
        description="Output surface width in pixels.",
    )
    height: Annotated[int, Field(ge=1)] = Field(
        default=200,
        description="Output surface height in pixels.",
    )


class ChronometerSettings(BaseModel):
    """Chronometer tick and frame output configuration."""

    tick_interval: Annotated[float, Field(gt=0)] = Field(
        default=1.0,
        description="Seconds between ticks while running.",
    )
    output_dir: str = Field(
        default="frames",
        description="Directory receiving one PNG frame per tick.",
    )
    max_frames: Annotated[int, Field(ge=1)] | None = Field(
        default=None,
        description="Stop after this many frames. ``None`` runs until interrupted.",
    )


# -------------------------------------------------------------------
# Root settings
# -------------------------------------------------------------------


class Settings(BaseSettings):
    """Root settings for chronoface.

    Loaded from environment variables with the nested delimiter
    ``__`` and an optional ``.env`` file in the working directory.

    Example ``.env``::

        LOGGING__LEVEL=DEBUG
        LOGGING__FORMAT=text
        FACE__WIDTH=120
        CHRONOMETER__OUTPUT_DIR=/tmp/frames
    """

    model_config = SettingsConfigDict(
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
    """``extra="ignore"`` because no ``env_prefix`` is set: every
    environment variable is read, and unrelated ones (``PATH`` etc.)
    must not fail validation.
    """

    logging: LoggingSettings = Field(
        default_factory=LoggingSettings,
        description="Logging configuration.",
    )
    face: FaceSettings = Field(
        default_factory=FaceSettings,
        description="Clock face images and size.",
    )
    chronometer: ChronometerSettings = Field(
        default_factory=ChronometerSettings,
        description="Chronometer tick and frame output.",
    )
