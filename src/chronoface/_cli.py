"""Command-line interface (Typer-based).

Provides :func:`build_cli`, which constructs a Typer app with global
options (``--version``, ``--log-level``, ``--log-format``,
``--env-file``) and two commands:

- ``render`` — write a single face showing an hour/minute/second
- ``run`` — run the chronometer, writing one frame per tick
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Annotated, get_args

import typer
from pydantic import ValidationError

from chronoface._app import render_face
from chronoface._assets import load_face_images
from chronoface._errors import ChronofaceError
from chronoface._logging import configure_logging
from chronoface._settings import LoggingSettings

if TYPE_CHECKING:
    from chronoface._app import ChronometerApp
    from chronoface._settings import Settings

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_RUNTIME_ERROR = 3

# ---------------------------------------------------------------------------
# Allowed values (extracted from LoggingSettings Literal types)
# ---------------------------------------------------------------------------

_VALID_LOG_LEVELS: tuple[str, ...] = get_args(
    LoggingSettings.model_fields["level"].annotation,
)
_VALID_LOG_FORMATS: tuple[str, ...] = get_args(
    LoggingSettings.model_fields["format"].annotation,
)


@dataclass(frozen=True)
class _GlobalOptions:
    log_level: str | None
    log_format: str | None
    env_file: str


def _load_settings(app: ChronometerApp, options: _GlobalOptions) -> Settings:
    """Instantiate settings and apply the global CLI overrides."""
    try:
        settings: Settings = app.settings_class(_env_file=options.env_file)  # type: ignore[call-arg]
    except ValidationError as exc:
        logger.error("Configuration error: %s", exc)
        raise SystemExit(EXIT_CONFIG_ERROR) from exc

    if options.log_level is not None:
        settings.logging = settings.logging.model_copy(
            update={"level": options.log_level.upper()},
        )
    if options.log_format is not None:
        settings.logging = settings.logging.model_copy(
            update={"format": options.log_format.lower()},
        )
    return settings


def build_cli(app: ChronometerApp) -> typer.Typer:
    """Construct a Typer CLI around a :class:`ChronometerApp`.

    Args:
        app: The application whose settings class and run loop are used.

    Returns:
        A configured :class:`typer.Typer` ready to invoke.
    """
    cli = typer.Typer(
        help=f"{app.name} v{app.version} — analog clock face and chronometer",
    )

    # -- global options -----------------------------------------------------

    @cli.callback(invoke_without_command=True)
    def main(
        ctx: typer.Context,
        version_flag: Annotated[
            bool | None,
            typer.Option("--version", is_eager=True, help="Show version and exit."),
        ] = None,
        log_level: Annotated[
            str | None,
            typer.Option("--log-level", help="Override log level."),
        ] = None,
        log_format: Annotated[
            str | None,
            typer.Option("--log-format", help="Override log format."),
        ] = None,
        env_file: Annotated[
            str,
            typer.Option("--env-file", help="Path to .env file."),
        ] = ".env",
    ) -> None:
        if version_flag:
            typer.echo(f"{app.name} v{app.version}")
            raise typer.Exit()

        if log_level is not None and log_level.upper() not in _VALID_LOG_LEVELS:
            raise typer.BadParameter(
                f"Invalid log level '{log_level}'. "
                f"Choose from: {', '.join(_VALID_LOG_LEVELS)}",
                param_hint="'--log-level'",
            )
        if log_format is not None and log_format.lower() not in _VALID_LOG_FORMATS:
            raise typer.BadParameter(
                f"Invalid log format '{log_format}'. "
                f"Choose from: {', '.join(_VALID_LOG_FORMATS)}",
                param_hint="'--log-format'",
            )

        ctx.obj = _GlobalOptions(
            log_level=log_level,
            log_format=log_format,
            env_file=env_file,
        )

        if ctx.invoked_subcommand is None:
            typer.echo(ctx.get_help())
            raise typer.Exit()

    # -- render -------------------------------------------------------------

    @cli.command()
    def render(
        ctx: typer.Context,
        hour: Annotated[int, typer.Option(help="Hour shown by the big hand.")] = 0,
        minute: Annotated[int, typer.Option(help="Minute shown by the small hand.")] = 0,
        second: Annotated[int, typer.Option(help="Seconds carried into the minute hand.")] = 0,
        output: Annotated[
            Path,
            typer.Option("--output", "-o", help="PNG file to write."),
        ] = Path("clock.png"),
    ) -> None:
        """Render a single clock face showing HOUR:MINUTE:SECOND."""
        settings = _load_settings(app, ctx.obj)
        configure_logging(settings.logging, service=app.name, version=app.version)

        try:
            images = load_face_images(settings.face)
            surface = render_face(
                images,
                hour=hour,
                minute=minute,
                second=second,
                width=settings.face.width,
                height=settings.face.height,
            )
            surface.write(output)
        except (ChronofaceError, OSError) as exc:
            logger.error("Render failed: %s", exc)
            sys.exit(EXIT_RUNTIME_ERROR)

        typer.echo(f"Wrote {output}")

    # -- run ----------------------------------------------------------------

    @cli.command()
    def run(
        ctx: typer.Context,
        frames: Annotated[
            int | None,
            typer.Option("--frames", min=1, help="Stop after this many frames."),
        ] = None,
        output_dir: Annotated[
            str | None,
            typer.Option("--output-dir", help="Directory receiving the frames."),
        ] = None,
    ) -> None:
        """Run the chronometer, writing one frame per tick."""
        settings = _load_settings(app, ctx.obj)

        overrides: dict[str, object] = {}
        if frames is not None:
            overrides["max_frames"] = frames
        if output_dir is not None:
            overrides["output_dir"] = output_dir
        if overrides:
            settings.chronometer = settings.chronometer.model_copy(update=overrides)

        count = 0
        try:
            with contextlib.suppress(KeyboardInterrupt):
                count = asyncio.run(app._run_async(settings=settings))
        except SystemExit:
            raise
        except Exception as exc:
            logger.error("Runtime error: %s", exc)
            sys.exit(EXIT_RUNTIME_ERROR)

        typer.echo(f"Wrote {count} frames to {settings.chronometer.output_dir}")

    return cli
