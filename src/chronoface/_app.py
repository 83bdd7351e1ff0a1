"""Application shell: wires settings, images, face and chronometer.

:class:`ChronometerApp` is the composition root.  It plays the part of
the host window: it attaches the chronometer, makes it visible, starts
it, and writes one PNG frame per tick until shutdown is requested.

Typical usage::

    import chronoface

    app = chronoface.ChronometerApp()
    app.run()

Orchestration order of :meth:`ChronometerApp._run_async`:

1. Bootstrap (settings, logging, images, clock, scheduler).
2. Build the face and the chronometer; hook up the frame writer.
3. Show and start the chronometer, block until shutdown.
4. Tear down (stop, detach).
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import signal
from pathlib import Path

from chronoface._assets import load_face_images
from chronoface._chronometer import Chronometer
from chronoface._clock import ClockPort, SystemClock
from chronoface._face import ClockFace
from chronoface._logging import configure_logging
from chronoface._pillow import PillowSurface
from chronoface._render import FaceImages
from chronoface._scheduler import AsyncioScheduler, SchedulerPort
from chronoface._settings import Settings

logger = logging.getLogger(__name__)


def render_face(
    images: FaceImages,
    *,
    hour: int,
    minute: int,
    second: int,
    width: int,
    height: int,
) -> PillowSurface:
    """Rasterise a face showing ``hour:minute:second`` in clock mode."""
    face = ClockFace(images, hour=hour, minute=minute, second=second)
    surface = PillowSurface(width, height)
    face.render(surface, width, height)
    return surface


# ---------------------------------------------------------------------------
# Frame writer
# ---------------------------------------------------------------------------


class FrameWriter:
    """Renders the face into numbered PNG files, one per call.

    Args:
        output_dir: Directory for ``frame_00000.png``, ``frame_00001.png``...
        width: Frame width in pixels.
        height: Frame height in pixels.
    """

    def __init__(self, output_dir: str | Path, width: int, height: int) -> None:
        self._output_dir = Path(output_dir)
        self._width = width
        self._height = height
        self.count = 0

    @property
    def output_dir(self) -> Path:
        return self._output_dir

    def write(self, face: ClockFace) -> Path:
        """Render *face* and write it as the next frame."""
        self._output_dir.mkdir(parents=True, exist_ok=True)
        surface = PillowSurface(self._width, self._height)
        face.render(surface, self._width, self._height)
        path = self._output_dir / f"frame_{self.count:05d}.png"
        surface.write(path)
        self.count += 1
        return path


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------


class ChronometerApp:
    """Runs a chronometer that writes a frame on every tick.

    Args:
        name: Service name used in log lines.
        version: Version used in log lines.
        settings_class: Settings type instantiated when no settings
            are injected.
    """

    def __init__(
        self,
        *,
        name: str = "chronoface",
        version: str = "",
        settings_class: type[Settings] = Settings,
    ) -> None:
        self._name = name
        self._version = version
        self._settings_class = settings_class

    @property
    def name(self) -> str:
        return self._name

    @property
    def version(self) -> str:
        return self._version

    @property
    def settings_class(self) -> type[Settings]:
        return self._settings_class

    # --- Lifecycle ---------------------------------------------------------

    def run(
        self,
        *,
        settings: Settings | None = None,
        shutdown_event: asyncio.Event | None = None,
        clock: ClockPort | None = None,
    ) -> int:
        """Start the chronometer (blocking).  Returns frames written.

        Ctrl-C stops it cleanly.
        """
        frames = 0
        with contextlib.suppress(KeyboardInterrupt):
            frames = asyncio.run(
                self._run_async(
                    settings=settings,
                    shutdown_event=shutdown_event,
                    clock=clock,
                ),
            )
        return frames

    def cli(self) -> None:
        """Start the application with CLI argument parsing.

        Builds the Typer CLI (see :func:`chronoface._cli.build_cli`) and
        hands control to it.
        """
        from chronoface._cli import build_cli

        cli = build_cli(self)
        cli(standalone_mode=True)

    async def _run_async(
        self,
        *,
        settings: Settings | None = None,
        shutdown_event: asyncio.Event | None = None,
        clock: ClockPort | None = None,
        scheduler: SchedulerPort | None = None,
        images: FaceImages | None = None,
    ) -> int:
        """Async orchestration.

        Parameters are provided for testability: inject a
        :class:`FakeClock`, a scheduler, pre-built images and a manual
        :class:`asyncio.Event` to control the run from a test.

        Returns:
            The number of frames written.

        Raises:
            AssetError: If a configured image cannot be loaded.
            OSError: If a frame cannot be written.
        """
        # --- Phase 1: Bootstrap ---
        resolved = settings if settings is not None else self._settings_class()
        configure_logging(resolved.logging, service=self._name, version=self._version)

        resolved_images = images if images is not None else load_face_images(resolved.face)
        resolved_clock = clock if clock is not None else SystemClock()
        resolved_scheduler = scheduler if scheduler is not None else AsyncioScheduler()
        shutdown_event = self._install_signal_handlers(shutdown_event)

        # --- Phase 2: Wire ---
        face = ClockFace(resolved_images)
        chronometer = Chronometer(
            face,
            scheduler=resolved_scheduler,
            clock=resolved_clock,
            tick_interval=resolved.chronometer.tick_interval,
        )
        writer = FrameWriter(
            resolved.chronometer.output_dir,
            resolved.face.width,
            resolved.face.height,
        )
        max_frames = resolved.chronometer.max_frames
        failures: list[BaseException] = []

        def on_tick(chrono: Chronometer) -> None:
            try:
                writer.write(chrono.face)
            except Exception as exc:
                logger.exception("Frame output failed")
                failures.append(exc)
                shutdown_event.set()
                return
            if max_frames is not None and writer.count >= max_frames:
                shutdown_event.set()

        chronometer.set_tick_listener(on_tick)

        # --- Phase 3: Run ---
        logger.info("Writing frames to %s", writer.output_dir)
        try:
            chronometer.on_visibility_changed(True)
            chronometer.start()
            await shutdown_event.wait()
        finally:
            # --- Phase 4: Tear down ---
            chronometer.stop()
            chronometer.close()

        if failures:
            raise failures[0]

        logger.info("Shutdown complete (%d frames)", writer.count)
        return writer.count

    def _install_signal_handlers(
        self,
        shutdown_event: asyncio.Event | None,
    ) -> asyncio.Event:
        """Install SIGTERM/SIGINT handlers. Returns the shutdown event."""
        if shutdown_event is not None:
            return shutdown_event
        event = asyncio.Event()
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGTERM, signal.SIGINT):
            loop.add_signal_handler(sig, event.set)
        return event
