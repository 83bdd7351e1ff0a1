"""chronoface.

An analog clock face with two hands, and a chronometer that drives it
with a one-second tick.
"""

from importlib.metadata import PackageNotFoundError, version

from chronoface._angles import HandAngles, angles_from_hour_min_sec, angles_from_min_sec
from chronoface._app import ChronometerApp, FrameWriter, render_face
from chronoface._assets import load_face_images
from chronoface._chronometer import Chronometer, TickListener
from chronoface._clock import ClockPort, SystemClock
from chronoface._errors import AssetError, ChronofaceError, RenderError
from chronoface._face import ClockFace
from chronoface._layout import FaceLayout, MeasureMode, MeasureSpec
from chronoface._logging import JsonFormatter, configure_logging
from chronoface._pillow import PillowImage, PillowSurface
from chronoface._render import FaceImages, FaceRenderer
from chronoface._scheduler import AsyncioScheduler, SchedulerPort, TimerHandle
from chronoface._settings import (
    ChronometerSettings,
    FaceSettings,
    LoggingSettings,
    Settings,
)
from chronoface._surface import (
    ImagePort,
    NullSurface,
    RecordingSurface,
    Rect,
    SurfacePort,
)

try:
    __version__ = version("chronoface")
except PackageNotFoundError:
    # Source checkout without installed metadata
    __version__ = "0.0.0+unknown"


def main() -> None:
    """Console entry point."""
    ChronometerApp(version=__version__).cli()


__all__ = [
    # Version
    "__version__",
    # App
    "ChronometerApp",
    "FrameWriter",
    "main",
    "render_face",
    # Angles
    "HandAngles",
    "angles_from_hour_min_sec",
    "angles_from_min_sec",
    # Face
    "ClockFace",
    "FaceImages",
    "FaceLayout",
    "FaceRenderer",
    "MeasureMode",
    "MeasureSpec",
    # Chronometer
    "Chronometer",
    "TickListener",
    # Clock
    "ClockPort",
    "SystemClock",
    # Scheduler
    "AsyncioScheduler",
    "SchedulerPort",
    "TimerHandle",
    # Surfaces and images
    "ImagePort",
    "NullSurface",
    "PillowImage",
    "PillowSurface",
    "RecordingSurface",
    "Rect",
    "SurfacePort",
    "load_face_images",
    # Errors
    "AssetError",
    "ChronofaceError",
    "RenderError",
    # Logging
    "JsonFormatter",
    "configure_logging",
    # Settings
    "ChronometerSettings",
    "FaceSettings",
    "LoggingSettings",
    "Settings",
]
