"""Public test-support utilities for chronoface.

Re-exports test doubles and factories so that consumer test suites
can import everything from a single ``chronoface.testing`` namespace
instead of reaching into private modules.

Provided symbols:

- :class:`ChronometerHarness` — chronometer wired with fakes.
- :class:`FakeClock` — deterministic clock.
- :class:`FakeScheduler` — manually advanced one-shot scheduler.
- :class:`FakeImage` — size-only image.
- :class:`RecordingSurface` — surface recording draw commands.
- :class:`NullSurface` — silent no-op surface.
- :func:`make_settings` — factory for ``Settings`` without ``.env`` files.
"""

from chronoface._surface import NullSurface, RecordingSurface
from chronoface.testing._clock import FakeClock
from chronoface.testing._harness import ChronometerHarness
from chronoface.testing._image import FakeImage
from chronoface.testing._scheduler import FakeScheduler, FakeTimerHandle
from chronoface.testing._settings import make_settings

__all__ = [
    "ChronometerHarness",
    "FakeClock",
    "FakeImage",
    "FakeScheduler",
    "FakeTimerHandle",
    "NullSurface",
    "RecordingSurface",
    "make_settings",
]
