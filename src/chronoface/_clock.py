"""Time base for the chronometer.

A chronometer only ever subtracts two readings (now minus base), so
the clock port promises nothing about its epoch.  :class:`SystemClock`
reads ``time.monotonic()``, which wall-clock adjustments cannot move
backwards.
"""

from __future__ import annotations

import time
from typing import Protocol, runtime_checkable


@runtime_checkable
class ClockPort(Protocol):
    """Source of monotonic readings, in seconds.

    Base timestamps passed to :meth:`Chronometer.set_base
    <chronoface.Chronometer.set_base>` must come from the same clock
    the chronometer was built with.
    """

    def now(self) -> float: ...


class SystemClock:
    """:class:`ClockPort` over ``time.monotonic()``.

    Usage::

        clock = SystemClock()
        chrono = Chronometer(face, scheduler=AsyncioScheduler(), clock=clock)
        chrono.set_base(clock.now() - 90.0)   # shows 1:30 and counts on
    """

    def now(self) -> float:
        return time.monotonic()
