"""Analog chronometer: a clock face that counts up from a base time.

You can give it a base time in the :class:`ClockPort` timebase and it
counts up from that; without one it counts from the moment it was
built.  The face shows elapsed minutes on the big hand and elapsed
seconds on the small hand.

State machine::

    running = started and visible

    Stopped --(running becomes True)--> Running
        update face, notify listener, arm one-shot tick

    Running --(tick fires)--> Running
        update face, notify listener, re-arm one-shot tick

    Running --(running becomes False)--> Stopped
        cancel the pending tick

``visible`` is pushed by the host through :meth:`on_visibility_changed`
and :meth:`on_detached`.  Each :meth:`Chronometer.start` should be
paired with a :meth:`Chronometer.stop` (or a detach) so no tick stays
scheduled after teardown.

Ticks are a chain of one-shots, so delay jitter of the scheduler
accumulates as drift; the elapsed time shown is always recomputed from
the clock and never drifts itself.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from chronoface._clock import ClockPort, SystemClock
from chronoface._face import ClockFace
from chronoface._scheduler import SchedulerPort, TimerHandle

logger = logging.getLogger(__name__)

TickListener = Callable[["Chronometer"], None]
"""Callback notified synchronously on every tick and on ``set_base``."""

DEFAULT_TICK_INTERVAL = 1.0


def split_elapsed(elapsed: float) -> tuple[int, int]:
    """Convert elapsed seconds into the ``(minute, second)`` shown.

    Sub-second precision is truncated first; minutes wrap every hour.
    """
    total = int(elapsed)
    return (total // 60) % 60, total % 60


class Chronometer:
    """Stopwatch driving a :class:`ClockFace` with a one-second tick.

    Args:
        face: Face receiving ``set_minute_second`` updates.
        scheduler: One-shot scheduler used for the tick chain.
        clock: Monotonic time base.  Defaults to :class:`SystemClock`.
        tick_interval: Seconds between ticks while running.
    """

    def __init__(
        self,
        face: ClockFace,
        *,
        scheduler: SchedulerPort,
        clock: ClockPort | None = None,
        tick_interval: float = DEFAULT_TICK_INTERVAL,
    ) -> None:
        self._face = face
        self._scheduler = scheduler
        self._clock: ClockPort = clock if clock is not None else SystemClock()
        self._tick_interval = tick_interval

        self._started = False
        self._visible = False
        self._running = False
        self._listener: TickListener | None = None
        self._handle: TimerHandle | None = None

        self._base = self._clock.now()
        self._update_time(self._base)

    # --- Base time ---------------------------------------------------------

    @property
    def base(self) -> float:
        """The time the count-up is in reference to."""
        return self._base

    def set_base(self, base: float) -> None:
        """Set the time the count-up is in reference to.

        Notifies the tick listener and redraws the face immediately,
        whether or not the chronometer is running.
        """
        self._base = base
        try:
            self._dispatch_tick()
        finally:
            self._update_time(self._clock.now())

    @property
    def elapsed(self) -> float:
        """Seconds elapsed since the base, per the clock."""
        return self._clock.now() - self._base

    @property
    def face(self) -> ClockFace:
        return self._face

    # --- Listener ----------------------------------------------------------

    @property
    def tick_listener(self) -> TickListener | None:
        return self._listener

    def set_tick_listener(self, listener: TickListener | None) -> None:
        """Set the single tick listener, replacing any previous one."""
        self._listener = listener

    # --- Start / stop ------------------------------------------------------

    @property
    def started(self) -> bool:
        return self._started

    @property
    def visible(self) -> bool:
        return self._visible

    @property
    def running(self) -> bool:
        """Whether ticks are being scheduled (started and visible)."""
        return self._running

    def start(self) -> None:
        """Start counting up.  The base is not affected."""
        self._started = True
        self._update_running()

    def stop(self) -> None:
        """Stop counting up and release the pending tick."""
        self._started = False
        self._update_running()

    # --- Host signals ------------------------------------------------------

    def on_visibility_changed(self, visible: bool) -> None:
        """Host notification that the face became visible or hidden."""
        self._visible = visible
        self._update_running()

    def on_detached(self) -> None:
        """Host notification that the face was removed from its window."""
        self._visible = False
        self._update_running()

    def close(self) -> None:
        """Detach and drop the listener.  Safe to call more than once."""
        self.on_detached()
        self._listener = None

    # --- Internal ----------------------------------------------------------

    def _update_time(self, now: float) -> None:
        minute, second = split_elapsed(now - self._base)
        self._face.set_minute_second(minute, second)

    def _update_running(self) -> None:
        running = self._visible and self._started
        if running == self._running:
            return
        # Recorded before ticking so a listener calling start/stop sees
        # the new state and cannot arm a second tick.
        self._running = running
        if running:
            logger.info("Chronometer running (base=%.3f)", self._base)
            self._tick()
        else:
            self._cancel()
            logger.info("Chronometer stopped")

    def _tick(self) -> None:
        self._update_time(self._clock.now())
        try:
            self._dispatch_tick()
        finally:
            self._arm()

    def _arm(self) -> None:
        if self._running and self._handle is None:
            self._handle = self._scheduler.call_later(self._tick_interval, self._on_timer)

    def _cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _on_timer(self) -> None:
        self._handle = None
        if self._running:
            self._tick()

    def _dispatch_tick(self) -> None:
        listener = self._listener
        if listener is None:
            return
        try:
            listener(self)
        except Exception:
            logger.exception("Chronometer tick listener failed")
            raise
