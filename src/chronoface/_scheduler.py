"""One-shot scheduler port and asyncio adapter.

The chronometer drives itself with a chain of one-shot callbacks rather
than a fixed-rate timer: each tick arms the next only after it has
finished its own update.  Cancelling the single outstanding handle is
therefore enough to stop it at any instant.

Provides SchedulerPort (Protocol), TimerHandle (Protocol) and
AsyncioScheduler, which delegates to ``loop.call_later``.  A
deterministic test double lives in :mod:`chronoface.testing`.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Ports (Protocols)
# ---------------------------------------------------------------------------


@runtime_checkable
class TimerHandle(Protocol):
    """Cancellable token returned by :meth:`SchedulerPort.call_later`."""

    def cancel(self) -> None: ...


@runtime_checkable
class SchedulerPort(Protocol):
    """Schedules a callback once after a delay.

    Implementations must allow :meth:`TimerHandle.cancel` at any time
    before the callback runs, and cancelling must affect only the
    handle it is called on.
    """

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        """Run *callback* once, *delay* seconds from now."""
        ...


# ---------------------------------------------------------------------------
# asyncio adapter
# ---------------------------------------------------------------------------


class AsyncioScheduler:
    """Production scheduler backed by the asyncio event loop.

    The loop is resolved lazily on first use so the scheduler can be
    built outside a running loop and used inside it.

    Args:
        loop: Explicit loop to schedule on.  When ``None``, the running
            loop at the time of ``call_later`` is used.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_later(
        self, delay: float, callback: Callable[[], None]
    ) -> asyncio.TimerHandle:
        """Schedule *callback* via ``loop.call_later``."""
        loop = self._loop if self._loop is not None else asyncio.get_running_loop()
        logger.debug("Scheduling callback in %.3fs", delay)
        return loop.call_later(delay, callback)
