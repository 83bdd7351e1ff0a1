"""Hand angle computation.

Maps a time value to the rotation of the two hands, in degrees
clockwise from 12 o'clock.  Two modes exist:

- **clock mode** — ``(hour, minute, second)``: the big hand is the hour
  hand on a 12-hour dial, the small hand is the minute hand.
- **chronometer mode** — ``(minute, second)``: the big hand is the
  minute hand on a 60-minute dial, the small hand is the second hand.

Both functions are total.  Inputs outside their nominal ranges are not
clamped; callers pass minutes and seconds in ``[0, 60)`` and get angles
in ``[0, 360)``.
"""

from __future__ import annotations

from dataclasses import dataclass

_FULL_TURN = 360.0


@dataclass(frozen=True, slots=True)
class HandAngles:
    """Immutable rotation of both hands, in degrees."""

    big_hand: float = 0.0
    small_hand: float = 0.0


def angles_from_hour_min_sec(hour: int, minute: int, second: int) -> HandAngles:
    """Compute hour/minute hand angles for a wall-clock time.

    Seconds carry fractionally into the minute hand, and minutes carry
    fractionally into the hour hand.
    """
    minutes = minute + second / 60.0
    hours = hour + minutes / 60.0
    return HandAngles(
        big_hand=hours / 12.0 * _FULL_TURN,
        small_hand=minutes / 60.0 * _FULL_TURN,
    )


def angles_from_min_sec(minute: int, second: int) -> HandAngles:
    """Compute minute/second hand angles for an elapsed time."""
    seconds = float(second)
    minutes = minute + seconds / 60.0
    return HandAngles(
        big_hand=minutes / 60.0 * _FULL_TURN,
        small_hand=seconds / 60.0 * _FULL_TURN,
    )
