"""Analog clock face with two hands.

The face never reads the time of the host; it only shows the time it
is given.  Use :meth:`ClockFace.set_time` for hours and minutes or
:meth:`ClockFace.set_minute_second` for minutes and seconds::

    face = ClockFace(FaceImages(dial, big, small))
    face.set_time(3, 30, 0)
    face.render(surface, 200, 200)

Placement rectangles are cached and only recomputed when the face is
dirty: after construction, after a ``set_time*`` call, or when the
surface size differs from the previous render.  Hand rotation is
applied on every render.
"""

from __future__ import annotations

import logging

from chronoface._angles import HandAngles, angles_from_hour_min_sec, angles_from_min_sec
from chronoface._layout import FaceLayout, MeasureSpec, compute_layout, measure
from chronoface._render import FaceImages, FaceRenderer
from chronoface._surface import SurfacePort

logger = logging.getLogger(__name__)


class ClockFace:
    """Owns the face images, the current hand angles and the layout cache.

    Args:
        images: Dial, big hand and small hand.  Treated as immutable.
        hour: Initial hour shown in clock mode.
        minute: Initial minute shown in clock mode.
        second: Initial second shown in clock mode.
        renderer: Override the renderer (mainly for tests).
    """

    def __init__(
        self,
        images: FaceImages,
        *,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        renderer: FaceRenderer | None = None,
    ) -> None:
        self._images = images
        self._renderer = renderer if renderer is not None else FaceRenderer()
        self._angles = HandAngles()
        self._changed = True
        self._layout: FaceLayout | None = None
        self._size: tuple[int, int] | None = None

        logger.debug("init %d:%d:%d", hour, minute, second)
        self.set_time(hour, minute, second)

    # --- Time --------------------------------------------------------------

    def set_time(self, hour: int, minute: int, second: int) -> None:
        """Show a wall-clock time: hour hand and minute hand."""
        self._angles = angles_from_hour_min_sec(hour, minute, second)
        self._changed = True

    def set_minute_second(self, minute: int, second: int) -> None:
        """Show an elapsed time: minute hand and second hand."""
        self._angles = angles_from_min_sec(minute, second)
        self._changed = True

    @property
    def angles(self) -> HandAngles:
        """Current hand rotation."""
        return self._angles

    @property
    def images(self) -> FaceImages:
        return self._images

    @property
    def changed(self) -> bool:
        """Whether placement will be recomputed on the next render."""
        return self._changed

    # --- Geometry ----------------------------------------------------------

    def on_size_changed(self, width: int, height: int) -> None:
        """Record a new surface size and mark the layout dirty."""
        self._size = (width, height)
        self._changed = True

    def measure(
        self,
        width_spec: MeasureSpec | int | None = None,
        height_spec: MeasureSpec | int | None = None,
    ) -> tuple[int, int]:
        """Preferred size under the given constraints.

        See :func:`chronoface._layout.measure`.
        """
        return measure(self._images.dial, width_spec, height_spec)

    # --- Drawing -----------------------------------------------------------

    def render(self, surface: SurfacePort, width: int, height: int) -> None:
        """Draw the face onto a ``width`` x ``height`` surface.

        An empty surface draws nothing.
        """
        if width <= 0 or height <= 0:
            logger.debug("Nothing to draw on a %dx%d surface", width, height)
            return

        if self._size != (width, height):
            self.on_size_changed(width, height)

        if self._changed or self._layout is None:
            self._changed = False
            self._layout = compute_layout(
                self._images.dial,
                self._images.big_hand,
                self._images.small_hand,
                width,
                height,
            )
            logger.debug("Layout recomputed for %dx%d", width, height)

        self._renderer.draw(surface, self._images, self._layout, self._angles)
