"""Face renderer: issues draw commands for one frame.

The renderer is stateless: it receives a :class:`FaceLayout`, the
current :class:`HandAngles` and the three images, and emits commands
against a :class:`SurfacePort` in a fixed order::

    [save, scale]            only when the face is scaled down
    draw dial
    save, rotate(big), draw big hand, restore
    save, rotate(small), draw small hand, restore
    [restore]                matches the scale save
"""

from __future__ import annotations

from dataclasses import dataclass

from chronoface._angles import HandAngles
from chronoface._layout import FaceLayout
from chronoface._surface import ImagePort, Rect, SurfacePort


@dataclass(frozen=True, slots=True)
class FaceImages:
    """The three images making up a face."""

    dial: ImagePort
    big_hand: ImagePort
    small_hand: ImagePort


class FaceRenderer:
    """Draws a laid-out face onto a surface."""

    def draw(
        self,
        surface: SurfacePort,
        images: FaceImages,
        layout: FaceLayout,
        angles: HandAngles,
    ) -> None:
        """Draw dial, big hand and small hand, in that order."""
        scaled = layout.scale is not None
        if scaled:
            surface.save()
            surface.scale(layout.scale, layout.cx, layout.cy)  # type: ignore[arg-type]

        surface.draw(images.dial, layout.dial)
        self._draw_hand(surface, images.big_hand, layout.big_hand, angles.big_hand, layout)
        self._draw_hand(
            surface, images.small_hand, layout.small_hand, angles.small_hand, layout
        )

        if scaled:
            surface.restore()

    @staticmethod
    def _draw_hand(
        surface: SurfacePort,
        image: ImagePort,
        rect: Rect,
        degrees: float,
        layout: FaceLayout,
    ) -> None:
        surface.save()
        surface.rotate(degrees, layout.cx, layout.cy)
        surface.draw(image, rect)
        surface.restore()
