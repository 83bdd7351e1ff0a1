"""Face geometry: fit scale, placement rectangles and measurement.

Pure functions over image sizes; no drawing happens here.  The
renderer asks for a :class:`FaceLayout` whenever the face is dirty and
reuses it otherwise.

Measurement follows the host measure-spec model.  Each axis carries a
:class:`MeasureSpec` with one of three modes:

- ``UNSPECIFIED`` — no constraint; the dial's intrinsic size is used
- ``AT_MOST`` — the result may not exceed ``size``
- ``EXACTLY`` — the result is ``size`` regardless of the dial

The dial is scaled *down* uniformly to fit the constrained axes and is
never scaled up.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from chronoface._surface import ImagePort, Rect

# ---------------------------------------------------------------------------
# Measure specs
# ---------------------------------------------------------------------------


class MeasureMode(enum.Enum):
    """How a measure spec constrains one axis."""

    UNSPECIFIED = "unspecified"
    AT_MOST = "at_most"
    EXACTLY = "exactly"


@dataclass(frozen=True, slots=True)
class MeasureSpec:
    """Size constraint for a single axis."""

    mode: MeasureMode
    size: int = 0

    @classmethod
    def unspecified(cls) -> MeasureSpec:
        return cls(MeasureMode.UNSPECIFIED)

    @classmethod
    def at_most(cls, size: int) -> MeasureSpec:
        return cls(MeasureMode.AT_MOST, size)

    @classmethod
    def exactly(cls, size: int) -> MeasureSpec:
        return cls(MeasureMode.EXACTLY, size)

    @classmethod
    def coerce(cls, value: MeasureSpec | int | None) -> MeasureSpec:
        """Accept a spec, a plain maximum, or ``None`` for no constraint."""
        if value is None:
            return cls.unspecified()
        if isinstance(value, MeasureSpec):
            return value
        return cls.at_most(value)

    def resolve(self, desired: int) -> int:
        """Reconcile a desired size with this constraint."""
        if self.mode is MeasureMode.EXACTLY:
            return self.size
        if self.mode is MeasureMode.AT_MOST:
            return min(desired, self.size)
        return desired


def _axis_scale(spec: MeasureSpec, intrinsic: int) -> float:
    if spec.mode is not MeasureMode.UNSPECIFIED and spec.size < intrinsic:
        return spec.size / intrinsic
    return 1.0


def measure(
    dial: ImagePort,
    width_spec: MeasureSpec | int | None = None,
    height_spec: MeasureSpec | int | None = None,
) -> tuple[int, int]:
    """Preferred ``(width, height)`` of a face with the given dial.

    Each constrained axis that is smaller than the dial yields its own
    scale; the smaller of the two is applied to both axes so the dial
    keeps its aspect ratio.

    Example::

        measure(FakeImage(200, 200), 100, 150)  # -> (100, 100)
    """
    w_spec = MeasureSpec.coerce(width_spec)
    h_spec = MeasureSpec.coerce(height_spec)
    scale = min(_axis_scale(w_spec, dial.width), _axis_scale(h_spec, dial.height))
    return (
        w_spec.resolve(int(dial.width * scale)),
        h_spec.resolve(int(dial.height * scale)),
    )


# ---------------------------------------------------------------------------
# Placement
# ---------------------------------------------------------------------------


def fit_scale(dial: ImagePort, width: int, height: int) -> float | None:
    """Uniform scale fitting the dial into ``width`` x ``height``.

    Returns ``None`` when the surface is at least as large as the dial
    on both axes, so faces are never upscaled.
    """
    scales = [
        size / intrinsic
        for size, intrinsic in ((width, dial.width), (height, dial.height))
        if size < intrinsic
    ]
    return min(scales) if scales else None


@dataclass(frozen=True, slots=True)
class FaceLayout:
    """Placement of the dial and both hands on a surface.

    ``cx``/``cy`` is the pivot shared by both hands.  ``scale`` is
    ``None`` when the face is drawn at its intrinsic size.
    """

    cx: int
    cy: int
    scale: float | None
    dial: Rect
    big_hand: Rect
    small_hand: Rect


def compute_layout(
    dial: ImagePort,
    big_hand: ImagePort,
    small_hand: ImagePort,
    width: int,
    height: int,
) -> FaceLayout:
    """Lay out the three images on a ``width`` x ``height`` surface."""
    cx = width // 2
    cy = height // 2
    return FaceLayout(
        cx=cx,
        cy=cy,
        scale=fit_scale(dial, width, height),
        dial=Rect.centered(cx, cy, dial.width, dial.height),
        big_hand=Rect.pivoted(cx, cy, big_hand.width, big_hand.height),
        small_hand=Rect.pivoted(cx, cy, small_hand.width, small_hand.height),
    )
