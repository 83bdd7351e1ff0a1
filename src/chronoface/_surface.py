"""Image and drawing-surface ports and in-memory adapters.

Provides the two protocols the face renderer draws through:

- ImagePort — an opaque image handle with an intrinsic size
- SurfacePort — a canvas with a save/restore transform stack

and two adapters that need no imaging library:

- NullSurface — silent no-op surface
- RecordingSurface — test double that records every command

The Pillow-backed adapters live in :mod:`chronoface._pillow` so that
these work without Pillow installed.

Design decisions:

- Rotation is in degrees, clockwise, about an explicit pivot
- ``scale`` and ``rotate`` apply to everything drawn until the matching
  ``restore``
- Rect coordinates are integers, right/bottom exclusive
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Value objects
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Rect:
    """Integer placement rectangle on a surface."""

    left: int
    top: int
    right: int
    bottom: int

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top

    @classmethod
    def centered(cls, cx: int, cy: int, width: int, height: int) -> Rect:
        """Rect of the given size centred on ``(cx, cy)``."""
        return cls(cx - width // 2, cy - height // 2, cx + width // 2, cy + height // 2)

    @classmethod
    def pivoted(cls, cx: int, cy: int, width: int, height: int) -> Rect:
        """Rect whose bottom-centre sits on ``(cx, cy)``.

        Hands are drawn pointing up from their pivot, so the rect spans
        the full height above the centre.
        """
        return cls(cx - width // 2, cy - height, cx + width // 2, cy)


# ---------------------------------------------------------------------------
# Ports (Protocols)
# ---------------------------------------------------------------------------


@runtime_checkable
class ImagePort(Protocol):
    """Opaque image handle with a queryable intrinsic size in pixels."""

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...


@runtime_checkable
class SurfacePort(Protocol):
    """Drawing surface the face renderer issues commands against."""

    def draw(self, image: ImagePort, rect: Rect) -> None: ...

    def save(self) -> None: ...

    def restore(self) -> None: ...

    def rotate(self, degrees: float, px: float, py: float) -> None: ...

    def scale(self, factor: float, px: float, py: float) -> None: ...


# ---------------------------------------------------------------------------
# Null adapter
# ---------------------------------------------------------------------------


@dataclass
class NullSurface:
    """Silent no-op surface.

    Useful for driving a face headless, e.g. when only the tick
    notifications matter.
    """

    def draw(self, image: ImagePort, rect: Rect) -> None:
        """Silently discard a draw request."""
        logger.debug("NullSurface.draw(%s) discarded", rect)

    def save(self) -> None:
        pass

    def restore(self) -> None:
        pass

    def rotate(self, degrees: float, px: float, py: float) -> None:
        pass

    def scale(self, factor: float, px: float, py: float) -> None:
        pass


# ---------------------------------------------------------------------------
# Recording / test-double adapter
# ---------------------------------------------------------------------------

DrawCommand = tuple[object, ...]
"""One recorded surface call, e.g. ``("rotate", 90.0, 100, 100)``."""


@dataclass
class RecordingSurface:
    """In-memory test double that records surface commands in order.

    Commands are stored as tuples whose first element is the method
    name::

        ("save",)
        ("scale", 0.5, 100, 100)
        ("rotate", 6.0, 100, 100)
        ("draw", image, Rect(...))
        ("restore",)
    """

    commands: list[DrawCommand] = field(default_factory=list)

    # -- SurfacePort methods -----------------------------------------------

    def draw(self, image: ImagePort, rect: Rect) -> None:
        self.commands.append(("draw", image, rect))

    def save(self) -> None:
        self.commands.append(("save",))

    def restore(self) -> None:
        self.commands.append(("restore",))

    def rotate(self, degrees: float, px: float, py: float) -> None:
        self.commands.append(("rotate", degrees, px, py))

    def scale(self, factor: float, px: float, py: float) -> None:
        self.commands.append(("scale", factor, px, py))

    # -- Test helpers -------------------------------------------------------

    @property
    def draws(self) -> list[tuple[ImagePort, Rect]]:
        """``(image, rect)`` pairs of every recorded draw, in order."""
        return [(cmd[1], cmd[2]) for cmd in self.commands if cmd[0] == "draw"]  # type: ignore[misc]

    @property
    def rotations(self) -> list[float]:
        """Degrees of every recorded rotate, in order."""
        return [cmd[1] for cmd in self.commands if cmd[0] == "rotate"]  # type: ignore[misc]

    def reset(self) -> None:
        """Clear all recorded commands."""
        self.commands.clear()
