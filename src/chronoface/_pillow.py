"""Pillow-backed image and surface adapters.

Provides:

- PillowImage — ImagePort over a ``PIL.Image.Image``
- PillowSurface — SurfacePort rasterising onto an RGBA canvas

The surface keeps a stack of 2-D affine transforms.  ``rotate`` and
``scale`` pre-concatenate onto the current transform; ``draw`` maps the
image into its destination rect, pushes it through the current
transform with ``Image.transform(..., AFFINE)`` and alpha-composites the
result onto the canvas.

Design decisions:

- Pillow imported lazily so the core and the recording/null surfaces
  work without it
- Rotation is clockwise in screen coordinates (y grows downward)
- Images are stretched to their destination rect, like drawable bounds
"""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Any

from chronoface._errors import AssetError, RenderError
from chronoface._surface import ImagePort, Rect

logger = logging.getLogger(__name__)

Affine = tuple[float, float, float, float, float, float]
"""Affine transform ``(a, b, c, d, e, f)``: ``x' = ax + by + c``, ``y' = dx + ey + f``."""

IDENTITY: Affine = (1.0, 0.0, 0.0, 0.0, 1.0, 0.0)


def _require_pil() -> Any:
    try:
        from PIL import Image  # noqa: PLC0415
    except ModuleNotFoundError as exc:
        msg = "Pillow is required to use the Pillow image and surface adapters"
        raise RuntimeError(msg) from exc
    return Image


# ---------------------------------------------------------------------------
# Affine helpers
# ---------------------------------------------------------------------------


def concat(m: Affine, n: Affine) -> Affine:
    """Return ``m · n`` (apply *n* first, then *m*)."""
    a, b, c, d, e, f = m
    na, nb, nc, nd, ne, nf = n
    return (
        a * na + b * nd,
        a * nb + b * ne,
        a * nc + b * nf + c,
        d * na + e * nd,
        d * nb + e * ne,
        d * nc + e * nf + f,
    )


def invert(m: Affine) -> Affine:
    """Inverse of an affine transform.

    Raises:
        RenderError: If the transform is singular (e.g. scaled by 0).
    """
    a, b, c, d, e, f = m
    det = a * e - b * d
    if det == 0:
        msg = "Cannot invert a singular transform"
        raise RenderError(msg)
    return (
        e / det,
        -b / det,
        (b * f - c * e) / det,
        -d / det,
        a / det,
        (c * d - a * f) / det,
    )


def translation(tx: float, ty: float) -> Affine:
    return (1.0, 0.0, tx, 0.0, 1.0, ty)


def about(pivot_x: float, pivot_y: float, m: Affine) -> Affine:
    """Conjugate *m* so it acts about ``(pivot_x, pivot_y)``."""
    return concat(
        translation(pivot_x, pivot_y),
        concat(m, translation(-pivot_x, -pivot_y)),
    )


def rotation(degrees: float) -> Affine:
    """Clockwise rotation in y-down screen coordinates."""
    rad = math.radians(degrees)
    cos, sin = math.cos(rad), math.sin(rad)
    return (cos, -sin, 0.0, sin, cos, 0.0)


def scaling(sx: float, sy: float) -> Affine:
    return (sx, 0.0, 0.0, 0.0, sy, 0.0)


# ---------------------------------------------------------------------------
# Image adapter
# ---------------------------------------------------------------------------


class PillowImage:
    """ImagePort wrapping a Pillow image, converted to RGBA."""

    def __init__(self, image: Any) -> None:
        self._image = image if image.mode == "RGBA" else image.convert("RGBA")

    @classmethod
    def open(cls, path: str | Path) -> PillowImage:
        """Load an image file.

        Raises:
            AssetError: If the file is missing or cannot be decoded.
        """
        image_mod = _require_pil()
        try:
            with image_mod.open(path) as img:
                img.load()
                return cls(img.convert("RGBA"))
        except (OSError, ValueError) as exc:
            raise AssetError(str(path), str(exc)) from exc

    @property
    def image(self) -> Any:
        """The underlying ``PIL.Image.Image``."""
        return self._image

    @property
    def width(self) -> int:
        return int(self._image.width)

    @property
    def height(self) -> int:
        return int(self._image.height)

    def __repr__(self) -> str:
        return f"PillowImage({self.width}x{self.height})"


# ---------------------------------------------------------------------------
# Surface adapter
# ---------------------------------------------------------------------------


class PillowSurface:
    """SurfacePort rasterising onto an RGBA Pillow canvas.

    Args:
        width: Canvas width in pixels.
        height: Canvas height in pixels.
        background: RGBA fill of the empty canvas.
    """

    def __init__(
        self,
        width: int,
        height: int,
        *,
        background: tuple[int, int, int, int] = (0, 0, 0, 0),
    ) -> None:
        image_mod = _require_pil()
        self._image_mod = image_mod
        self._canvas = image_mod.new("RGBA", (width, height), background)
        self._matrix: Affine = IDENTITY
        self._stack: list[Affine] = []

    @property
    def image(self) -> Any:
        """The canvas as a ``PIL.Image.Image``."""
        return self._canvas

    @property
    def matrix(self) -> Affine:
        """The current transform."""
        return self._matrix

    # -- SurfacePort methods -----------------------------------------------

    def save(self) -> None:
        self._stack.append(self._matrix)

    def restore(self) -> None:
        if not self._stack:
            msg = "restore() called without a matching save()"
            raise RenderError(msg)
        self._matrix = self._stack.pop()

    def rotate(self, degrees: float, px: float, py: float) -> None:
        self._matrix = concat(self._matrix, about(px, py, rotation(degrees)))

    def scale(self, factor: float, px: float, py: float) -> None:
        self._matrix = concat(self._matrix, about(px, py, scaling(factor, factor)))

    def draw(self, image: ImagePort, rect: Rect) -> None:
        """Composite *image*, stretched to *rect*, through the transform."""
        if not isinstance(image, PillowImage):
            msg = f"PillowSurface cannot draw {type(image).__name__}"
            raise RenderError(msg)
        if rect.width <= 0 or rect.height <= 0:
            logger.debug("Skipping draw into empty rect %s", rect)
            return

        placed = concat(
            self._matrix,
            concat(
                translation(rect.left, rect.top),
                scaling(rect.width / image.width, rect.height / image.height),
            ),
        )
        layer = image.image.transform(
            self._canvas.size,
            self._image_mod.Transform.AFFINE,
            invert(placed),
            resample=self._image_mod.Resampling.BICUBIC,
        )
        self._canvas.alpha_composite(layer)

    # -- Output -------------------------------------------------------------

    def write(self, path: str | Path) -> None:
        """Write the canvas to *path*; the format follows the suffix."""
        self._canvas.save(path)
        logger.debug("Frame written to %s", path)
