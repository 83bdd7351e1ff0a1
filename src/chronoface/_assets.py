"""Face image provider.

Loads the dial and the two hands from the paths in
:class:`~chronoface._settings.FaceSettings`.  Any image without a
configured path falls back to a default drawn with ``PIL.ImageDraw``:

- dial — white disc, dark rim, 60 ticks (every fifth one longer)
- big hand — short, wide needle
- small hand — long, thin needle

Hands are drawn pointing straight up with their pivot at the bottom
edge, which is how the face lays them out.
"""

from __future__ import annotations

import logging
import math
from typing import Any

from chronoface._pillow import PillowImage, _require_pil
from chronoface._render import FaceImages
from chronoface._settings import FaceSettings

logger = logging.getLogger(__name__)

DEFAULT_DIAL_SIZE = 200

_INK = (33, 33, 33, 255)
_PAPER = (250, 250, 250, 255)
_ACCENT = (200, 30, 30, 255)


def _image_draw() -> Any:
    try:
        from PIL import ImageDraw  # noqa: PLC0415
    except ModuleNotFoundError as exc:
        msg = "Pillow is required to draw the default face images"
        raise RuntimeError(msg) from exc
    return ImageDraw


def default_dial(size: int = DEFAULT_DIAL_SIZE) -> PillowImage:
    """Draw a plain dial of ``size`` x ``size`` pixels."""
    image_mod = _require_pil()
    draw_mod = _image_draw()
    img = image_mod.new("RGBA", (size, size), (0, 0, 0, 0))
    draw = draw_mod.Draw(img)

    rim = max(1, size // 50)
    draw.ellipse((0, 0, size - 1, size - 1), fill=_PAPER, outline=_INK, width=rim)

    center = size / 2
    outer = center - rim * 2
    for tick in range(60):
        major = tick % 5 == 0
        inner = outer - (size * 0.08 if major else size * 0.03)
        rad = math.radians(tick * 6)
        x0, y0 = center + inner * math.sin(rad), center - inner * math.cos(rad)
        x1, y1 = center + outer * math.sin(rad), center - outer * math.cos(rad)
        draw.line((x0, y0, x1, y1), fill=_INK, width=rim * (2 if major else 1))

    return PillowImage(img)


def _needle(width: int, height: int, fill: tuple[int, int, int, int]) -> PillowImage:
    image_mod = _require_pil()
    draw_mod = _image_draw()
    img = image_mod.new("RGBA", (width, height), (0, 0, 0, 0))
    draw = draw_mod.Draw(img)
    draw.polygon(
        [(width / 2, 0), (width - 1, height - 1), (0, height - 1)],
        fill=fill,
    )
    return PillowImage(img)


def default_big_hand(dial_size: int = DEFAULT_DIAL_SIZE) -> PillowImage:
    """Short, wide needle sized for a dial of ``dial_size``."""
    return _needle(max(2, dial_size // 16), max(2, int(dial_size * 0.3)), _INK)


def default_small_hand(dial_size: int = DEFAULT_DIAL_SIZE) -> PillowImage:
    """Long, thin needle sized for a dial of ``dial_size``."""
    return _needle(max(2, dial_size // 28), max(2, int(dial_size * 0.44)), _ACCENT)


def load_face_images(settings: FaceSettings) -> FaceImages:
    """Build the three face images from settings.

    Raises:
        AssetError: If a configured path cannot be loaded.
    """
    if settings.dial is not None:
        dial = PillowImage.open(settings.dial)
    else:
        dial = default_dial()
    logger.debug("Dial is %dx%d", dial.width, dial.height)

    size = min(dial.width, dial.height)
    big_hand = (
        PillowImage.open(settings.big_hand)
        if settings.big_hand is not None
        else default_big_hand(size)
    )
    small_hand = (
        PillowImage.open(settings.small_hand)
        if settings.small_hand is not None
        else default_small_hand(size)
    )
    return FaceImages(dial=dial, big_hand=big_hand, small_hand=small_hand)
