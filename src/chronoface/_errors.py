"""Exception hierarchy for chronoface.

The face and chronometer core never raise: angle and elapsed-time
computations are total over their inputs.  Errors only arise at the
edges, where images are loaded and frames are rasterised:

- :class:`AssetError` — a configured image is missing or undecodable.
  Raised at construction time, chained from the underlying ``OSError``.
- :class:`RenderError` — a surface's transform stack was misused.

Both derive from :class:`ChronofaceError` so callers can catch
everything the package raises with a single ``except`` clause.
"""

from __future__ import annotations


class ChronofaceError(Exception):
    """Base class for all chronoface errors."""


class AssetError(ChronofaceError):
    """An image asset could not be loaded.

    Attributes:
        path: The path that failed to load.
    """

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot load image {path!r}: {reason}")
        self.path = path


class RenderError(ChronofaceError):
    """A drawing surface could not carry out a command."""
