"""Portal grid layout engine."""

from .engine import collides, compact, move, nudge, resize, resolve
from .geometry import (
    PixelRect,
    cell_width,
    grid_to_pixels,
    pixel_offset,
    pixel_span,
    pixels_to_cell,
    snap,
)

__all__ = [
    "collides",
    "resolve",
    "compact",
    "move",
    "resize",
    "nudge",
    "PixelRect",
    "cell_width",
    "grid_to_pixels",
    "pixel_offset",
    "pixel_span",
    "pixels_to_cell",
    "snap",
]
