"""Grid to pixel conversions for rendering the portal grid."""

import math
from typing import Optional

from pydantic import BaseModel

from ...schemas.portal import GridItem
from ..errors import InvalidConfigurationError

# Used before the container has been measured
DEFAULT_CELL_WIDTH = 100


class PixelRect(BaseModel):
    """Pixel box of a widget inside the grid container."""

    left: int
    top: int
    width: int
    height: int


def cell_width(cols: int, gap: int, container_width: Optional[int] = None) -> int:
    """Width of a single column in pixels.

    Args:
        cols: Column count of the grid
        gap: Gap between cells in pixels
        container_width: Measured container width, or None if unknown

    Returns:
        Floored column width, never negative
    """
    if cols < 1:
        raise InvalidConfigurationError(
            f"Grid needs at least one column, got cols={cols}"
        )
    if container_width is None:
        return DEFAULT_CELL_WIDTH
    return max(0, (container_width - gap * (cols - 1)) // cols)


def pixel_offset(coord: int, cell_size: int, gap: int) -> int:
    return coord * (cell_size + gap)


def pixel_span(count: int, cell_size: int, gap: int) -> int:
    return count * cell_size + (count - 1) * gap


def grid_to_pixels(
    item: GridItem,
    cols: int,
    row_height: int,
    gap: int,
    container_width: Optional[int] = None,
) -> PixelRect:
    """Map a widget's grid rectangle to its pixel box."""
    col_width = cell_width(cols, gap, container_width)
    return PixelRect(
        left=pixel_offset(item.x, col_width, gap),
        top=pixel_offset(item.y, row_height, gap),
        width=pixel_span(item.w, col_width, gap),
        height=pixel_span(item.h, row_height, gap),
    )


def snap(px: float, unit: float) -> int:
    """Snap a pixel distance to whole units, rounding halves up, floored at 0."""
    if unit <= 0:
        raise InvalidConfigurationError(f"Snap unit must be positive, got {unit}")
    return max(0, math.floor(px / unit + 0.5))


def pixels_to_cell(px: float, cell_size: int, gap: int) -> int:
    """Grid coordinate nearest to a pixel offset along one axis."""
    return snap(px, cell_size + gap)
