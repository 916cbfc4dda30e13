"""Collision resolution and compaction for the portal widget grid.

Every operation takes a snapshot of widget rectangles and returns a fresh list
of copies in the input order. Inputs are never mutated, so callers may invoke
these functions on every pointer-move tick of a drag without aliasing issues.

Processing order is a stable sort by ``(y, x)`` of the snapshot. Widgets that
share the same ``(y, x)`` keep their relative input order, which decides which
one settles first during compaction.
"""

from typing import List, Sequence

from loguru import logger

from ...schemas.portal import GridItem
from ..errors import InvalidConfigurationError, NotFoundError


def collides(a: GridItem, b: GridItem) -> bool:
    """Check whether two rectangles overlap with nonzero area.

    Touching edges do not count as a collision.
    """
    return not (
        a.x + a.w <= b.x
        or b.x + b.w <= a.x
        or a.y + a.h <= b.y
        or b.y + b.h <= a.y
    )


def _check_cols(cols: int) -> None:
    if cols < 1:
        raise InvalidConfigurationError(
            f"Grid needs at least one column, got cols={cols}"
        )


def _index_of(items: Sequence[GridItem], item_id: str) -> int:
    for index, item in enumerate(items):
        if item.id == item_id:
            return index
    raise NotFoundError("Widget", item_id)


def _clamp_x(x: int, w: int, cols: int) -> int:
    # Widgets wider than the grid are pinned to x=0 and overhang the right edge
    return max(0, min(cols - w, x))


def _processing_order(items: List[GridItem]) -> List[GridItem]:
    return sorted(items, key=lambda item: (item.y, item.x))


def _push_down(moved: GridItem, order: List[GridItem]) -> None:
    changed = True
    while changed:
        changed = False
        for other in order:
            if other is moved:
                continue
            if collides(moved, other):
                moved.y = other.y + other.h
                changed = True


def _clamp_moved(moved: GridItem, cols: int) -> bool:
    """Normalize the moved widget into the grid. Returns True if it changed."""
    w = max(1, moved.w)
    h = max(1, moved.h)
    x = _clamp_x(moved.x, w, cols)
    y = max(0, moved.y)
    changed = (x, y, w, h) != (moved.x, moved.y, moved.w, moved.h)
    moved.x, moved.y, moved.w, moved.h = x, y, w, h
    return changed


def _risen_y(item: GridItem, order: List[GridItem]) -> int:
    """Row the item reaches by rising one row at a time until it would collide."""
    if item.y <= 0:
        return item.y
    target = 0
    for other in order:
        if other is item:
            continue
        if item.x + item.w <= other.x or other.x + other.w <= item.x:
            continue
        # Rows where the item would overlap other
        low = other.y - item.h + 1
        high = other.y + other.h - 1
        if low <= high and low < item.y:
            target = max(target, min(item.y - 1, high) + 1)
    return target


def _compact(order: List[GridItem]) -> int:
    """Float widgets upward in processing order until nothing moves.

    A single pass can leave a widget resting on air when a widget processed
    after it rises, so passes repeat until a fixpoint. Returns the pass count.
    """
    passes = 0
    settled = False
    while not settled:
        settled = True
        passes += 1
        for item in order:
            target = _risen_y(item, order)
            if target != item.y:
                item.y = target
                settled = False
    return passes


def compact(items: Sequence[GridItem], cols: int) -> List[GridItem]:
    """Compact a layout toward row 0 without moving any widget sideways.

    Used after a widget is removed, when there is no moved widget to resolve.
    """
    _check_cols(cols)
    result = [item.model_copy(deep=True) for item in items]
    _compact(_processing_order(result))
    return result


def resolve(items: Sequence[GridItem], moved_id: str, cols: int) -> List[GridItem]:
    """Resolve collisions caused by moving or resizing one widget.

    The moved widget is pushed below whatever it overlaps and clamped into the
    grid, then the whole layout is compacted toward row 0.

    Args:
        items: Current widget snapshot (left untouched)
        moved_id: Id of the widget that was moved or resized
        cols: Column count of the grid

    Returns:
        New list of widget copies, in input order

    Raises:
        InvalidConfigurationError: If cols is less than 1
        NotFoundError: If moved_id is not in items
    """
    _check_cols(cols)
    index = _index_of(items, moved_id)

    result = [item.model_copy(deep=True) for item in items]
    moved = result[index]
    order = _processing_order(result)

    start = (moved.x, moved.y)
    # Clamping can shift the widget onto a neighbour, so push down again after it
    while True:
        _push_down(moved, order)
        if not _clamp_moved(moved, cols):
            break

    passes = _compact(order)
    logger.debug(
        f"Resolved widget {moved_id}: {start} -> ({moved.x}, {moved.y}), "
        f"{len(result)} widgets compacted in {passes} passes"
    )
    return result


def move(
    items: Sequence[GridItem], item_id: str, x: int, y: int, cols: int
) -> List[GridItem]:
    """Move a widget to the candidate cell ``(x, y)`` and resolve the layout."""
    _check_cols(cols)
    index = _index_of(items, item_id)
    target = items[index]
    candidate = target.model_copy(
        update={"x": _clamp_x(x, target.w, cols), "y": max(0, y)}
    )
    staged = list(items)
    staged[index] = candidate
    return resolve(staged, item_id, cols)


def resize(
    items: Sequence[GridItem], item_id: str, w: int, h: int, cols: int
) -> List[GridItem]:
    """Resize a widget in place and resolve the layout.

    Width is clamped to ``[1, cols]`` and height to at least 1.
    """
    _check_cols(cols)
    index = _index_of(items, item_id)
    candidate = items[index].model_copy(
        update={"w": max(1, min(cols, w)), "h": max(1, h)}
    )
    staged = list(items)
    staged[index] = candidate
    return resolve(staged, item_id, cols)


def nudge(
    items: Sequence[GridItem],
    item_id: str,
    cols: int,
    dx: int = 0,
    dy: int = 0,
    dw: int = 0,
    dh: int = 0,
) -> List[GridItem]:
    """Apply a relative move and/or resize, as arrow-key handling does.

    The move is applied before the resize. With all deltas zero the layout is
    returned unchanged (as copies).
    """
    _check_cols(cols)
    _index_of(items, item_id)

    result = [item.model_copy(deep=True) for item in items]
    if dx or dy:
        current = result[_index_of(result, item_id)]
        result = move(result, item_id, current.x + dx, current.y + dy, cols)
    if dw or dh:
        current = result[_index_of(result, item_id)]
        result = resize(result, item_id, current.w + dw, current.h + dh, cols)
    return result
