"""Unit tests for the grid collision and compaction engine."""

import random
import time

import pytest

from portalgrid.core.errors import InvalidConfigurationError, NotFoundError
from portalgrid.core.grid import collides, compact, move, nudge, resize, resolve
from portalgrid.schemas.portal import GridItem

COLS = 12


def by_id(items):
    return {item.id: item for item in items}


def assert_valid_layout(items, cols):
    """Check overlap, boundary and gravity invariants of a resolved layout."""
    for item in items:
        assert item.w >= 1 and item.h >= 1
        assert item.x >= 0 and item.y >= 0
        assert item.x + item.w <= cols

    for i, a in enumerate(items):
        for b in items[i + 1 :]:
            assert not collides(a, b), f"{a.id} overlaps {b.id}"

    for item in items:
        if item.y == 0:
            continue
        raised = item.model_copy(update={"y": item.y - 1})
        assert any(
            collides(raised, other) for other in items if other.id != item.id
        ), f"{item.id} could still rise from y={item.y}"


@pytest.mark.unit
class TestCollides:
    def test_overlapping_rectangles(self):
        a = GridItem(id="a", x=0, y=0, w=4, h=2)
        b = GridItem(id="b", x=3, y=1, w=2, h=2)
        assert collides(a, b)
        assert collides(b, a)

    def test_touching_edges_do_not_collide(self):
        a = GridItem(id="a", x=0, y=0, w=4, h=2)
        right = GridItem(id="right", x=4, y=0, w=2, h=2)
        below = GridItem(id="below", x=0, y=2, w=4, h=1)
        assert not collides(a, right)
        assert not collides(a, below)
        assert not collides(below, a)

    def test_disjoint_rectangles(self):
        a = GridItem(id="a", x=0, y=0, w=1, h=1)
        b = GridItem(id="b", x=5, y=5, w=1, h=1)
        assert not collides(a, b)

    def test_containment_collides(self):
        outer = GridItem(id="outer", x=0, y=0, w=6, h=6)
        inner = GridItem(id="inner", x=2, y=2, w=1, h=1)
        assert collides(outer, inner)
        assert collides(inner, outer)


@pytest.mark.unit
class TestMove:
    def test_move_into_neighbour_is_pushed_below_and_compacted(self, stacked_pair):
        result = by_id(move(stacked_pair, "W1", 0, 1, COLS))

        assert result["W2"].y == 0
        assert result["W1"].y == 2
        assert result["W1"].x == 0

    def test_move_to_negative_coordinates_clamps_to_origin(self):
        items = [GridItem(id="solo", x=4, y=3, w=2, h=2)]

        result = move(items, "solo", -3, -5, COLS)

        assert (result[0].x, result[0].y) == (0, 0)

    def test_move_past_right_edge_clamps_x(self):
        items = [GridItem(id="solo", x=0, y=0, w=4, h=1)]

        result = move(items, "solo", 20, 0, COLS)

        assert result[0].x == COLS - 4

    def test_move_to_free_column_floats_to_top(self, stacked_pair):
        result = by_id(move(stacked_pair, "W2", 6, 7, COLS))

        assert (result["W2"].x, result["W2"].y) == (6, 0)
        assert (result["W1"].x, result["W1"].y) == (0, 0)

    def test_unknown_id_raises_not_found(self, stacked_pair):
        with pytest.raises(NotFoundError) as exc_info:
            move(stacked_pair, "Wx", 5, 5, COLS)

        assert exc_info.value.status_code == 404
        assert exc_info.value.message == "Widget not found: Wx"

    def test_zero_columns_is_invalid(self, stacked_pair):
        with pytest.raises(InvalidConfigurationError):
            move(stacked_pair, "W1", 0, 0, 0)

    def test_inputs_are_not_mutated(self, stacked_pair):
        before = [item.model_dump() for item in stacked_pair]

        result = move(stacked_pair, "W1", 0, 1, COLS)

        assert [item.model_dump() for item in stacked_pair] == before
        assert all(
            new is not old for new, old in zip(result, stacked_pair, strict=True)
        )

    def test_payload_is_carried_through(self):
        items = [
            GridItem(id="chart", key="chart", x=0, y=0, w=3, h=3, props={"q": [1]}),
            GridItem(id="list", key="list", x=3, y=0, w=3, h=3),
        ]

        result = by_id(move(items, "chart", 3, 0, COLS))

        assert result["chart"].key == "chart"
        assert result["chart"].props == {"q": [1]}
        assert result["chart"].props is not items[0].props

    def test_result_keeps_input_order(self, stacked_pair):
        result = move(stacked_pair, "W1", 0, 1, COLS)

        assert [item.id for item in result] == ["W1", "W2"]

    def test_far_drop_settles_on_neighbour_quickly(self, stacked_pair):
        started = time.monotonic()

        result = by_id(move(stacked_pair, "W1", 0, 10**9, COLS))

        assert time.monotonic() - started < 2
        assert result["W2"].y == 0
        assert result["W1"].y == 2

    def test_far_drop_of_lone_widget_lands_on_top_row(self):
        items = [GridItem(id="solo", x=3, y=0, w=2, h=2)]
        started = time.monotonic()

        result = move(items, "solo", 3, 10**9, COLS)

        assert time.monotonic() - started < 2
        assert (result[0].x, result[0].y) == (3, 0)


@pytest.mark.unit
class TestResize:
    def test_width_is_clamped_to_column_count(self, stacked_pair):
        result = by_id(resize(stacked_pair, "W1", 20, 2, COLS))

        assert result["W1"].w == COLS
        assert result["W1"].x == 0
        assert_valid_layout(list(result.values()), COLS)

    def test_non_positive_size_is_clamped_to_one(self, stacked_pair):
        result = by_id(resize(stacked_pair, "W1", 0, -4, COLS))

        assert (result["W1"].w, result["W1"].h) == (1, 1)
        # W2 rises to rest on the shrunken W1
        assert result["W2"].y == 1

    def test_growing_near_right_edge_shifts_left(self):
        items = [GridItem(id="edge", x=10, y=0, w=2, h=1)]

        result = resize(items, "edge", 5, 1, COLS)

        assert (result[0].x, result[0].w) == (7, 5)

    def test_growing_into_neighbour_moves_resized_widget_below(self, stacked_pair):
        result = by_id(resize(stacked_pair, "W1", 4, 3, COLS))

        assert result["W2"].y == 0
        assert result["W1"].y == 2
        assert result["W1"].h == 3

    def test_shift_after_clamp_does_not_overlap_neighbour(self):
        items = [
            GridItem(id="left", x=0, y=0, w=6, h=2),
            GridItem(id="right", x=6, y=0, w=2, h=2),
        ]

        result = by_id(resize(items, "right", 12, 2, COLS))

        assert result["right"].x == 0
        assert result["right"].y == 2
        assert_valid_layout(list(result.values()), COLS)

    def test_unknown_id_raises_not_found(self, stacked_pair):
        with pytest.raises(NotFoundError):
            resize(stacked_pair, "missing", 2, 2, COLS)


@pytest.mark.unit
class TestResolve:
    def test_resolve_is_idempotent(self, stacked_pair):
        first = move(stacked_pair, "W1", 0, 1, COLS)

        second = resolve(first, "W1", COLS)

        assert [item.model_dump() for item in second] == [
            item.model_dump() for item in first
        ]

    def test_resolve_is_deterministic(self):
        items = [
            GridItem(id="a", x=0, y=3, w=3, h=2),
            GridItem(id="b", x=2, y=0, w=4, h=1),
            GridItem(id="c", x=5, y=6, w=2, h=3),
            GridItem(id="d", x=0, y=9, w=12, h=1),
        ]

        runs = [
            [item.model_dump() for item in resolve(items, "b", COLS)]
            for _ in range(3)
        ]

        assert runs[0] == runs[1] == runs[2]

    def test_empty_rows_are_removed(self):
        items = [
            GridItem(id="top", x=0, y=4, w=2, h=1),
            GridItem(id="low", x=0, y=9, w=2, h=2),
        ]

        result = by_id(resolve(items, "top", COLS))

        assert result["top"].y == 0
        assert result["low"].y == 1

    def test_widget_wider_than_grid_overhangs_at_origin(self):
        items = [GridItem(id="wide", x=3, y=0, w=15, h=1)]

        result = resolve(items, "wide", COLS)

        assert (result[0].x, result[0].w) == (0, 15)

    def test_moved_onto_identical_position_lands_below(self):
        # Same (y, x): the moved widget is pushed under the one already there,
        # regardless of which comes first in the input array.
        anchor = GridItem(id="anchor", x=2, y=0, w=3, h=2)
        dropped = GridItem(id="dropped", x=2, y=0, w=3, h=1)

        for items in ([anchor, dropped], [dropped, anchor]):
            result = by_id(resolve(items, "dropped", COLS))
            assert (result["anchor"].x, result["anchor"].y) == (2, 0)
            assert (result["dropped"].x, result["dropped"].y) == (2, 2)

    def test_negative_y_on_resolve_is_clamped_before_settling(self):
        items = [
            GridItem(id="base", x=0, y=0, w=4, h=2),
            GridItem(id="floating", x=0, y=-5, w=4, h=1),
        ]

        result = by_id(resolve(items, "floating", COLS))

        assert result["base"].y == 0
        assert result["floating"].y == 2

    def test_unknown_id_raises_not_found(self, stacked_pair):
        with pytest.raises(NotFoundError):
            resolve(stacked_pair, "nope", COLS)

    def test_zero_columns_is_invalid(self, stacked_pair):
        with pytest.raises(InvalidConfigurationError) as exc_info:
            resolve(stacked_pair, "W1", 0)

        assert exc_info.value.status_code == 422


@pytest.mark.unit
class TestNudge:
    def test_arrow_move(self, stacked_pair):
        result = by_id(nudge(stacked_pair, "W1", COLS, dx=1))

        assert (result["W1"].x, result["W1"].y) == (1, 0)

    def test_arrow_left_at_edge_stays_in_grid(self, stacked_pair):
        result = by_id(nudge(stacked_pair, "W1", COLS, dx=-1))

        assert result["W1"].x == 0

    def test_shift_arrow_resize(self, stacked_pair):
        result = by_id(nudge(stacked_pair, "W1", COLS, dw=1, dh=1))

        assert (result["W1"].w, result["W1"].h) == (5, 3)
        assert result["W1"].y == 2
        assert result["W2"].y == 0

    def test_no_delta_returns_copies(self, stacked_pair):
        result = nudge(stacked_pair, "W1", COLS)

        assert [item.model_dump() for item in result] == [
            item.model_dump() for item in stacked_pair
        ]
        assert result[0] is not stacked_pair[0]

    def test_unknown_id_raises_even_without_delta(self, stacked_pair):
        with pytest.raises(NotFoundError):
            nudge(stacked_pair, "ghost", COLS)


@pytest.mark.unit
class TestCompact:
    def test_closes_gap_after_removal(self):
        items = [
            GridItem(id="a", x=0, y=0, w=4, h=1),
            GridItem(id="c", x=0, y=3, w=4, h=1),
        ]

        result = by_id(compact(items, COLS))

        assert result["a"].y == 0
        assert result["c"].y == 1

    def test_distant_widgets_collapse_quickly(self):
        items = [
            GridItem(id="a", x=0, y=10**9, w=4, h=1),
            GridItem(id="b", x=2, y=2 * 10**9, w=4, h=2),
        ]
        started = time.monotonic()

        result = by_id(compact(items, COLS))

        assert time.monotonic() - started < 2
        assert result["a"].y == 0
        assert result["b"].y == 1

    def test_empty_layout(self):
        assert compact([], COLS) == []

    def test_zero_columns_is_invalid(self):
        with pytest.raises(InvalidConfigurationError):
            compact([], 0)


@pytest.mark.unit
@pytest.mark.parametrize("seed", [1, 7, 42])
def test_random_edits_keep_layout_valid(seed):
    rng = random.Random(seed)
    cols = rng.choice([4, 6, 12])
    items = []

    for index in range(8):
        w = rng.randint(1, cols)
        bottom = max((item.y + item.h for item in items), default=0)
        widget = GridItem(
            id=f"w{index}",
            x=rng.randint(0, cols - w),
            y=bottom,
            w=w,
            h=rng.randint(1, 3),
        )
        items = resolve([*items, widget], widget.id, cols)
        assert_valid_layout(items, cols)

    for _ in range(40):
        target = rng.choice(items).id
        if rng.random() < 0.5:
            items = move(
                items, target, rng.randint(-3, cols + 3), rng.randint(-3, 15), cols
            )
        else:
            items = resize(
                items, target, rng.randint(-1, cols + 4), rng.randint(-1, 5), cols
            )
        assert_valid_layout(items, cols)
        assert sorted(item.id for item in items) == [f"w{i}" for i in range(8)]

        again = resolve(items, target, cols)
        assert [item.model_dump() for item in again] == [
            item.model_dump() for item in items
        ]
