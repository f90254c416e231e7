import pytest

from pillsplit_core.config import SplitterConfig
from pillsplit_core.geometry import (
    SplitKind,
    decide_split,
    draft_rect,
    hit_test,
    split_shape,
    split_shapes,
)
from pillsplit_core.shapes import CornerStyle, total_area

from conftest import make_shape


def _rect(shape):
    return (shape.x, shape.y, shape.width, shape.height)


def _overlap(a, b):
    ax0, ay0, ax1, ay1 = a.bounds()
    bx0, by0, bx1, by1 = b.bounds()
    w = min(ax1, bx1) - max(ax0, bx0)
    h = min(ay1, by1) - max(ay0, by0)
    return max(0.0, w) * max(0.0, h)


# ---------------------------------------------------------------------------
# Draft sizing


def test_draft_rect_spans_start_and_pointer():
    assert draft_rect((100, 100), (300, 250)) == (100, 100, 200, 150)


def test_draft_rect_handles_pointer_above_left_of_start():
    assert draft_rect((300, 250), (100, 100)) == (100, 100, 200, 150)


def test_draft_rect_pins_short_axis_to_min_size():
    assert draft_rect((100, 100), (90, 300)) == (90, 100, 40, 200)
    assert draft_rect((100, 100), (100, 100)) == (100, 100, 40, 40)


def test_draft_rect_uses_configured_min_size():
    config = SplitterConfig(min_size=64)
    assert draft_rect((0, 0), (10, 10), config) == (0, 0, 64, 64)


def test_draft_rect_stops_at_surface_edge():
    assert draft_rect((50, 50), (-30, 120)) == (0, 50, 50, 70)
    assert draft_rect((-5, 5), (-5, 5)) == (0, 5, 40, 40)


# ---------------------------------------------------------------------------
# Split decision table


def test_four_way_split_at_center(ids):
    shape = make_shape(0, 0, 0, 100, 100)
    kind, result = split_shape(shape, (50, 50), ids)

    assert kind is SplitKind.FOUR_WAY
    assert [_rect(s) for s in result] == [
        (0, 0, 50, 50),
        (50, 0, 50, 50),
        (0, 50, 50, 50),
        (50, 50, 50, 50),
    ]
    assert [s.id for s in result] == [100, 101, 102, 103]
    assert all(s.color == shape.color for s in result)
    assert [s.corners for s in result] == [
        CornerStyle(20, 0, 0, 0),
        CornerStyle(0, 20, 0, 0),
        CornerStyle(0, 0, 0, 20),
        CornerStyle(0, 0, 20, 0),
    ]


def test_near_left_edge_splits_horizontally(ids):
    kind, result = split_shape(make_shape(), (5, 50), ids)

    assert kind is SplitKind.HORIZONTAL
    assert [_rect(s) for s in result] == [(0, 0, 100, 50), (0, 50, 100, 50)]
    assert result[0].corners == CornerStyle.only("top_left", "top_right")
    assert result[1].corners == CornerStyle.only("bottom_left", "bottom_right")


def test_near_top_edge_splits_vertically(ids):
    kind, result = split_shape(make_shape(), (30, 5), ids)

    assert kind is SplitKind.VERTICAL
    assert [_rect(s) for s in result] == [(0, 0, 30, 100), (30, 0, 70, 100)]
    assert result[0].corners.css() == "20px 0 0 20px"
    assert result[1].corners.css() == "0 20px 20px 0"


def test_corner_click_nudges_shape(ids):
    shape = make_shape(7)
    kind, result = split_shape(shape, (5, 5), ids)

    assert kind is SplitKind.NUDGE
    (nudged,) = result
    assert (nudged.x, nudged.y) == (15, 15)
    assert nudged.size == (100, 100)
    assert nudged.id != shape.id
    assert nudged.color == shape.color
    assert nudged.corners == CornerStyle.uniform()


def test_click_outside_both_bands_leaves_shape_untouched(ids):
    shape = make_shape(3, 10, 10, 50, 50)
    kind, result = split_shape(shape, (200, 200), ids)

    assert kind is SplitKind.NONE
    assert result == (shape,)
    assert result[0] is shape


@pytest.mark.parametrize(
    "offset, expected",
    [
        (19, SplitKind.HORIZONTAL),
        (20, SplitKind.FOUR_WAY),
        (80, SplitKind.FOUR_WAY),
        (81, SplitKind.HORIZONTAL),
    ],
)
def test_split_margin_boundary(ids, offset, expected):
    kind, _ = split_shape(make_shape(), (offset, 50), ids)
    assert kind is expected


def test_click_in_vertical_band_outside_shape_still_splits(ids):
    kind, result = split_shape(make_shape(), (50, 300), ids)

    assert kind is SplitKind.VERTICAL
    assert [_rect(s) for s in result] == [(0, 0, 50, 100), (50, 0, 50, 100)]


def test_band_nudge_moves_only_the_intersecting_axis(ids):
    shape = make_shape(0, 100, 100, 100, 100)

    _, (right,) = split_shape(shape, (105, 500), ids)
    assert (right.x, right.y) == (115, 100)

    _, (left,) = split_shape(shape, (195, 500), ids)
    assert (left.x, left.y) == (85, 100)


def test_nudge_is_clamped_at_surface_origin(ids):
    _, (nudged,) = split_shape(make_shape(), (95, 500), ids)
    assert nudged.x == 0


def test_edge_click_on_boundary_counts_as_intersecting():
    decision = decide_split(make_shape(0, 10, 10, 100, 100), (110, 400))
    assert decision.intersects_v
    assert not decision.intersects_h
    assert decision.split_x == 100
    assert decision.kind is SplitKind.NUDGE


@pytest.mark.parametrize("click", [(50, 50), (25, 70), (30, 5), (5, 60), (64.5, 33.25)])
def test_splits_partition_the_original(ids, click):
    shape = make_shape(0, 12, 8, 100, 90)
    kind, result = split_shape(shape, (shape.x + click[0], shape.y + click[1]), ids)

    assert kind in (SplitKind.FOUR_WAY, SplitKind.VERTICAL, SplitKind.HORIZONTAL)
    assert total_area(result) == pytest.approx(shape.area)
    for i, a in enumerate(result):
        for b in result[i + 1:]:
            assert _overlap(a, b) == 0
        x0, y0, x1, y1 = a.bounds()
        assert x0 >= shape.x and y0 >= shape.y
        assert x1 <= shape.x + shape.width and y1 <= shape.y + shape.height


def test_split_shapes_evaluates_every_shape_against_original_click(ids):
    first = make_shape(0, 0, 0, 100, 100)
    untouched = make_shape(1, 500, 500, 60, 60)
    second = make_shape(2, 0, 200, 100, 100)

    result = split_shapes([first, untouched, second], (50, 250), ids)

    # first is only in the vertical band; second contains the click
    assert [_rect(s) for s in result] == [
        (0, 0, 50, 100),
        (50, 0, 50, 100),
        (500, 500, 60, 60),
        (0, 200, 50, 50),
        (50, 200, 50, 50),
        (0, 250, 50, 50),
        (50, 250, 50, 50),
    ]
    assert result[2] is untouched
    new_ids = [s.id for s in result if s is not untouched]
    assert new_ids == sorted(new_ids)
    assert 0 not in new_ids and 2 not in new_ids


def test_split_shapes_does_not_mutate_input(ids):
    shapes = [make_shape()]
    split_shapes(shapes, (50, 50), ids)
    assert shapes == [make_shape()]


def test_custom_margin_changes_decision(ids):
    config = SplitterConfig(split_margin=30)
    kind, _ = split_shape(make_shape(), (25, 50), ids, config)
    assert kind is SplitKind.HORIZONTAL


# ---------------------------------------------------------------------------
# Hit testing


def test_hit_test_returns_topmost_shape():
    shapes = [make_shape(0, 0, 0, 100, 100), make_shape(1, 50, 50, 100, 100)]
    assert hit_test(shapes, (75, 75)) == 1
    assert hit_test(shapes, (10, 10)) == 0
    assert hit_test(shapes, (300, 300)) is None


def test_hit_test_bounds_are_half_open():
    shapes = [make_shape(0, 0, 0, 50, 100), make_shape(1, 50, 0, 50, 100)]
    assert hit_test(shapes, (50, 10)) == 1
    assert hit_test(shapes, (0, 0)) == 0
    assert hit_test(shapes, (100, 10)) is None


def test_hit_test_on_empty_collection():
    assert hit_test([], (1, 1)) is None
