import math

import pytest

from pendulum_trace import config
from pendulum_trace.geometry import (
    Dot,
    Segment,
    clip_to_canvas,
    distance,
    dot_outline,
    joint_positions,
    primitive_outline,
    segment_outline,
)


def test_joint_positions_at_zero_angle_hang_straight_down():
    (x1, y1), (x2, y2) = joint_positions(0.0, 0.0, 90.0, 60.0)
    assert x1 == pytest.approx(0.0, abs=1e-12)
    assert y1 == pytest.approx(90.0)
    assert x2 == pytest.approx(0.0, abs=1e-12)
    assert y2 == pytest.approx(150.0)


def test_joint_positions_quarter_turn():
    # -90 degrees swings the first arm onto +x
    (x1, y1), (x2, y2) = joint_positions(-math.pi / 2, 0.0, 50.0, 30.0)
    assert (x1, y1) == pytest.approx((50.0, 0.0), abs=1e-12)
    assert (x2, y2) == pytest.approx((50.0, 30.0), abs=1e-12)


def test_zero_length_arms_collapse_to_pivot():
    j1, j2 = joint_positions(1.3, -0.4, 0.0, 0.0)
    assert j1 == pytest.approx((0.0, 0.0))
    assert j2 == pytest.approx((0.0, 0.0))


def test_distance():
    assert distance((0.0, 0.0), (3.0, 4.0)) == pytest.approx(5.0)
    assert distance((1.0, 1.0), (1.0, 1.0)) == 0.0


def test_segment_outline_is_rectangle_of_stroke_width():
    outline = segment_outline((0.0, 0.0), (10.0, 0.0), 2.0)
    flat = [c for point in outline for c in point]
    assert flat == pytest.approx([0.0, 1.0, 10.0, 1.0, 10.0, -1.0, 0.0, -1.0])


def test_segment_outline_degenerate_segment():
    outline = segment_outline((2.0, 2.0), (2.0, 2.0), 1.0)
    assert len(outline) == 4
    assert all(p == (2.0, 2.0) for p in outline)


def test_dot_outline_is_ring_of_thin_stroke():
    outline = dot_outline((5.0, -5.0), 3.0)
    n = config.DOT_OUTLINE_SEGMENTS
    assert len(outline) == 2 * n + 2
    outer = 1.5 + 0.5 * config.DOT_STROKE
    inner = 1.5 - 0.5 * config.DOT_STROKE
    for x, y in outline[: n + 1]:
        assert distance((x, y), (5.0, -5.0)) == pytest.approx(outer)
    for x, y in outline[n + 1:]:
        assert distance((x, y), (5.0, -5.0)) == pytest.approx(inner)


def test_dot_no_wider_than_the_pen_has_no_hole():
    outline = dot_outline((0.0, 0.0), config.DOT_STROKE)
    assert len(outline) == config.DOT_OUTLINE_SEGMENTS
    for point in outline:
        assert distance(point, (0.0, 0.0)) == pytest.approx(config.DOT_STROKE)


def test_clip_to_canvas_keeps_inside_polygon_unchanged():
    polygon = ((-1.0, -1.0), (1.0, -1.0), (1.0, 1.0), (-1.0, 1.0))
    assert clip_to_canvas(polygon, (20.0, 10.0)) == polygon


def test_clip_to_canvas_drops_polygon_outside():
    polygon = ((30.0, 0.0), (40.0, 0.0), (40.0, 1.0))
    assert clip_to_canvas(polygon, (20.0, 10.0)) == ()


def test_stroke_crossing_canvas_edge_keeps_its_centreline():
    outline = primitive_outline(Segment(start=(0.0, 0.0), end=(100.0, 10.0), width=1.0), (100.0, 100.0))
    for x, y in outline:
        assert -50.0 <= x <= 50.0
        assert -50.0 <= y <= 50.0
    edge = [y for x, y in outline if x == pytest.approx(50.0)]
    assert len(edge) == 2
    # the stroke meets the edge where its centreline does: y = 10 * 50 / 100
    assert sum(edge) / 2 == pytest.approx(5.0)
    assert abs(edge[0] - edge[1]) == pytest.approx(1.0, rel=0.01)


def test_primitive_outline_dispatch():
    seg = primitive_outline(Segment(start=(0.0, 0.0), end=(0.0, 10.0), width=1.0), (100.0, 100.0))
    dot = primitive_outline(Dot(center=(0.0, 0.0), diameter=1.0), (100.0, 100.0))
    assert len(seg) == 4
    assert len(dot) == config.DOT_OUTLINE_SEGMENTS


def test_primitive_outline_rejects_unknown_type():
    with pytest.raises(TypeError):
        primitive_outline(((0.0, 0.0), (1.0, 1.0)), (10.0, 10.0))
