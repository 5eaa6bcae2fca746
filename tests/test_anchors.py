"""Tests for circle and rectangle anchor layouts."""

import math

import numpy as np
import pytest

from stringbean.errors import InvalidArgument
from stringbean.layout import circle_anchors, layout_anchors, rectangle_anchors


def _perimeter_position(point, width, height):
    """Clockwise distance from (0, 0) along the rectangle boundary."""
    x, y = point
    if y == 0:
        return x
    if x == width:
        return width + y
    if y == height:
        return width + height + (width - x)
    return 2 * width + height + (height - y)


def test_circle_anchors_quarters():
    """Four anchors land on the right, bottom, left and top of the circle."""
    anchors = circle_anchors(4, 10, 10, 5)
    expected = [(10, 5), (5, 10), (0, 5), (5, 0)]

    assert len(anchors) == 4
    for actual, target in zip(anchors, expected):
        assert actual == pytest.approx(target, abs=1e-9)


@pytest.mark.parametrize("count", [1, 2, 3, 7, 288])
@pytest.mark.parametrize("width,height,radius", [(10, 10, 5), (200, 100, 40), (3.5, 8.0, 12.25)])
def test_circle_anchors_on_circle(count, width, height, radius):
    """Every anchor is radius away from the box center."""
    anchors = circle_anchors(count, width, height, radius)
    cx, cy = width / 2, height / 2

    assert len(anchors) == count
    for x, y in anchors:
        assert math.hypot(x - cx, y - cy) == pytest.approx(radius, rel=1e-9)


@pytest.mark.parametrize("count", [1, 5, 12, 360])
def test_circle_anchors_evenly_spaced(count):
    """Anchors start at angle 0 and advance by 2*pi/count."""
    anchors = circle_anchors(count, 100, 60, 25)
    cx, cy = 50, 30
    step = 2 * math.pi / count

    assert anchors[0] == pytest.approx((cx + 25, cy), abs=1e-9)

    angles = [math.atan2(y - cy, x - cx) for x, y in anchors]
    for previous, current in zip(angles, angles[1:]):
        delta = (current - previous) % (2 * math.pi)
        assert delta == pytest.approx(step, abs=1e-9)


def test_zero_anchors_is_empty():
    assert circle_anchors(0, 10, 10, 5) == []
    assert rectangle_anchors(0, 10, 10) == []


def test_rectangle_anchors_corners():
    """A square with four anchors gets one anchor per corner."""
    assert rectangle_anchors(4, 10, 10) == [(0, 0), (10, 0), (10, 10), (0, 10)]


def test_rectangle_single_anchor():
    assert rectangle_anchors(1, 30, 20) == [(0, 0)]


@pytest.mark.parametrize("count", [1, 2, 3, 4, 7, 13, 100])
@pytest.mark.parametrize("width,height", [(10, 10), (30, 20), (5.5, 40.25), (0, 10), (10, 0)])
def test_rectangle_anchors_on_boundary(count, width, height):
    """Every anchor lies on the rectangle edge."""
    anchors = rectangle_anchors(count, width, height)

    assert len(anchors) == count
    assert anchors[0] == (0, 0)
    for x, y in anchors:
        assert -1e-9 <= x <= width + 1e-9
        assert -1e-9 <= y <= height + 1e-9
        on_vertical = math.isclose(x, 0, abs_tol=1e-9) or math.isclose(x, width, abs_tol=1e-9)
        on_horizontal = math.isclose(y, 0, abs_tol=1e-9) or math.isclose(y, height, abs_tol=1e-9)
        assert on_vertical or on_horizontal


@pytest.mark.parametrize("count", [3, 7, 10, 33])
def test_rectangle_anchors_equal_arc_length(count):
    """Anchors advance clockwise by perimeter / count."""
    width, height = 30, 20
    gap = (2 * width + 2 * height) / count
    anchors = rectangle_anchors(count, width, height)

    positions = [_perimeter_position(p, width, height) for p in anchors]
    for index, position in enumerate(positions):
        assert position == pytest.approx(index * gap, abs=1e-9)


def test_numpy_integer_count_accepted():
    assert len(circle_anchors(np.int64(6), 10, 10, 5)) == 6
    assert len(rectangle_anchors(np.int32(6), 10, 10)) == 6


@pytest.mark.parametrize("count", [-1, 2.5, 4.0, "3", None, True])
def test_invalid_count_rejected(count):
    with pytest.raises(InvalidArgument):
        circle_anchors(count, 10, 10, 5)
    with pytest.raises(InvalidArgument):
        rectangle_anchors(count, 10, 10)


@pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf, "10"])
def test_non_finite_sizes_rejected(bad):
    with pytest.raises(InvalidArgument):
        circle_anchors(4, bad, 10, 5)
    with pytest.raises(InvalidArgument):
        circle_anchors(4, 10, bad, 5)
    with pytest.raises(InvalidArgument):
        circle_anchors(4, 10, 10, bad)
    with pytest.raises(InvalidArgument):
        rectangle_anchors(4, bad, 10)
    with pytest.raises(InvalidArgument):
        rectangle_anchors(4, 10, bad)


def test_invalid_argument_is_value_error():
    with pytest.raises(ValueError):
        rectangle_anchors(-3, 10, 10)


def test_layout_circle_fits_frame_by_default():
    anchors = layout_anchors("circle", 4, 40, 20)

    assert anchors[0] == pytest.approx((30, 10), abs=1e-9)
    assert anchors[2] == pytest.approx((10, 10), abs=1e-9)


def test_layout_circle_clamps_radius():
    assert layout_anchors("circle", 8, 40, 20, radius=1000) == circle_anchors(8, 40, 20, 10)
    assert layout_anchors("circle", 8, 40, 20, radius=4) == circle_anchors(8, 40, 20, 4)


def test_layout_rectangle_ignores_radius():
    assert layout_anchors("rectangle", 6, 30, 20, radius=3) == rectangle_anchors(6, 30, 20)


def test_layout_unknown_shape():
    with pytest.raises(InvalidArgument, match="Unknown anchor shape"):
        layout_anchors("hexagon", 6, 30, 20)
