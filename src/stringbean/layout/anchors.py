"""Anchor point placement along the frame of a thread art piece.

Anchors are returned in image coordinates where:
- X: 0 = left edge, grows to the right
- Y: 0 = top edge, grows downwards
"""

import math
from numbers import Integral, Real
from typing import Callable

from ..errors import InvalidArgument

Point = tuple[float, float]


def _check_count(count: int) -> None:
    if isinstance(count, bool) or not isinstance(count, Integral):
        raise InvalidArgument(f"Anchor count must be an integer, got {count!r}")
    if count < 0:
        raise InvalidArgument(f"Anchor count must be non-negative, got {count}")


def _check_finite(name: str, value: float) -> None:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidArgument(f"{name} must be a real number, got {value!r}")
    if not math.isfinite(value):
        raise InvalidArgument(f"{name} must be finite, got {value!r}")


def circle_anchors(count: int, width: float, height: float, radius: float) -> list[Point]:
    """Compute anchors evenly spaced around a circle.

    The circle is centered in the (width, height) box. The first anchor sits at
    angle 0, the rightmost point of the circle, and each following anchor is
    2*pi/count further around.

    Args:
        count: Number of anchors to produce
        width: Width of the bounding box
        height: Height of the bounding box
        radius: Circle radius

    Returns:
        List of (x, y) anchor positions

    Raises:
        InvalidArgument: If count is not a non-negative integer or a size is not finite
    """
    _check_count(count)
    _check_finite("width", width)
    _check_finite("height", height)
    _check_finite("radius", radius)

    x_mid = width / 2
    y_mid = height / 2

    anchors = []
    for anchor in range(count):
        angle = anchor * 2 * math.pi / count
        anchors.append((
            x_mid + radius * math.cos(angle),
            y_mid + radius * math.sin(angle),
        ))
    return anchors


def rectangle_anchors(count: int, width: float, height: float) -> list[Point]:
    """Compute anchors evenly spaced along a rectangle perimeter.

    Starts in the top left corner and walks clockwise (top, right, bottom,
    left) placing anchors at equal arc-length intervals. A count of zero
    returns no anchors, matching circle_anchors.

    Args:
        count: Number of anchors to produce
        width: Rectangle width, spanning x = 0 to x = width
        height: Rectangle height, spanning y = 0 to y = height

    Returns:
        List of (x, y) anchor positions, the first always (0, 0)

    Raises:
        InvalidArgument: If count is not a non-negative integer or a size is not finite
    """
    _check_count(count)
    _check_finite("width", width)
    _check_finite("height", height)

    if count == 0:
        return []

    anchors: list[Point] = [(0.0, 0.0)]

    total_length = width * 2 + height * 2
    gap_length = total_length / count

    current_length = 0.0
    for _ in range(1, count):
        current_length += gap_length

        if current_length < width:
            # Top edge, left to right
            anchors.append((current_length, 0.0))
        elif current_length < width + height:
            # Right edge, top to bottom
            anchors.append((width, current_length - width))
        elif current_length < width * 2 + height:
            # Bottom edge, right to left
            anchors.append((2 * width - (current_length - height), height))
        else:
            # Left edge, bottom to top
            anchors.append((0.0, height + 2 * width - (current_length - height)))

    return anchors


def _fitted_circle_anchors(
    count: int,
    width: float,
    height: float,
    radius: float | None = None,
) -> list[Point]:
    """Circle anchors with the radius clamped to fit inside the box."""
    _check_finite("width", width)
    _check_finite("height", height)
    max_radius = min(width, height) / 2
    if radius is None:
        radius = max_radius
    else:
        _check_finite("radius", radius)
        radius = min(radius, max_radius)
    return circle_anchors(count, width, height, radius)


def _rectangle_layout(
    count: int,
    width: float,
    height: float,
    radius: float | None = None,
) -> list[Point]:
    return rectangle_anchors(count, width, height)


# Registry of anchor layouts by shape name
ANCHOR_SHAPES: dict[str, Callable[..., list[Point]]] = {
    "circle": _fitted_circle_anchors,
    "rectangle": _rectangle_layout,
}


def layout_anchors(
    shape: str,
    count: int,
    width: float,
    height: float,
    radius: float | None = None,
) -> list[Point]:
    """Lay out anchors for a named frame shape.

    Args:
        shape: Shape name, one of ANCHOR_SHAPES
        count: Number of anchors
        width: Frame width
        height: Frame height
        radius: Circle radius; None or anything too large fits the circle
            to the frame. Ignored for rectangles.

    Returns:
        List of (x, y) anchor positions

    Raises:
        InvalidArgument: If the shape is unknown or any argument is invalid
    """
    layout = ANCHOR_SHAPES.get(shape)
    if layout is None:
        raise InvalidArgument(
            f"Unknown anchor shape: {shape!r} (expected one of {sorted(ANCHOR_SHAPES)})"
        )
    return layout(count, width, height, radius)
