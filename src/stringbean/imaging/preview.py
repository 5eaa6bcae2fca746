"""Raster preview of a planned thread."""

from __future__ import annotations

import math
from typing import Sequence

from PIL import Image, ImageDraw

from ..errors import InvalidArgument
from ..layout.anchors import Point


def _line_box(src: Point, dst: Point, width: int, height: int) -> tuple[int, int, int, int]:
    """Pixel box covering a line, clipped to the canvas."""
    left = max(math.floor(min(src[0], dst[0])) - 1, 0)
    top = max(math.floor(min(src[1], dst[1])) - 1, 0)
    right = min(math.ceil(max(src[0], dst[0])) + 2, width)
    bottom = min(math.ceil(max(src[1], dst[1])) + 2, height)
    return left, top, right, bottom


def render_preview(
    moves: Sequence[int],
    anchors: Sequence[Point],
    width: int,
    height: int,
    line_opacity: float,
) -> Image.Image:
    """Draw the planned thread as black lines on a white canvas.

    Args:
        moves: Anchor indices visited by the thread
        anchors: Anchor positions in output coordinates
        width: Output width in pixels
        height: Output height in pixels
        line_opacity: Opacity of each line (0-1)

    Returns:
        PIL Image in L (grayscale) mode
    """
    if not 0.0 <= line_opacity <= 1.0:
        raise InvalidArgument(f"line opacity needs to be in the range [0, 1], got {line_opacity}")

    canvas = Image.new("RGBA", (width, height), (255, 255, 255, 255))
    alpha = round(255 * line_opacity)

    for src, dst in zip(moves, moves[1:]):
        start, end = anchors[src], anchors[dst]
        left, top, right, bottom = _line_box(start, end, width, height)
        if right <= left or bottom <= top:
            continue

        # Each line is composited on its own so overlapping lines accumulate
        layer = Image.new("RGBA", (right - left, bottom - top), (0, 0, 0, 0))
        ImageDraw.Draw(layer).line(
            [(start[0] - left, start[1] - top), (end[0] - left, end[1] - top)],
            fill=(0, 0, 0, alpha),
            width=1,
        )
        canvas.alpha_composite(layer, dest=(left, top))

    return canvas.convert("L")
