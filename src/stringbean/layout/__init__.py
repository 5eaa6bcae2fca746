"""Anchor layouts for thread art frames."""

from .anchors import ANCHOR_SHAPES, Point, circle_anchors, layout_anchors, rectangle_anchors

__all__ = ["ANCHOR_SHAPES", "Point", "circle_anchors", "rectangle_anchors", "layout_anchors"]
