"""Thread art planning from grayscale images."""

from .errors import InvalidArgument, PlanningError, StringBeanError
from .layout import circle_anchors, layout_anchors, rectangle_anchors
from .core import CountTracker, LossTracker, PlanningStrategy, ThreadPlanner, grid_raytrace, plan_moves

__all__ = [
    "StringBeanError",
    "InvalidArgument",
    "PlanningError",
    "circle_anchors",
    "rectangle_anchors",
    "layout_anchors",
    "ThreadPlanner",
    "PlanningStrategy",
    "CountTracker",
    "LossTracker",
    "grid_raytrace",
    "plan_moves",
]
