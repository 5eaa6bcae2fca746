"""Core thread planning components."""

from .raytrace import grid_raytrace
from .strategies import CountTracker, LossTracker, PlanningStrategy
from .planner import ThreadPlanner, plan_moves

__all__ = [
    "grid_raytrace",
    "PlanningStrategy",
    "CountTracker",
    "LossTracker",
    "ThreadPlanner",
    "plan_moves",
]
