"""Planner configuration."""

from .settings import PlannerSettings, SettingsLoader

__all__ = ["PlannerSettings", "SettingsLoader"]
