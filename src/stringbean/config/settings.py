"""Planner settings and their YAML loader."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from pathlib import Path
from typing import Any, get_args, get_type_hints

import yaml

from ..core.strategies import CountTracker, LossTracker, PlanningStrategy


@dataclass
class PlannerSettings:
    """Settings for planning and exporting a thread art piece.

    Attributes:
        num_chords: Number of lines to plan (ignored when target_loss is set)
        line_opacity: Opacity of a single line, in [0, 1)
        num_anchors: Number of anchors around the frame
        anchor_gap: Anchors skipped on each side of the current one
        radius: Circle radius in image pixels, None fits the image
        penalty: Lightness penalty for over-darkened pixels
        output_width: Width of the exported drawing
        output_height: Height of the exported drawing
        shape: Frame shape, "circle" or "rectangle"
        start_anchor: Anchor index the thread starts at
        target_loss: Stop once the remaining loss drops below this value
        loss_wait: Initial number of steps between loss evaluations
    """

    num_chords: int = 500
    line_opacity: float = 0.2
    num_anchors: int = 288
    anchor_gap: int = 0
    radius: float | None = None
    penalty: float = 5.0
    output_width: int = 850
    output_height: int = 850
    shape: str = "circle"
    start_anchor: int = 0
    target_loss: float | None = None
    loss_wait: int = 100

    def merged(self, **overrides: Any) -> PlannerSettings:
        """Return a copy with every non-None override applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return dataclasses.replace(self, **changes)

    def strategy(self) -> PlanningStrategy:
        """Create the stopping strategy these settings describe."""
        if self.target_loss is not None:
            return LossTracker(wait=self.loss_wait, target_loss=self.target_loss)
        return CountTracker(self.num_chords)


class SettingsLoader:
    """Loads planner settings from YAML files.

    YAML format (every key optional):
    ```yaml
    num_chords: 3000
    line_opacity: 0.15
    num_anchors: 288
    anchor_gap: 28
    penalty: 100.0
    shape: circle
    output_width: 850
    output_height: 850
    ```
    """

    def __init__(self, defaults: PlannerSettings | None = None) -> None:
        self.defaults = defaults if defaults is not None else PlannerSettings()

    def load(self, path: str | Path) -> PlannerSettings:
        """Load settings from a YAML file on top of the defaults.

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the YAML is not a mapping or has unknown keys
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Settings file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        return self.parse(data)

    def parse(self, data: Any) -> PlannerSettings:
        """Build settings from parsed YAML data."""
        if data is None:
            return self.defaults
        if not isinstance(data, dict):
            raise ValueError(f"Settings must be a mapping, got {type(data).__name__}")

        known = {f.name for f in dataclasses.fields(PlannerSettings)}
        unknown = sorted(str(key) for key in set(data) - known)
        if unknown:
            raise ValueError(f"Unknown settings: {', '.join(unknown)}")

        hints = get_type_hints(PlannerSettings)
        values = {key: _check_value(key, value, hints[key]) for key, value in data.items()}
        return dataclasses.replace(self.defaults, **values)


def _check_value(key: str, value: Any, hint: Any) -> Any:
    """Check a YAML value against the declared settings type."""
    allowed = get_args(hint) or (hint,)
    if value is None and type(None) in allowed:
        return None
    if isinstance(value, bool):
        # YAML yes/no parse as bool, which is never a valid setting
        pass
    elif int in allowed and isinstance(value, int):
        return value
    elif float in allowed and isinstance(value, (int, float)):
        return float(value)
    elif str in allowed and isinstance(value, str):
        return value

    expected = " or ".join("null" if t is type(None) else t.__name__ for t in allowed)
    raise ValueError(f"Setting '{key}' must be {expected}, got {value!r}")
