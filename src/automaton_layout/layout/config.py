"""Tunable layout parameters."""

from collections.abc import Mapping
from dataclasses import dataclass, fields

STATE_RADIUS = 30.0
FINAL_STATE_OUTER_RADIUS = STATE_RADIUS + 8
MIN_STATE_DISTANCE = STATE_RADIUS * 2.5


@dataclass
class LayoutConfig:
    """Geometry constants and thresholds used by every layout stage.

    The thresholds are empirical; they are kept configurable rather than derived.
    """

    state_radius: float = STATE_RADIUS
    final_state_outer_radius: float = FINAL_STATE_OUTER_RADIUS
    min_separation: float = MIN_STATE_DISTANCE
    ring_factor: float = 2.0  # base ring radius in units of min_separation
    initial_offset: float = 200.0  # initial state sits this far left of centre
    jitter_fraction: float = 0.25
    max_iterations: int = 100
    collision_factor: float = 1.2
    initial_clearance_factor: float = 1.5
    bow_offset: float = 20.0
    curve_offset: float = 50.0
    self_loop_factor: float = 1.5
    label_offset: float = 20.0
    seed: int | None = None

    @property
    def base_radius(self) -> float:
        return self.min_separation * self.ring_factor

    @property
    def initial_anchor(self) -> tuple[float, float]:
        return (-self.initial_offset, 0.0)

    @classmethod
    def from_mapping(cls, mapping: Mapping | None) -> "LayoutConfig":
        """Build a config from a YAML-style mapping.

        Keys may use hyphens (``min-separation``) or underscores.

        Raises:
            ValueError: On unknown keys.
        """
        if not mapping:
            return cls()

        known = {f.name for f in fields(cls)}
        values = {}
        for key, value in mapping.items():
            name = str(key).replace("-", "_")
            if name not in known:
                raise ValueError(f"Unknown layout option: {key}")
            values[name] = value
        return cls(**values)
