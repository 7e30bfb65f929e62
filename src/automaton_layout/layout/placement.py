"""Angular placement of states on concentric rings around the initial state."""

import math
import random

from ..graph import Automaton
from .config import LayoutConfig
from .geometry import Point, polar

# Compass directions tried, in order, for states one transition away from
# the initial state.
PREFERRED_ANGLES = [
    0.0,
    math.pi / 4,
    -math.pi / 4,
    math.pi / 2,
    -math.pi / 2,
    3 * math.pi / 4,
    -3 * math.pi / 4,
    math.pi,
]

FAN_ARC = 1.5 * math.pi  # -135 to +135 degrees
MAX_ANGLE_STEP = math.pi / 4


def importance_key(
    automaton: Automaton,
    name: str,
    direct: set[str],
    degrees: dict[str, int],
) -> tuple[int, int, int]:
    """Sort key, most important state first.

    States reached directly from the initial state come first, then
    non-final before final states, then higher total degree.
    """
    return (
        0 if name in direct else 1,
        1 if automaton.states[name].is_final else 0,
        -degrees.get(name, 0),
    )


def sort_level(
    automaton: Automaton,
    states: list[str],
    direct: set[str],
    degrees: dict[str, int],
) -> list[str]:
    """Order one level's states by importance; ties keep declaration order."""
    return sorted(states, key=lambda s: importance_key(automaton, s, direct, degrees))


def fan_angles(count: int, arc: float = FAN_ARC, max_step: float = MAX_ANGLE_STEP) -> list[float]:
    """Evenly spaced angles centred on 0.

    The spacing spreads ``count`` states over ``arc`` but never exceeds
    ``max_step``, so small rings stay compact instead of spanning the arc.

    Args:
        count: Number of angles.
        arc: Total arc available, in radians.
        max_step: Upper bound on the step between neighbours.

    Returns:
        List of angles in radians, ascending.
    """
    if count <= 0:
        return []
    if count == 1:
        return [0.0]
    step = min(arc / (count - 1), max_step)
    first = -step * (count - 1) / 2
    return [first + i * step for i in range(count)]


def place_states(
    automaton: Automaton,
    states_by_level: dict[int, list[str]],
    config: LayoutConfig,
    rng: random.Random | None = None,
) -> None:
    """Assign an initial position to every state, in place.

    The initial state is pinned to its anchor. Every other state goes on
    the ring for its level (radius ``base_radius * (level + 1)``) around the
    anchor, or around the origin when there is no initial state. The result
    may still contain overlaps.

    Args:
        automaton: Automaton whose state positions are set.
        states_by_level: Output of compute_levels.
        config: Layout parameters.
        rng: Source of radial jitter. None disables jitter.
    """
    initial = automaton.initial_state
    center: Point = (0.0, 0.0)
    if initial is not None:
        center = config.initial_anchor
        automaton.states[initial].position = center

    direct = automaton.direct_successors_of_initial()
    G = automaton.to_networkx()
    degrees = {name: G.in_degree(name) + G.out_degree(name) for name in automaton.states}
    jitter_span = config.min_separation * config.jitter_fraction

    for level in sorted(states_by_level):
        states = [s for s in states_by_level[level] if s != initial]
        if not states:
            continue

        radius = config.base_radius * (level + 1)
        ordered = sort_level(automaton, states, direct, degrees)

        remaining = ordered
        if level == 1:
            direct_states = [s for s in ordered if s in direct]
            for i, name in enumerate(direct_states):
                angle = PREFERRED_ANGLES[i % len(PREFERRED_ANGLES)]
                automaton.states[name].position = polar(center, radius, angle)
            remaining = [s for s in ordered if s not in direct]

        for name, angle in zip(remaining, fan_angles(len(remaining))):
            variation = 0.0
            if rng is not None and jitter_span > 0:
                variation = jitter_span * (rng.random() - 0.5)
            automaton.states[name].position = polar(center, radius + variation, angle)
