"""Keep transition lines clear of the initial state's marker."""

from ..graph import Automaton, Transition
from .config import LayoutConfig
from .geometry import closest_point_on_segment, distance, marker_radius


def flag_initial_arrow_crossings(automaton: Automaton, config: LayoutConfig) -> list[Transition]:
    """Mark transitions whose straight line would cross the initial state.

    Transitions touching the initial state are skipped. A transition is
    flagged when the closest point of its segment lies strictly inside the
    segment and within ``initial_clearance_factor`` marker radii of the
    initial state. ``curve_factor`` is +1 when the initial state is above
    that point and -1 otherwise.

    Args:
        automaton: Automaton with final positions.
        config: Layout parameters.

    Returns:
        The transitions that were flagged.
    """
    if automaton.initial_state is None:
        return []

    initial = automaton.states[automaton.initial_state]
    threshold = marker_radius(initial, config) * config.initial_clearance_factor
    flagged: list[Transition] = []

    for transition in automaton.transitions:
        if initial.name in (transition.source, transition.target):
            continue

        start = automaton.states[transition.source].position
        end = automaton.states[transition.target].position
        t, projection = closest_point_on_segment(initial.position, start, end)

        if distance(initial.position, projection) < threshold and 0 < t < 1:
            transition.needs_extra_curve = True
            transition.curve_factor = 1 if initial.position[1] > projection[1] else -1
            flagged.append(transition)

    return flagged
