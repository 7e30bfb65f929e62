"""Full layout pipeline: levels, placement, overlap, clearance, routing."""

import random
from dataclasses import dataclass, field

from ..graph import Automaton
from .clearance import flag_initial_arrow_crossings
from .config import LayoutConfig
from .levels import compute_levels
from .overlap import OverlapReport, resolve_overlaps
from .placement import place_states
from .routing import EdgeRoute, SelfLoopRoute, route_edges, route_self_loops


@dataclass
class PlacedState:
    """Final placement of a state."""

    name: str
    position: tuple[float, float]
    is_initial: bool
    is_final: bool
    level: int


@dataclass
class AutomatonLayout:
    """Everything a renderer needs: positions and arrow routes."""

    states: dict[str, PlacedState] = field(default_factory=dict)
    edges: list[EdgeRoute] = field(default_factory=list)
    self_loops: list[SelfLoopRoute] = field(default_factory=list)
    overlap: OverlapReport = field(default_factory=OverlapReport)
    initial_state: str | None = None

    def to_dict(self) -> dict:
        """Plain JSON-serializable representation."""
        return {
            "initial_state": self.initial_state,
            "states": [
                {
                    "name": s.name,
                    "x": s.position[0],
                    "y": s.position[1],
                    "initial": s.is_initial,
                    "final": s.is_final,
                    "level": s.level,
                }
                for s in self.states.values()
            ],
            "edges": [
                {
                    "from": e.source,
                    "to": e.target,
                    "symbol": e.symbol,
                    "kind": e.kind.value,
                    "start": list(e.start),
                    "end": list(e.end),
                    "control": list(e.control),
                    "label": list(e.label_anchor),
                    "tip_angle": e.tip_angle,
                    "obstruction": e.obstruction,
                }
                for e in self.edges
            ],
            "self_loops": [
                {
                    "state": loop.state,
                    "label": loop.label,
                    "anchor": list(loop.anchor),
                    "control_right": list(loop.control_right),
                    "control_left": list(loop.control_left),
                    "label_anchor": list(loop.label_anchor),
                    "tip_angle": loop.tip_angle,
                }
                for loop in self.self_loops
            ],
            "overlap": {
                "iterations": self.overlap.iterations,
                "converged": self.overlap.converged,
            },
        }


def layout_automaton(
    automaton: Automaton,
    config: LayoutConfig | None = None,
    rng: random.Random | None = None,
) -> AutomatonLayout:
    """Lay out an automaton and route its arrows.

    Stages run strictly in sequence, each mutating the automaton's state
    positions (and transition clearance flags) before the next starts.
    Positions are recomputed from scratch on every call.

    Args:
        automaton: The automaton to lay out. Mutated in place.
        config: Layout parameters. Defaults to LayoutConfig().
        rng: Jitter source. Defaults to random.Random(config.seed);
            set config.jitter_fraction to 0 for a jitter-free layout.

    Returns:
        The computed layout.

    Raises:
        MalformedGraphError: If the automaton violates graph invariants.
    """
    config = config or LayoutConfig()
    automaton.validate()

    result = AutomatonLayout(initial_state=automaton.initial_state)
    if not automaton.states:
        return result

    if rng is None:
        rng = random.Random(config.seed)

    for state in automaton.states.values():
        state.position = (0.0, 0.0)
    for transition in automaton.transitions:
        transition.needs_extra_curve = False
        transition.curve_factor = 0

    states_by_level, state_to_level, _ = compute_levels(automaton)
    place_states(automaton, states_by_level, config, rng)
    result.overlap = resolve_overlaps(automaton, config)
    flag_initial_arrow_crossings(automaton, config)
    result.edges = route_edges(automaton, config)
    result.self_loops = route_self_loops(automaton, config)

    for name, state in automaton.states.items():
        result.states[name] = PlacedState(
            name=name,
            position=state.position,
            is_initial=state.is_initial,
            is_final=state.is_final,
            level=state_to_level[name],
        )

    return result
