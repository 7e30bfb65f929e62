"""Automatic layout engine for finite-state automaton diagrams.

States are placed on concentric rings around the initial state by their
longest-path level, pushed apart until no two overlap, and every transition
is routed as a bowed or curved arrow that avoids unrelated states.
"""

from .clearance import flag_initial_arrow_crossings
from .config import LayoutConfig
from .levels import compute_levels, find_back_edges
from .overlap import (
    OverlapReport,
    center_states,
    center_states_vertically,
    relax_overlaps,
    resolve_overlaps,
)
from .pipeline import AutomatonLayout, PlacedState, layout_automaton
from .placement import PREFERRED_ANGLES, fan_angles, place_states, sort_level
from .render import render_layout
from .routing import (
    EdgeRoute,
    RouteKind,
    SelfLoopRoute,
    find_colliding_state,
    route_edges,
    route_self_loop,
    route_self_loops,
    route_transition,
)

__all__ = [
    "LayoutConfig",
    "compute_levels",
    "find_back_edges",
    "PREFERRED_ANGLES",
    "fan_angles",
    "sort_level",
    "place_states",
    "OverlapReport",
    "relax_overlaps",
    "center_states",
    "center_states_vertically",
    "resolve_overlaps",
    "flag_initial_arrow_crossings",
    "RouteKind",
    "EdgeRoute",
    "SelfLoopRoute",
    "find_colliding_state",
    "route_transition",
    "route_edges",
    "route_self_loop",
    "route_self_loops",
    "AutomatonLayout",
    "PlacedState",
    "layout_automaton",
    "render_layout",
]
