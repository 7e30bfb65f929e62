"""Collision-aware edge routing and self-loop geometry."""

import math
from dataclasses import dataclass
from enum import Enum

from ..graph import Automaton, SelfLoop, State, Transition
from .config import LayoutConfig
from .geometry import (
    Point,
    add,
    closest_point_on_segment,
    cross,
    distance,
    marker_radius,
    midpoint,
    normalize,
    perpendicular,
    scale,
    sub,
)

BULGE_EPSILON = 1e-9


class RouteKind(Enum):
    """How an arrow is drawn."""

    STRAIGHT = "straight"  # slight constant bow, nothing in the way
    CURVED = "curved"  # bends around a state or the initial marker
    SELF_LOOP = "self_loop"  # loop above a single state


@dataclass
class EdgeRoute:
    """Quadratic Bezier route of one transition between distinct states."""

    source: str
    target: str
    symbol: str
    kind: RouteKind
    start: Point
    end: Point
    control: Point
    label_anchor: Point
    tip_angle: float  # direction of the arrow head, radians
    bulge: float  # signed perpendicular offset of the control point
    obstruction: str | None = None


@dataclass
class SelfLoopRoute:
    """Cubic Bezier loop drawn on top of a state."""

    state: str
    label: str
    anchor: Point  # start and end of the loop
    control_right: Point
    control_left: Point
    label_anchor: Point
    tip_angle: float
    kind: RouteKind = RouteKind.SELF_LOOP


def find_colliding_state(
    automaton: Automaton,
    transition: Transition,
    config: LayoutConfig,
) -> State | None:
    """Find the first state the straight transition line would pass through.

    A state collides when its closest point on the segment is strictly
    interior and nearer than ``collision_factor`` state radii.

    Returns:
        The first colliding state in declaration order, or None.
    """
    start = automaton.states[transition.source].position
    end = automaton.states[transition.target].position
    threshold = config.state_radius * config.collision_factor

    for name, state in automaton.states.items():
        if name in (transition.source, transition.target):
            continue
        t, projection = closest_point_on_segment(state.position, start, end)
        if distance(state.position, projection) < threshold and 0 < t < 1:
            return state

    return None


def _bulge_sign_away_from(point: Point, start: Point, direction: Point) -> int:
    """+1 to bulge along perpendicular(direction), -1 for the other side."""
    side = cross(direction, sub(point, start))
    return -1 if side > 0 else 1


def _bulge_sign_from_curve_factor(
    curve_factor: int,
    direction: Point,
    start: Point,
    initial_position: Point,
) -> int:
    """Bulge vertically away from the initial state as recorded by clearance."""
    perp_y = perpendicular(direction)[1]
    if perp_y > BULGE_EPSILON:
        return -curve_factor
    if perp_y < -BULGE_EPSILON:
        return curve_factor
    # Vertical segment: "above" says nothing, fall back to the side test.
    return _bulge_sign_away_from(initial_position, start, direction)


def route_transition(
    automaton: Automaton,
    transition: Transition,
    config: LayoutConfig,
) -> EdgeRoute:
    """Route one transition as a straight (bowed) or curved arrow.

    The arrow runs between the marker boundaries of its endpoints. The
    control point is the midpoint displaced perpendicular to the line:
    by ``bow_offset`` for straight routes, by ``curve_offset`` away from
    the obstruction for curved routes. The label sits on the control point.

    Args:
        automaton: Automaton with final positions and clearance flags.
        transition: A transition between two distinct states.
        config: Layout parameters.

    Returns:
        The route descriptor.
    """
    source = automaton.states[transition.source]
    target = automaton.states[transition.target]
    direction = normalize(sub(target.position, source.position))

    start = add(source.position, scale(direction, marker_radius(source, config)))
    end = sub(target.position, scale(direction, marker_radius(target, config)))

    colliding = find_colliding_state(automaton, transition, config)
    obstruction = None
    if colliding is not None:
        kind = RouteKind.CURVED
        obstruction = colliding.name
        bulge = config.curve_offset * _bulge_sign_away_from(
            colliding.position, source.position, direction
        )
    elif transition.needs_extra_curve and automaton.initial_state is not None:
        kind = RouteKind.CURVED
        obstruction = automaton.initial_state
        bulge = config.curve_offset * _bulge_sign_from_curve_factor(
            transition.curve_factor,
            direction,
            source.position,
            automaton.states[automaton.initial_state].position,
        )
    else:
        kind = RouteKind.STRAIGHT
        bulge = config.bow_offset

    control = add(midpoint(start, end), scale(perpendicular(direction), bulge))
    tangent = sub(end, control)

    return EdgeRoute(
        source=transition.source,
        target=transition.target,
        symbol=transition.symbol,
        kind=kind,
        start=start,
        end=end,
        control=control,
        label_anchor=control,
        tip_angle=math.atan2(tangent[1], tangent[0]),
        bulge=bulge,
        obstruction=obstruction,
    )


def route_edges(automaton: Automaton, config: LayoutConfig) -> list[EdgeRoute]:
    """Route every non-self transition, in transition order."""
    return [route_transition(automaton, t, config) for t in automaton.transitions]


def route_self_loop(automaton: Automaton, loop: SelfLoop, config: LayoutConfig) -> SelfLoopRoute:
    """Build the loop above a state carrying all its self-transition symbols."""
    state = automaton.states[loop.state]
    x, y = state.position
    radius = marker_radius(state, config)
    reach = radius * config.self_loop_factor

    anchor = (x, y + radius)
    control_left = (x - reach, y + reach)
    # Tangent of the cubic at its end is proportional to anchor - control_left
    tangent = sub(anchor, control_left)

    return SelfLoopRoute(
        state=loop.state,
        label=loop.label,
        anchor=anchor,
        control_right=(x + reach, y + reach),
        control_left=control_left,
        label_anchor=(x, y + reach + config.label_offset),
        tip_angle=math.atan2(tangent[1], tangent[0]),
    )


def route_self_loops(automaton: Automaton, config: LayoutConfig) -> list[SelfLoopRoute]:
    """Route the self-loops of all states, in state declaration order."""
    return [
        route_self_loop(automaton, automaton.self_loops[name], config)
        for name in automaton.states
        if name in automaton.self_loops and automaton.self_loops[name].symbols
    ]
