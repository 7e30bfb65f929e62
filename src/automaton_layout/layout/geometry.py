"""2D vector helpers on plain (x, y) tuples."""

import math

from ..graph import State
from .config import LayoutConfig

Point = tuple[float, float]


def add(a: Point, b: Point) -> Point:
    return (a[0] + b[0], a[1] + b[1])


def sub(a: Point, b: Point) -> Point:
    return (a[0] - b[0], a[1] - b[1])


def scale(a: Point, factor: float) -> Point:
    return (a[0] * factor, a[1] * factor)


def dot(a: Point, b: Point) -> float:
    return a[0] * b[0] + a[1] * b[1]


def cross(a: Point, b: Point) -> float:
    """Z component of the 3D cross product; > 0 when b is left of a."""
    return a[0] * b[1] - a[1] * b[0]


def length(a: Point) -> float:
    return math.hypot(a[0], a[1])


def distance(a: Point, b: Point) -> float:
    return math.hypot(b[0] - a[0], b[1] - a[1])


def midpoint(a: Point, b: Point) -> Point:
    return ((a[0] + b[0]) / 2, (a[1] + b[1]) / 2)


def normalize(a: Point) -> Point:
    """Unit vector along a, or (0, 0) for a zero-length vector."""
    norm = length(a)
    if norm == 0:
        return (0.0, 0.0)
    return (a[0] / norm, a[1] / norm)


def perpendicular(a: Point) -> Point:
    """Rotate a by +90 degrees."""
    return (-a[1], a[0])


def polar(center: Point, radius: float, angle: float) -> Point:
    return (center[0] + radius * math.cos(angle), center[1] + radius * math.sin(angle))


def closest_point_on_segment(point: Point, start: Point, end: Point) -> tuple[float, Point]:
    """Project point onto the segment start-end.

    Args:
        point: Point to project.
        start: Segment start.
        end: Segment end.

    Returns:
        (t, projection) where t is the projection parameter clamped to [0, 1].
        A zero-length segment projects everything onto its start with t = 0.
    """
    segment = sub(end, start)
    seg_len = length(segment)
    if seg_len == 0:
        return 0.0, start

    direction = scale(segment, 1 / seg_len)
    t = max(0.0, min(1.0, dot(sub(point, start), direction) / seg_len))
    return t, add(start, scale(direction, t * seg_len))


def marker_radius(state: State, config: LayoutConfig) -> float:
    """On-screen radius of a state's marker (final states have an outer ring)."""
    return config.final_state_outer_radius if state.is_final else config.state_radius
