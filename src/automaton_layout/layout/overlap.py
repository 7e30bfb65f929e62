"""Pairwise overlap relaxation and recentring."""

import math
from dataclasses import dataclass

from ..graph import Automaton
from .config import LayoutConfig
from .geometry import distance, normalize, sub

GOLDEN_ANGLE = math.pi * (3 - math.sqrt(5))
SEPARATION_TOLERANCE = 1e-9


@dataclass
class OverlapReport:
    """Outcome of overlap resolution."""

    iterations: int = 0
    converged: bool = True


def _separation_direction(a: tuple[float, float], b: tuple[float, float], index: int):
    """Unit vector from a towards b; coincident pairs get a fixed fan direction."""
    direction = normalize(sub(b, a))
    if direction == (0.0, 0.0):
        angle = index * GOLDEN_ANGLE
        direction = (math.cos(angle), math.sin(angle))
    return direction


def relax_overlaps(automaton: Automaton, config: LayoutConfig) -> tuple[int, bool]:
    """Push apart every pair of states closer than the minimum separation.

    Each pass scans all unordered pairs and moves both states of a short pair
    away from each other by half the deficit. The initial state never moves:
    its partner takes the whole deficit instead. Passes repeat until one makes
    no correction or ``config.max_iterations`` is reached.

    Returns:
        (passes run, whether the last pass found no overlap).
    """
    names = list(automaton.states)
    min_distance = config.min_separation
    iterations = 0
    has_overlap = True

    while has_overlap and iterations < config.max_iterations:
        has_overlap = False
        iterations += 1

        for i in range(len(names)):
            state_a = automaton.states[names[i]]
            for j in range(i + 1, len(names)):
                state_b = automaton.states[names[j]]
                gap = distance(state_a.position, state_b.position)
                if gap >= min_distance - SEPARATION_TOLERANCE:
                    continue

                has_overlap = True
                dx, dy = _separation_direction(state_a.position, state_b.position, j)
                deficit = min_distance - gap

                if state_a.is_initial:
                    move_a, move_b = 0.0, deficit
                elif state_b.is_initial:
                    move_a, move_b = deficit, 0.0
                else:
                    move_a = move_b = deficit / 2

                ax, ay = state_a.position
                bx, by = state_b.position
                state_a.position = (ax - dx * move_a, ay - dy * move_a)
                state_b.position = (bx + dx * move_b, by + dy * move_b)

    return iterations, not has_overlap


def center_states(automaton: Automaton) -> None:
    """Translate non-initial states so the centroid of all states is the origin."""
    if not automaton.states:
        return

    count = len(automaton.states)
    center_x = sum(s.position[0] for s in automaton.states.values()) / count
    center_y = sum(s.position[1] for s in automaton.states.values()) / count

    for state in automaton.states.values():
        if not state.is_initial:
            x, y = state.position
            state.position = (x - center_x, y - center_y)


def center_states_vertically(automaton: Automaton) -> None:
    """Translate every state, initial included, so the y extent is centred on 0.

    Alternative centring; the layout pipeline does not call it.
    """
    if not automaton.states:
        return

    min_y = min(s.position[1] for s in automaton.states.values())
    max_y = max(s.position[1] for s in automaton.states.values())
    offset_y = -(min_y + max_y) / 2

    for state in automaton.states.values():
        x, y = state.position
        state.position = (x, y + offset_y)


def resolve_overlaps(automaton: Automaton, config: LayoutConfig) -> OverlapReport:
    """Relax overlaps, recentre, then relax again.

    Recentring moves every state except the initial one, which can bring a
    state back inside the initial state's separation radius; the second
    relaxation restores the minimum separation with the initial state fixed.
    """
    report = OverlapReport()
    if len(automaton.states) < 2:
        return report

    first, _ = relax_overlaps(automaton, config)
    center_states(automaton)
    second, converged = relax_overlaps(automaton, config)

    report.iterations = first + second
    report.converged = converged
    return report
