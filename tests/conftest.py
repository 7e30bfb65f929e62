"""Pytest fixtures for layout tests."""

import pytest

from automaton_layout.graph import Automaton, parse_description
from automaton_layout.layout import LayoutConfig


def make_automaton(
    states: list[str],
    transitions: list[tuple[str, str, str]],
    start: str | None = "q0",
    finals: list[str] | None = None,
) -> Automaton:
    """Build an automaton from compact test notation."""
    return parse_description(
        {
            "states": states,
            "startState": start,
            "finalStates": finals or [],
            "transitions": [{"from": a, "to": b, "symbol": s} for a, b, s in transitions],
        }
    )


@pytest.fixture
def no_jitter() -> LayoutConfig:
    """Default parameters with jitter disabled, for exact positions."""
    return LayoutConfig(jitter_fraction=0.0)


@pytest.fixture
def single_state() -> Automaton:
    """One state, initial and final, no transitions."""
    return make_automaton(["q0"], [], finals=["q0"])


@pytest.fixture
def two_cycle() -> Automaton:
    """q0 -a-> q1 -b-> q0, q1 final."""
    return make_automaton(["q0", "q1"], [("q0", "q1", "a"), ("q1", "q0", "b")], finals=["q1"])


@pytest.fixture
def chain_with_loop() -> Automaton:
    """q0 -a-> q1 -b-> q2, q2 -c-> q2."""
    return make_automaton(
        ["q0", "q1", "q2"],
        [("q0", "q1", "a"), ("q1", "q2", "b"), ("q2", "q2", "c")],
    )


@pytest.fixture
def skip_graph() -> Automaton:
    """q0 -> q1 -> q2 plus the shortcut q0 -> q2 (q2 at level 2, not 1)."""
    return make_automaton(
        ["q0", "q1", "q2"],
        [("q0", "q1", "a"), ("q1", "q2", "b"), ("q0", "q2", "c")],
    )


@pytest.fixture
def cyclic_graph() -> Automaton:
    """Cycle q0 -> q1 -> q2 -> q0 with an extra back edge q2 -> q1."""
    return make_automaton(
        ["q0", "q1", "q2"],
        [("q0", "q1", "a"), ("q1", "q2", "b"), ("q2", "q0", "c"), ("q2", "q1", "d")],
    )


@pytest.fixture
def binary_counter() -> Automaton:
    """Six-state automaton with a fan-out, a diamond, an unreachable state and loops."""
    return make_automaton(
        ["q0", "q1", "q2", "q3", "q4", "q5", "dead"],
        [
            ("q0", "q1", "0"),
            ("q0", "q2", "1"),
            ("q1", "q3", "0"),
            ("q2", "q3", "1"),
            ("q3", "q4", "0"),
            ("q3", "q5", "1"),
            ("q4", "q0", "0"),
            ("q5", "q5", "1"),
            ("q5", "q5", "0"),
            ("dead", "q1", "x"),
        ],
        finals=["q4", "q5"],
    )


@pytest.fixture
def build():
    """Factory fixture wrapping make_automaton."""
    return make_automaton
