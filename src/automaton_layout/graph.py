"""Automaton graph model and description loading."""

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

import networkx as nx


class MalformedGraphError(ValueError):
    """Raised when an automaton description is not a well-formed graph."""


@dataclass
class State:
    """A state of the automaton. Position is mutated in place by layout."""

    name: str
    is_initial: bool = False
    is_final: bool = False
    position: tuple[float, float] = (0.0, 0.0)


@dataclass
class Transition:
    """A labeled edge between two distinct states."""

    source: str
    target: str
    symbol: str
    needs_extra_curve: bool = False  # Set by initial-arrow clearance
    curve_factor: int = 0  # +1 / -1 once flagged


@dataclass
class SelfLoop:
    """All self-transitions of one state, merged into a single arrow."""

    state: str
    symbols: set[str] = field(default_factory=set)

    @property
    def label(self) -> str:
        return ",".join(sorted(self.symbols))


@dataclass
class Automaton:
    """Represents a finite-state automaton as a graph."""

    states: dict[str, State] = field(default_factory=dict)
    transitions: list[Transition] = field(default_factory=list)
    self_loops: dict[str, SelfLoop] = field(default_factory=dict)
    initial_state: str | None = None

    def add_state(self, name: str, is_initial: bool = False, is_final: bool = False) -> State:
        """Declare a state.

        Raises:
            MalformedGraphError: If the name is already declared or a second
                initial state is added.
        """
        if name in self.states:
            raise MalformedGraphError(f"State '{name}' declared twice")
        if is_initial and self.initial_state is not None:
            raise MalformedGraphError(
                f"Multiple initial states: '{self.initial_state}' and '{name}'"
            )
        state = State(name, is_initial=is_initial, is_final=is_final)
        self.states[name] = state
        if is_initial:
            self.initial_state = name
        return state

    def add_transition(self, source: str, target: str, symbol: str) -> None:
        """Add a transition, merging self-transitions into a self-loop.

        Raises:
            MalformedGraphError: If either endpoint is not a declared state.
        """
        for endpoint in (source, target):
            if endpoint not in self.states:
                raise MalformedGraphError(
                    f"Transition {source} -> {target} on '{symbol}' "
                    f"references undeclared state '{endpoint}'"
                )

        if source == target:
            if source not in self.self_loops:
                self.self_loops[source] = SelfLoop(source)
            self.self_loops[source].symbols.add(symbol)
        else:
            self.transitions.append(Transition(source, target, symbol))

    def validate(self) -> None:
        """Check graph invariants, for graphs assembled by hand.

        Raises:
            MalformedGraphError: On a dangling reference or several initial states.
        """
        initial = [name for name, state in self.states.items() if state.is_initial]
        if len(initial) > 1:
            raise MalformedGraphError(f"Multiple initial states: {', '.join(initial)}")
        expected = initial[0] if initial else None
        if self.initial_state != expected:
            raise MalformedGraphError(
                f"Initial state mismatch: {self.initial_state!r} vs {expected!r}"
            )

        for t in self.transitions:
            if t.source not in self.states or t.target not in self.states:
                raise MalformedGraphError(
                    f"Transition {t.source} -> {t.target} references an undeclared state"
                )
            if t.source == t.target:
                raise MalformedGraphError(
                    f"Self-transition on '{t.source}' must be stored as a self-loop"
                )
        for name in self.self_loops:
            if name not in self.states:
                raise MalformedGraphError(f"Self-loop on undeclared state '{name}'")

    def to_networkx(self) -> nx.MultiDiGraph:
        """Build a MultiDiGraph of all states and non-self transitions.

        Parallel transitions are kept so that degrees count every transition.
        """
        G = nx.MultiDiGraph()
        G.add_nodes_from(self.states)
        for t in self.transitions:
            G.add_edge(t.source, t.target, symbol=t.symbol)
        return G

    def direct_successors_of_initial(self) -> set[str]:
        """States reached by a single transition from the initial state."""
        if self.initial_state is None:
            return set()
        return {t.target for t in self.transitions if t.source == self.initial_state}


def parse_description(data: Mapping) -> Automaton:
    """Build an automaton from a parsed description.

    The description format is::

        {
            "states": ["q0", "q1"],
            "startState": "q0",
            "finalStates": ["q1"],
            "transitions": [{"from": "q0", "to": "q1", "symbol": "a"}]
        }

    Args:
        data: Parsed JSON/YAML mapping.

    Returns:
        The validated automaton.

    Raises:
        MalformedGraphError: If the description is incomplete or inconsistent.
    """
    if not isinstance(data, Mapping):
        raise MalformedGraphError("Automaton description must be a mapping")
    if "states" not in data:
        raise MalformedGraphError("Automaton description has no 'states' list")

    names = [str(s) for s in data["states"]]
    start = data.get("startState")
    finals = {str(s) for s in data.get("finalStates") or []}

    if start is not None and str(start) not in names:
        raise MalformedGraphError(f"Start state '{start}' is not a declared state")
    undeclared = sorted(finals - set(names))
    if undeclared:
        raise MalformedGraphError(f"Final states not declared: {', '.join(undeclared)}")

    automaton = Automaton()
    for name in names:
        automaton.add_state(
            name,
            is_initial=start is not None and name == str(start),
            is_final=name in finals,
        )

    for i, entry in enumerate(data.get("transitions") or []):
        try:
            source, target, symbol = entry["from"], entry["to"], entry["symbol"]
        except (KeyError, TypeError) as err:
            raise MalformedGraphError(
                f"Transition #{i} needs 'from', 'to' and 'symbol' keys"
            ) from err
        automaton.add_transition(str(source), str(target), str(symbol))

    return automaton


def load_automaton(path: Path) -> Automaton:
    """Load an automaton description from a JSON or YAML file.

    Args:
        path: Path to a .json, .yaml or .yml file.

    Returns:
        The validated automaton.

    Raises:
        OSError: If the file cannot be read.
        MalformedGraphError: If the file is not valid JSON/YAML or does not
            describe a valid automaton.
    """
    path = Path(path)
    if path.suffix in (".yaml", ".yml"):
        try:
            import yaml
        except ImportError as err:
            raise ImportError("PyYAML required for YAML descriptions: pip install pyyaml") from err

        with open(path) as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as err:
                raise MalformedGraphError(f"{path}: invalid YAML: {err}") from err
    else:
        with open(path) as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as err:
                raise MalformedGraphError(f"{path}: invalid JSON: {err}") from err

    return parse_description(data)
