"""Tests for the automaton graph model."""

import json

import pytest

from automaton_layout.graph import (
    Automaton,
    MalformedGraphError,
    Transition,
    load_automaton,
    parse_description,
)


class TestAutomaton:
    """Tests for Automaton construction and validation."""

    def test_add_states_and_transitions(self):
        """States keep their flags and transitions their order."""
        automaton = Automaton()
        automaton.add_state("q0", is_initial=True)
        automaton.add_state("q1", is_final=True)
        automaton.add_transition("q0", "q1", "a")
        automaton.add_transition("q1", "q0", "b")

        assert automaton.initial_state == "q0"
        assert automaton.states["q1"].is_final
        assert automaton.states["q1"].position == (0.0, 0.0)
        assert [t.symbol for t in automaton.transitions] == ["a", "b"]

    def test_undeclared_state_rejected(self):
        """Transitions to unknown states raise MalformedGraphError."""
        automaton = Automaton()
        automaton.add_state("q0", is_initial=True)

        with pytest.raises(MalformedGraphError, match="undeclared state 'q9'"):
            automaton.add_transition("q0", "q9", "a")

    def test_second_initial_state_rejected(self):
        """At most one state may be initial."""
        automaton = Automaton()
        automaton.add_state("q0", is_initial=True)

        with pytest.raises(MalformedGraphError, match="Multiple initial states"):
            automaton.add_state("q1", is_initial=True)

    def test_duplicate_state_rejected(self):
        automaton = Automaton()
        automaton.add_state("q0")

        with pytest.raises(MalformedGraphError):
            automaton.add_state("q0")

    def test_self_transitions_merged(self):
        """Self-transitions become one self-loop with a set of symbols."""
        automaton = Automaton()
        automaton.add_state("q0")
        automaton.add_transition("q0", "q0", "b")
        automaton.add_transition("q0", "q0", "a")
        automaton.add_transition("q0", "q0", "b")

        assert automaton.transitions == []
        assert automaton.self_loops["q0"].symbols == {"a", "b"}
        assert automaton.self_loops["q0"].label == "a,b"

    def test_self_loop_label_order_independent(self):
        """Any insertion order gives the same sorted label."""
        labels = set()
        for symbols in (["c", "a", "b"], ["b", "c", "a"], ["a", "b", "c"]):
            automaton = Automaton()
            automaton.add_state("q0")
            for symbol in symbols:
                automaton.add_transition("q0", "q0", symbol)
            labels.add(automaton.self_loops["q0"].label)

        assert labels == {"a,b,c"}

    def test_validate_catches_hand_edits(self):
        """validate() rejects a dangling transition appended directly."""
        automaton = Automaton()
        automaton.add_state("q0", is_initial=True)
        automaton.transitions.append(Transition("q0", "ghost", "a"))

        with pytest.raises(MalformedGraphError):
            automaton.validate()

    def test_validate_catches_two_initial_flags(self):
        automaton = Automaton()
        automaton.add_state("q0", is_initial=True)
        automaton.add_state("q1")
        automaton.states["q1"].is_initial = True

        with pytest.raises(MalformedGraphError, match="Multiple initial states"):
            automaton.validate()

    def test_networkx_degrees_count_parallel_transitions(self, build):
        """Parallel transitions each count toward degree; self-loops do not."""
        automaton = build(
            ["q0", "q1"],
            [("q0", "q1", "a"), ("q0", "q1", "b"), ("q1", "q1", "c")],
        )
        G = automaton.to_networkx()

        assert G.out_degree("q0") == 2
        assert G.in_degree("q1") == 2
        assert G.out_degree("q1") == 0

    def test_direct_successors_of_initial(self, binary_counter):
        assert binary_counter.direct_successors_of_initial() == {"q1", "q2"}

    def test_no_initial_has_no_direct_successors(self, build):
        automaton = build(["a", "b"], [("a", "b", "x")], start=None)
        assert automaton.direct_successors_of_initial() == set()


class TestParseDescription:
    """Tests for parse_description function."""

    def test_valid_description(self, two_cycle):
        assert two_cycle.initial_state == "q0"
        assert two_cycle.states["q1"].is_final
        assert not two_cycle.states["q0"].is_final
        assert len(two_cycle.transitions) == 2

    def test_missing_start_state(self):
        """A description without startState has no initial state."""
        automaton = parse_description({"states": ["a"], "transitions": []})
        assert automaton.initial_state is None

    def test_unknown_start_state(self):
        with pytest.raises(MalformedGraphError, match="Start state"):
            parse_description({"states": ["a"], "startState": "b", "transitions": []})

    def test_undeclared_final_state(self):
        with pytest.raises(MalformedGraphError, match="Final states not declared: z"):
            parse_description({"states": ["a"], "finalStates": ["z"], "transitions": []})

    def test_transition_missing_key(self):
        with pytest.raises(MalformedGraphError, match="Transition #0"):
            parse_description({"states": ["a"], "transitions": [{"from": "a", "to": "a"}]})

    def test_missing_states(self):
        with pytest.raises(MalformedGraphError):
            parse_description({"transitions": []})

    def test_not_a_mapping(self):
        with pytest.raises(MalformedGraphError):
            parse_description(["q0"])


class TestLoadAutomaton:
    """Tests for load_automaton function."""

    def test_load_json(self, tmp_path):
        path = tmp_path / "dfa.json"
        path.write_text(
            json.dumps(
                {
                    "states": ["q0", "q1"],
                    "startState": "q0",
                    "finalStates": ["q1"],
                    "transitions": [{"from": "q0", "to": "q1", "symbol": "a"}],
                }
            )
        )

        automaton = load_automaton(path)

        assert list(automaton.states) == ["q0", "q1"]
        assert automaton.transitions[0].symbol == "a"

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "dfa.yaml"
        path.write_text(
            "states: [q0, q1]\n"
            "startState: q0\n"
            "finalStates: [q1]\n"
            "transitions:\n"
            "  - {from: q0, to: q1, symbol: a}\n"
            "  - {from: q1, to: q1, symbol: b}\n"
        )

        automaton = load_automaton(path)

        assert automaton.initial_state == "q0"
        assert automaton.self_loops["q1"].label == "b"

    def test_invalid_json_is_malformed(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text('{"states": ["q0",')

        with pytest.raises(MalformedGraphError, match="invalid JSON"):
            load_automaton(path)

    def test_invalid_yaml_is_malformed(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("states: [q0, q1\nstartState: q0\n")

        with pytest.raises(MalformedGraphError, match="invalid YAML"):
            load_automaton(path)

    def test_missing_file_raises_os_error(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_automaton(tmp_path / "missing.json")
