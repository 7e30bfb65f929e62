"""Longest-path level assignment from the initial state."""

from collections import deque

import networkx as nx

from ..graph import Automaton


def ordered_successors(G: nx.MultiDiGraph, node: str) -> list[str]:
    """Successors of node in node insertion (state declaration) order.

    networkx yields successors in edge insertion order; sorting by node rank
    keeps traversal independent of the order transitions were declared.
    """
    rank = G.graph.setdefault("node_rank", {n: i for i, n in enumerate(G)})
    return sorted(G.successors(node), key=rank.__getitem__)


def find_back_edges(G: nx.MultiDiGraph, source: str) -> set[tuple[str, str]]:
    """Find edges that close a cycle on the depth-first path from source.

    Children are visited in state declaration order, so the result does not
    depend on transition order. Uses an explicit stack so deep graphs cannot
    exhaust the recursion limit.

    Args:
        G: Transition graph.
        source: Start node of the traversal.

    Returns:
        Set of (parent, child) back edges.
    """
    back_edges: set[tuple[str, str]] = set()
    visited = {source}
    on_path = {source}
    stack = [(source, iter(ordered_successors(G, source)))]

    while stack:
        node, children = stack[-1]
        child = next(children, None)
        if child is None:
            stack.pop()
            on_path.discard(node)
        elif child in on_path:
            back_edges.add((node, child))
        elif child not in visited:
            visited.add(child)
            on_path.add(child)
            stack.append((child, iter(ordered_successors(G, child))))

    return back_edges


def compute_levels(
    automaton: Automaton,
) -> tuple[dict[int, list[str]], dict[str, int], int]:
    """Longest-path level assignment.

    Relaxes transitions from the initial state with a worklist: a state is
    re-queued only when its best known path length strictly increases. Back
    edges are skipped, so the relaxed graph is acyclic and levels are bounded
    by ``len(states) - 1``. Unreachable states, and every state of an
    automaton without an initial state, stay at level 0.

    Args:
        automaton: The automaton to analyse.

    Returns:
        states_by_level: level -> states at that level, in declaration order.
        state_to_level: state -> its level.
        max_level: the highest level assigned (0 for an empty automaton).
    """
    state_to_level = {name: 0 for name in automaton.states}

    if automaton.initial_state is not None:
        G = automaton.to_networkx()
        back_edges = find_back_edges(G, automaton.initial_state)
        queue: deque[str] = deque([automaton.initial_state])

        while queue:
            node = queue.popleft()
            length = state_to_level[node]
            for child in ordered_successors(G, node):
                if (node, child) in back_edges:
                    continue
                if state_to_level[child] < length + 1:
                    state_to_level[child] = length + 1
                    queue.append(child)

    max_level = max(state_to_level.values(), default=0)

    states_by_level: dict[int, list[str]] = {level: [] for level in range(max_level + 1)}
    for name, level in state_to_level.items():
        states_by_level[level].append(name)

    return states_by_level, state_to_level, max_level
