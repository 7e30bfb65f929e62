"""Pyvis rendering of a computed automaton layout."""

import math
from pathlib import Path

from .config import LayoutConfig
from .geometry import distance
from .pipeline import AutomatonLayout
from .routing import EdgeRoute, RouteKind

START_NODE = "__start__"


def _edge_smoothing(route: EdgeRoute) -> dict:
    """Map a route's signed bulge onto vis.js curve smoothing.

    Layout coordinates are y-up; a positive bulge bends to the left of the
    direction of travel, which is counter-clockwise.
    """
    chord = max(distance(route.start, route.end), 1.0)
    roundness = min(1.0, 2 * abs(route.bulge) / chord)
    return {
        "enabled": True,
        "type": "curvedCCW" if route.bulge > 0 else "curvedCW",
        "roundness": round(roundness, 3),
    }


def render_layout(
    layout: AutomatonLayout,
    output_path: Path,
    config: LayoutConfig | None = None,
) -> None:
    """Render the layout to an interactive HTML file with pyvis.

    Node positions are fixed (physics disabled) and flipped to screen space.

    Args:
        layout: Result of layout_automaton.
        output_path: Path to write the HTML file.
        config: Layout parameters used for marker sizes.
    """
    from pyvis.network import Network

    config = config or LayoutConfig()

    net = Network(
        height="100vh",
        width="100%",
        bgcolor="#ffffff",
        directed=True,
        cdn_resources="remote",
    )
    net.toggle_physics(False)

    for name, state in layout.states.items():
        x, y = state.position
        title_lines = [name, f"Level {state.level}"]
        if state.is_initial:
            title_lines.append("initial")
        if state.is_final:
            title_lines.append("final")

        net.add_node(
            name,
            label=name,
            title="\n".join(title_lines),
            x=x,
            y=-y,
            fixed=True,
            shape="circle",
            color={"background": "#ffff80", "border": "#000000"},
            borderWidth=4 if state.is_final else 1,
            size=config.final_state_outer_radius if state.is_final else config.state_radius,
            font={"size": 16},
        )

    # Entry arrow into the initial state, from an invisible anchor on its left
    if layout.initial_state is not None:
        initial = layout.states[layout.initial_state]
        radius = config.final_state_outer_radius if initial.is_final else config.state_radius
        x, y = initial.position
        net.add_node(
            START_NODE,
            label=" ",
            x=x - radius - 50,
            y=-y,
            fixed=True,
            shape="text",
        )
        net.add_edge(START_NODE, layout.initial_state, color="#000000")

    for route in layout.edges:
        net.add_edge(
            route.source,
            route.target,
            label=route.symbol,
            color="#000000",
            title=f"{route.source} -> {route.target} ({route.kind.value})",
            smooth=_edge_smoothing(route),
        )

    for loop in layout.self_loops:
        net.add_edge(
            loop.state,
            loop.state,
            label=loop.label,
            color="#000000",
            title=f"{loop.state} -> {loop.state} ({RouteKind.SELF_LOOP.value})",
            selfReference={"size": config.state_radius, "angle": math.pi / 2},
        )

    net.set_options("""
    {
        "physics": {"enabled": false},
        "interaction": {
            "navigationButtons": true,
            "zoomView": true,
            "dragView": true,
            "hover": true
        },
        "edges": {
            "arrows": {"to": {"enabled": true, "scaleFactor": 0.6}},
            "font": {"size": 16, "align": "middle"}
        }
    }
    """)

    net.save_graph(str(output_path))
