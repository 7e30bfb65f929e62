"""Generate layout outputs."""

import json
from collections import Counter
from pathlib import Path

from .layout import AutomatonLayout, LayoutConfig, render_layout


def generate_json(layout: AutomatonLayout, output_file: Path) -> None:
    """Write the layout (positions, routes, diagnostics) as JSON.

    Args:
        layout: The computed layout.
        output_file: Path to write the JSON file.
    """
    with open(output_file, "w") as f:
        json.dump(layout.to_dict(), f, indent=2)


def generate_html(
    layout: AutomatonLayout,
    output_file: Path,
    config: LayoutConfig | None = None,
) -> None:
    """Generate an interactive HTML diagram using pyvis."""
    render_layout(layout, output_file, config)


def generate_summary(layout: AutomatonLayout) -> list[str]:
    """Summarize a layout as printable lines.

    Args:
        layout: The computed layout.

    Returns:
        One line per level, then edge-route counts and overlap diagnostics.
    """
    lines = []

    by_level: dict[int, list[str]] = {}
    for state in layout.states.values():
        by_level.setdefault(state.level, []).append(state.name)

    for level in sorted(by_level):
        lines.append(f"Level {level}: {', '.join(by_level[level])}")

    kinds = Counter(route.kind.value for route in layout.edges)
    kind_summary = ", ".join(f"{count} {kind}" for kind, count in sorted(kinds.items()))
    lines.append(f"Edges: {len(layout.edges)}" + (f" ({kind_summary})" if kind_summary else ""))
    lines.append(f"Self-loops: {len(layout.self_loops)}")

    status = "converged" if layout.overlap.converged else "did not converge"
    lines.append(f"Overlap resolution {status} after {layout.overlap.iterations} passes")

    return lines
