"""CLI for automaton-layout."""

import argparse
import sys
from pathlib import Path

from .graph import MalformedGraphError, load_automaton
from .layout import LayoutConfig, compute_levels, layout_automaton
from .visualize import generate_html, generate_json, generate_summary


def load_config(config_path: Path) -> dict:
    """Load configuration from YAML file.

    Args:
        config_path: Path to the YAML config file.

    Returns:
        Dictionary of configuration values.
    """
    try:
        import yaml

        with open(config_path) as f:
            return yaml.safe_load(f) or {}
    except ImportError as err:
        raise ImportError("PyYAML required for config files: pip install pyyaml") from err


def add_common_args(parser: argparse.ArgumentParser) -> None:
    """Add common arguments shared between subcommands."""
    parser.add_argument("input", type=Path, help="Automaton description (.json, .yaml)")


def resolve_layout_config(args: argparse.Namespace) -> tuple[LayoutConfig, dict]:
    """Build the layout config from --config and command line overrides.

    Returns:
        Tuple of (layout config, raw config file contents).
    """
    config = load_config(args.config) if args.config else {}
    layout_config = LayoutConfig.from_mapping(config.get("layout"))

    if getattr(args, "seed", None) is not None:
        layout_config.seed = args.seed
    if getattr(args, "no_jitter", False):
        layout_config.jitter_fraction = 0.0

    return layout_config, config


def load_input(args: argparse.Namespace):
    """Load the automaton, printing the error instead of a traceback."""
    print(f"Loading {args.input}...")
    try:
        automaton = load_automaton(args.input)
    except FileNotFoundError:
        print(f"ERROR: {args.input} not found")
        return None
    except (MalformedGraphError, OSError) as err:
        print(f"ERROR: {err}")
        return None

    print(
        f"Found {len(automaton.states)} states, {len(automaton.transitions)} transitions, "
        f"{len(automaton.self_loops)} self-loops"
    )
    if automaton.states and automaton.initial_state is None:
        print("Warning: no start state, laying out around the origin", file=sys.stderr)
    return automaton


def cmd_layout(args: argparse.Namespace, parser: argparse.ArgumentParser) -> int:
    """Run the layout subcommand."""
    try:
        layout_config, config = resolve_layout_config(args)
    except ValueError as err:
        parser.error(str(err))

    if args.output is None:
        args.output = Path(config.get("output", "results"))
    args.output = args.output.resolve()
    args.output.mkdir(parents=True, exist_ok=True)

    automaton = load_input(args)
    if automaton is None:
        return 1

    layout = layout_automaton(automaton, layout_config)

    generate_json(layout, args.output / "layout.json")
    print("Wrote layout.json")
    if not args.no_html:
        generate_html(layout, args.output / "layout.html", layout_config)
        print("Wrote layout.html")

    print()
    for line in generate_summary(layout):
        print(line)
    if not layout.overlap.converged:
        print(
            "Warning: overlap resolution hit the iteration cap, some states may overlap",
            file=sys.stderr,
        )
    return 0


def cmd_levels(args: argparse.Namespace, parser: argparse.ArgumentParser) -> int:
    """Print the longest-path level of every state."""
    automaton = load_input(args)
    if automaton is None:
        return 1

    states_by_level, _, max_level = compute_levels(automaton)
    for level in range(max_level + 1):
        states = states_by_level.get(level, [])
        if not states:
            continue
        marked = []
        for name in states:
            state = automaton.states[name]
            flags = ("->" if state.is_initial else "") + ("*" if state.is_final else "")
            marked.append(f"{flags}{name}")
        print(f"{level}: {' '.join(marked)}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for automaton-layout CLI."""
    parser = argparse.ArgumentParser(description="Lay out finite-state automaton diagrams")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    layout_parser = subparsers.add_parser(
        "layout",
        help="Compute positions and arrow routes, write JSON and HTML",
    )
    add_common_args(layout_parser)
    layout_parser.add_argument("--config", type=Path, help="Path to YAML config file")
    layout_parser.add_argument(
        "--output",
        type=Path,
        help="Output directory (default: results)",
    )
    layout_parser.add_argument("--seed", type=int, help="Seed for the placement jitter")
    layout_parser.add_argument(
        "--no-jitter",
        action="store_true",
        help="Disable radial jitter for a fully deterministic layout",
    )
    layout_parser.add_argument(
        "--no-html",
        action="store_true",
        help="Only write layout.json",
    )

    levels_parser = subparsers.add_parser(
        "levels",
        help="Print the longest-path level of every state",
    )
    add_common_args(levels_parser)

    args = parser.parse_args(argv)

    if args.command == "layout":
        return cmd_layout(args, layout_parser)
    elif args.command == "levels":
        return cmd_levels(args, levels_parser)
    else:
        # No subcommand provided - show help
        parser.print_help()
        return 0


if __name__ == "__main__":
    sys.exit(main())
