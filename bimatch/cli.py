"""Command-line interface for bimatch."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from itertools import zip_longest
from pathlib import Path
from time import perf_counter
from typing import Any, List, Optional

from bimatch.config import MATCHER_CONFIG
from bimatch.io import load_graph
from bimatch.logging import get_logger, set_global_log_level
from bimatch.matcher import BipartiteMatcher

logger = get_logger(__name__)


def _format_table(
    headers: List[str],
    rows: List[List[str]],
    min_width: int = 8,
) -> str:
    """Format data as a simple ASCII table.

    Args:
        headers: Column headers
        rows: Data rows
        min_width: Minimum column width

    Returns:
        Formatted table string, empty when there are no rows.
    """
    if not rows:
        return ""

    all_data = [headers] + rows
    col_widths = []
    for col_idx in range(len(headers)):
        max_width = max(len(str(row[col_idx])) for row in all_data)
        col_widths.append(max(max_width, min_width))

    def format_row(row_data: List[Any]) -> str:
        return "   " + " | ".join(
            f"{str(item):<{col_widths[i]}}" for i, item in enumerate(row_data)
        )

    lines = [format_row(headers)]
    lines.append("   " + "-+-".join("-" * width for width in col_widths))
    for row in rows:
        lines.append(format_row(row))
    return "\n".join(lines)


def _format_duration(seconds: float) -> str:
    """Return a concise human-readable duration string.

    Examples:
        0.123 -> "123.0 ms"; 1.234 -> "1.23 s"; 75.2 -> "1m 15.2s".
    """
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f} ms"
    if seconds < 60.0:
        return f"{seconds:.2f} s"
    minutes = int(seconds // 60)
    rem = seconds - minutes * 60
    return f"{minutes}m {rem:.1f}s"


def _plural(n: int, singular: str, plural: Optional[str] = None) -> str:
    """Return grammatically correct unit for count n."""
    if n == 1:
        return singular
    return plural or (singular + "s")


def _run_match(
    path: Path,
    results_path: Optional[Path] = None,
    stdout: bool = False,
) -> None:
    """Load ``path``, compute the matching and print the report.

    Args:
        path: Input file.
        results_path: Optional file receiving the JSON result.
        stdout: Also print the JSON result.
    """
    logger.info(f"Matching from: {path}")
    start = perf_counter()

    try:
        result = BipartiteMatcher.from_file(path).solve()

        for line in result.lines():
            print(line)

        if results_path is not None or stdout:
            json_str = json.dumps(result.to_dict(), indent=2)
            if results_path is not None:
                results_path.parent.mkdir(parents=True, exist_ok=True)
                logger.info(f"Writing results to: {results_path}")
                results_path.write_text(json_str)
            if stdout:
                print(json_str)

        logger.info(f"Matching completed in {_format_duration(perf_counter() - start)}")

    except FileNotFoundError:
        logger.error(f"Input file not found: {path}")
        print(f"ERROR: Input file not found: {path}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        logger.error(f"Failed to compute matching: {type(e).__name__}: {e}")
        print(
            f"ERROR: Failed to compute matching: {type(e).__name__}: {e}",
            file=sys.stderr,
        )
        sys.exit(1)


def _inspect_input(path: Path) -> None:
    """Validate ``path`` and print a summary of its graph."""
    logger.info(f"Inspecting input from: {path}")

    try:
        graph = load_graph(path)
    except FileNotFoundError:
        logger.error(f"Input file not found: {path}")
        print(f"ERROR: Input file not found: {path}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        logger.error(f"Failed to inspect input: {type(e).__name__}: {e}")
        print(
            f"ERROR: Failed to inspect input: {type(e).__name__}: {e}",
            file=sys.stderr,
        )
        sys.exit(1)

    half = graph.node_count // 2
    edge_count = len(graph.edges)
    print(f"Input: {path}")
    print(f"   Nodes: {graph.node_count} ({half} per side)")
    print(f"   Edges: {edge_count} {_plural(edge_count, 'edge')}")

    rows = [
        [str(i), left, str(i + half), right]
        for i, (left, right) in enumerate(
            zip_longest(graph.left_names, graph.right_names, fillvalue=""), start=1
        )
    ]
    print(_format_table(["#", "Left", "#", "Right"], rows, min_width=2))


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``bimatch`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="bimatch",
        description="Compute maximum bipartite matchings with blocking flows.",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Only log warnings and errors"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
        metavar="{match,inspect}",
        help="Available commands",
    )

    match_parser = subparsers.add_parser("match", help="Compute a maximum matching")
    match_parser.add_argument(
        "input",
        type=Path,
        nargs="?",
        default=Path(MATCHER_CONFIG.default_input),
        help=f"Path to input file (default: {MATCHER_CONFIG.default_input})",
    )
    match_parser.add_argument(
        "--results",
        "-r",
        type=Path,
        default=None,
        help="Export the matching as JSON to this file",
    )
    match_parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print the JSON result to stdout",
    )

    inspect_parser = subparsers.add_parser(
        "inspect", help="Validate an input file and summarize it"
    )
    inspect_parser.add_argument("input", type=Path, help="Path to input file")

    effective_args = sys.argv[1:] if argv is None else argv

    # If no arguments are provided, show help and exit cleanly
    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    if args.verbose:
        set_global_log_level(logging.DEBUG)
        logger.debug("Debug logging enabled")
    elif args.quiet:
        set_global_log_level(logging.WARNING)
    else:
        set_global_log_level(logging.INFO)

    if args.command == "match":
        _run_match(args.input, results_path=args.results, stdout=args.stdout)
    elif args.command == "inspect":
        _inspect_input(args.input)


if __name__ == "__main__":
    main()
