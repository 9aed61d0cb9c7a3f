"""
Degrees of Separation CLI - Find how two film people are connected.

Usage:
    degrees amitabh-bachchan robert-de-niro
    degrees amitabh-bachchan robert-de-niro --max-depth 4 --timeout 120
    degrees amitabh-bachchan robert-de-niro --workers 1 --verbose

People are given by their Moviebuff identifiers (the last part of
their moviebuff.com URL).
"""

from __future__ import annotations

import argparse
import logging
import sys

from degrees.config import (
    LOG_LEVEL,
    SEARCH_MAX_DEPTH,
    SEARCH_MAX_EXPANDED,
    SEARCH_TIMEOUT,
    SEARCH_WORKERS,
)
from degrees.errors import SearchError
from degrees.graph import SeparationSearch, format_result


def _bound(value: str) -> int | None:
    """Parse a non-negative int where 0 means unbounded."""
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {number}")
    return number or None


def _seconds(value: str) -> float | None:
    """Parse a non-negative number of seconds where 0 means no deadline."""
    number = float(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {number:g}")
    return number or None


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Find the degrees of separation between two film people",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    parser.add_argument("source", help="Moviebuff identifier of the first person")
    parser.add_argument("target", help="Moviebuff identifier of the second person")
    parser.add_argument(
        "--max-depth",
        type=_bound,
        default=SEARCH_MAX_DEPTH,
        help=f"Maximum movie hops to explore, 0 for unbounded (default: {SEARCH_MAX_DEPTH})",
    )
    parser.add_argument(
        "--max-expanded",
        type=_bound,
        default=SEARCH_MAX_EXPANDED,
        help="Maximum people to expand, 0 for unbounded (default: unbounded)",
    )
    parser.add_argument(
        "--timeout",
        type=_seconds,
        default=SEARCH_TIMEOUT,
        help="Give up after this many seconds, 0 for no deadline (default: no deadline)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=SEARCH_WORKERS,
        help=f"Parallel movie fetches per person (default: {SEARCH_WORKERS})",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    # Set up logging
    log_level = logging.DEBUG if args.verbose else LOG_LEVEL
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    source = args.source.strip()
    target = args.target.strip()
    if not source or not target:
        print("Error: source and target identifiers are required.", file=sys.stderr)
        return 2
    if args.workers < 1:
        print("Error: --workers must be at least 1.", file=sys.stderr)
        return 2

    with SeparationSearch(
        max_depth=args.max_depth,
        max_expanded=args.max_expanded,
        timeout=args.timeout,
        max_workers=args.workers,
    ) as search:
        try:
            result = search.find(source, target)
        except SearchError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        except KeyboardInterrupt:
            print("\n\nSearch interrupted by user")
            return 130  # Standard exit code for Ctrl+C

        print()
        print(format_result(result))

        stats = search.get_stats()
        logging.getLogger(__name__).info(
            f"Expanded {stats.get('expanded', 0)} people in {stats.get('elapsed_seconds', 0)}s, "
            f"cache: {stats['cache']}"
        )

    return 0


if __name__ == "__main__":
    sys.exit(main())
