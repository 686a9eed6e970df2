#!/usr/bin/env python3
"""CLI interface for lstodo."""

import argparse
from pathlib import Path

from common.env import env
from common.logger import error, get_logger, setup_logging
from present.printer import Printer
from present.sorting import SortKey, sort_matches

from .engine import AnnotationEngine
from .errors import GitError, PatternError
from .matcher import LineMatcher
from .revisions import RevisionStore

logger = get_logger(__name__)


def cmd_scan(args):
    """Scan a directory for TODO markers and print them.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 for runtime failures, 2 for bad input)
    """
    if not args.dir.is_dir():
        error(f"{args.dir} is not a directory")
        return 2
    root = args.dir.resolve()

    try:
        sort_key = SortKey(args.sort)
    except ValueError:
        error(f"Unknown sort key {args.sort!r}")
        return 2

    try:
        matcher = LineMatcher.compile(args.pattern) if args.pattern else LineMatcher.compile()
    except PatternError as e:
        error(str(e))
        return 2

    try:
        store = RevisionStore.open(root)
        matches = AnnotationEngine(root, matcher, store).run()
        matches = sort_matches(matches, sort_key, args.reverse, store)
        Printer(store, root, oneline=args.oneline).print(matches)
    except (GitError, OSError) as e:
        logger.debug("Scan failed", exc_info=True)
        error(f"Scan failed: {e}")
        return 1

    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lstodo",
        description="List TODO markers in a directory tree, annotated with git history",
    )
    parser.add_argument(
        "-d",
        "--dir",
        type=Path,
        default=env.scan_root(),
        help="Directory to scan (default: $LSTODO_ROOT or the current directory)",
    )
    parser.add_argument(
        "-s",
        "--sort",
        choices=[key.value for key in SortKey],
        default=env.default_sort(),
        help="Sort by first commit (fc), last commit (lc) or last modification (lm)",
    )
    parser.add_argument(
        "-r",
        "--reverse",
        action="store_true",
        help="Reverse the output order",
    )
    parser.add_argument(
        "-p",
        "--pattern",
        action="append",
        default=None,
        help="Regular expression to match; repeatable (default: comment TODO markers)",
    )
    parser.add_argument(
        "--oneline",
        action="store_true",
        help="Print one line per match",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show debug logging",
    )
    parser.set_defaults(func=cmd_scan)
    return parser


def main(argv: list[str] | None = None):
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(level="DEBUG" if args.verbose else None)
    return args.func(args)


if __name__ == "__main__":
    exit(main())
