#!/usr/bin/env python3
"""
statemonctl - State Monitor command line tool

A lightweight CLI around the state monitor:
- Compare a state document against a baseline (statemonctl compare)
- Version info (statemonctl version)
"""

import argparse
import logging
import sys
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from state_monitor import __version__
from state_monitor.config import MonitorSettings, get_config
from state_monitor.monitor import StateMonitorError, create
from state_monitor.state import AppState

logger = logging.getLogger(__name__)

EXIT_CLEAN = 0
EXIT_DIRTY = 1
EXIT_ERROR = 2


class Colors:
    """ANSI color codes for terminal output."""

    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    RED = "\033[91m"
    RESET = "\033[0m"
    BOLD = "\033[1m"


def colorize(text: str, color: str) -> str:
    """Colorize text if stdout is a TTY."""
    if sys.stdout.isatty():
        return f"{color}{text}{Colors.RESET}"
    return text


def setup_logging(log_level: str) -> None:
    """
    Setup logging configuration.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )


def load_document(path: str) -> Any:
    """Load a JSON or YAML document."""
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def cmd_compare(args, config: MonitorSettings) -> int:
    """
    Compare a state document against a baseline document.

    Args:
        args: Parsed command line arguments
        config: Loaded settings supplying default ignored paths

    Returns:
        0 when clean, 1 when dirty, 2 on errors
    """
    logger.debug(f"Comparing {args.current} against {args.baseline}")

    try:
        current = load_document(args.current)
        if not isinstance(current, dict):
            raise StateMonitorError(f"{args.current} does not contain a mapping")

        monitor = create(AppState(current))
        if config.default_ignored_paths:
            monitor.ignore_props(config.default_ignored_paths)
        if config.ignore_file:
            monitor.ignore_props_from_file(config.ignore_file)
        if args.ignore_file:
            monitor.ignore_props_from_file(args.ignore_file)
        if args.ignore:
            monitor.ignore_props(args.ignore)

        monitor.set_default_state(load_document(args.baseline))
    except (OSError, UnicodeDecodeError, yaml.YAMLError, StateMonitorError) as e:
        print(colorize(f"✗ {e}", Colors.RED), file=sys.stderr)
        return EXIT_ERROR

    status = monitor.get_status()
    ignored = len(monitor.ignored_paths)
    monitor.destroy()

    if status.clean:
        print(f"{colorize('[CLEAN]', Colors.GREEN)} {args.current} matches {args.baseline} "
              f"({ignored} ignored paths)")
        return EXIT_CLEAN

    print(f"{colorize('[DIRTY]', Colors.YELLOW)} {args.current} differs from {args.baseline} "
          f"({ignored} ignored paths)")
    return EXIT_DIRTY


def cmd_version(args) -> int:
    """
    Print version information.

    Returns:
        Exit code (always 0)
    """
    print(f"statemonctl version {__version__}")
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for statemonctl."""
    parser = argparse.ArgumentParser(
        description="State Monitor command line tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  statemonctl compare saved.json current.json            # Exit 1 if dirty
  statemonctl compare saved.yaml current.yaml --ignore query.page
  statemonctl version                                    # Show version information

Environment variables:
  STATE_MONITOR_LOG_LEVEL               # Logging level (default: INFO)
  STATE_MONITOR_DEFAULT_IGNORED_PATHS   # JSON list of paths ignored by default
  STATE_MONITOR_IGNORE_FILE             # YAML file with an 'ignore' list
        """
    )
    parser.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override the configured logging level"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # compare command
    compare_parser = subparsers.add_parser(
        "compare",
        help="Check whether a state document differs from a baseline"
    )
    compare_parser.add_argument("baseline", help="Baseline (clean) JSON/YAML document")
    compare_parser.add_argument("current", help="Current state JSON/YAML document")
    compare_parser.add_argument(
        "--ignore",
        action="append",
        default=[],
        metavar="PATH",
        help="Field path to ignore, e.g. 'filters[0].updated_at' (repeatable)"
    )
    compare_parser.add_argument(
        "--ignore-file",
        default=None,
        help="YAML file with an 'ignore' list of field paths"
    )

    # version command
    subparsers.add_parser(
        "version",
        help="Show version information"
    )

    return parser


def main(argv: Optional[list] = None) -> int:
    """Main entry point for statemonctl CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        config = get_config()
    except ValidationError as e:
        print(colorize(f"✗ Invalid configuration: {e}", Colors.RED), file=sys.stderr)
        return EXIT_ERROR

    setup_logging(args.log_level or config.log_level)

    if not args.command:
        parser.print_help()
        return 0

    # Dispatch to command handlers
    if args.command == "compare":
        return cmd_compare(args, config)
    elif args.command == "version":
        return cmd_version(args)
    else:
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
